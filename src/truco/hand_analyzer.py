import logging
from dataclasses import dataclass

from truco.cards import Card, InvalidInputError, MAX_RANK_VALUE, MANILHA_BASE, ensure_cards, rank_value

logger = logging.getLogger(__name__)


class EmptyHandError(InvalidInputError):
    """Raised when a hand with no cards reaches the analyzer or the engine."""
    pass


@dataclass(frozen=True)
class HandAnalysis:
    strength: int           # 0-100
    strongest_card: Card
    has_manilha: bool


def validate_hand(cards) -> list[Card]:
    cards = ensure_cards(cards)
    if not cards:
        logger.warning("Rejected an empty hand")
        raise EmptyHandError("Hand must hold at least one card")
    return cards


def analyze_hand(cards, vira: Card = None) -> HandAnalysis:
    """
        Summarize how favorable a hand is under the current vira.

        Args:
            cards: The cards in hand, at least one.
            vira (Card): The face-up card, or None for the base hierarchy.

        Returns:
            HandAnalysis: Strength 0-100, the strongest card and whether a manilha is held.
    """
    cards = validate_hand(cards)
    values = [rank_value(card, vira) for card in cards]

    mean_value = sum(values) / len(values)
    strength = round(100 * mean_value / MAX_RANK_VALUE)
    strength = max(0, min(100, strength))

    # max() keeps the first card on ties
    strongest_index = max(range(len(cards)), key=lambda i: values[i])

    return HandAnalysis(
        strength=strength,
        strongest_card=cards[strongest_index],
        has_manilha=any(value >= MANILHA_BASE for value in values)
    )


def strength_label(strength: int) -> str:
    if strength >= 80:
        return 'excellent'
    if strength >= 60:
        return 'good'
    if strength >= 40:
        return 'fair'
    return 'weak'


def sort_by_strength(cards, vira: Card = None) -> list[Card]:
    """Strongest first. Equal cards keep their input order."""
    return sorted(cards, key=lambda card: rank_value(card, vira), reverse=True)


def weakest_card(cards, vira: Card = None) -> Card:
    return min(cards, key=lambda card: rank_value(card, vira))


def median_card(cards, vira: Card = None) -> Card:
    ranked = sort_by_strength(cards, vira)
    return ranked[len(ranked) // 2]


def upper_third_card(cards, vira: Card = None) -> Card:
    ranked = sort_by_strength(cards, vira)
    return ranked[len(ranked) // 3]


def cheapest_winning_card(cards, vira: Card, opponent_card: Card):
    """Returns the lowest card that still beats the opponent's card, or None."""
    opponent_value = rank_value(opponent_card, vira)
    winning_cards = [card for card in cards if rank_value(card, vira) > opponent_value]
    if not winning_cards:
        return None
    return min(winning_cards, key=lambda card: rank_value(card, vira))
