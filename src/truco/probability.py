"""
Probability estimates for one decision point.

Everything here is derived from the hand, the vira, the cards already seen
and the opponent's profile. Nothing is stored between calls.
"""

import logging
from dataclasses import dataclass, field

from truco.cards import Card, MANILHA_BASE, ensure_cards, ensure_vira, full_deck, rank_value
from truco.config import EngineConfig
from truco.hand_analyzer import analyze_hand

logger = logging.getLogger(__name__)

STRONG_CARD_VALUE = 8   # 'A' and up


@dataclass(frozen=True)
class ProbabilityMatrix:
    win_probability: float
    truco_probability: float
    bluff_probability: float
    card_distribution: dict = field(default_factory=dict)


def remaining_cards(player_cards, table_cards, vira: Card = None) -> list[Card]:
    """The deck minus every card the player can see."""
    used = set(player_cards) | set(table_cards)
    if vira is not None:
        used.add(vira)
    return [card for card in full_deck() if card not in used]


def strength_tier(value: int) -> str:
    if value >= MANILHA_BASE:
        return 'manilha'
    if value >= STRONG_CARD_VALUE:
        return 'alta'
    if value >= 5:
        return 'media'
    return 'baixa'


def card_distribution(cards, vira: Card = None) -> dict:
    """Counts per strength tier. Tiers with no cards are left out."""
    distribution = {}
    for card in cards:
        tier = strength_tier(rank_value(card, vira))
        distribution[tier] = distribution.get(tier, 0) + 1
    return distribution


class ProbabilityEngine:
    def __init__(self, config: EngineConfig = None):
        self.config = config or EngineConfig()

    def opponent_adjustment(self, profile) -> float:
        adjustment = 1.0

        # Aggressive players raise a lot, be careful
        if profile.aggressiveness > 70:
            adjustment *= 0.9

        # Conservative players are predictable
        if profile.conservativeness > 70:
            adjustment *= 1.1

        # Experienced opponent
        if profile.win_rate > 0.7:
            adjustment *= 0.95

        return adjustment

    def opponent_strong_card_probability(self, remaining: list[Card], vira: Card, profile) -> float:
        if not remaining:
            return 0.0
        strong_cards = [card for card in remaining if rank_value(card, vira) >= STRONG_CARD_VALUE]
        base_probability = len(strong_cards) / len(remaining)
        return base_probability * (1 + profile.aggressiveness / 200)

    def truco_probability(self, strength: int, profile, game_state) -> float:
        probability = strength / 100

        # Push harder when losing
        if game_state.player_score < game_state.opponent_score:
            probability *= 1.2

        # Exploit a passive opponent
        if profile.aggressiveness < 30:
            probability *= 1.3

        return max(0.0, min(self.config.MAX_TRUCO_PROBABILITY, probability))

    def bluff_probability(self, profile, game_state) -> float:
        probability = profile.bluff_frequency / 100

        # Players who are behind bluff more
        if game_state.opponent_score < game_state.player_score:
            probability *= 1.4

        return max(0.0, min(self.config.MAX_BLUFF_PROBABILITY, probability))

    def estimate(self, player_cards, vira: Card, profile, game_state) -> ProbabilityMatrix:
        """
            Estimate how the current hand is likely to go.

            Args:
                player_cards: The advised player's cards, at least one.
                vira (Card): The face-up card, or None for the base hierarchy.
                profile (OpponentProfile): Snapshot of the opponent's profile.
                game_state (GameState): Scores and table cards.

            Returns:
                ProbabilityMatrix: Win, truco and bluff likelihoods plus the unseen card tiers.
        """
        ensure_vira(vira)
        table_cards = ensure_cards(game_state.table_cards)
        analysis = analyze_hand(player_cards, vira)
        remaining = remaining_cards(player_cards, table_cards, vira)

        win_probability = analysis.strength / 100
        win_probability *= self.opponent_adjustment(profile)

        strong_probability = self.opponent_strong_card_probability(remaining, vira, profile)
        win_probability *= 1 - strong_probability * self.config.STRONG_CARD_WEIGHT

        win_probability = max(self.config.MIN_WIN_PROBABILITY, min(self.config.MAX_WIN_PROBABILITY, win_probability))

        matrix = ProbabilityMatrix(
            win_probability=win_probability,
            truco_probability=self.truco_probability(analysis.strength, profile, game_state),
            bluff_probability=self.bluff_probability(profile, game_state),
            card_distribution=card_distribution(remaining, vira)
        )
        logger.debug(
            f"Estimated win={matrix.win_probability:.2f} truco={matrix.truco_probability:.2f} "
            f"bluff={matrix.bluff_probability:.2f} from {len(remaining)} unseen cards"
        )
        return matrix
