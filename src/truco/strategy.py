"""
Adaptive Truco decision engine.

Each call to decide() reads the game state, estimates probabilities, picks a
strategy class and turns it into exactly one Decision:

  1. aggressive: likely win against a passive opponent, raise or lead strong
  2. defensive:  likely loss against an aggressive opponent, save cards
  3. bluff:      far behind against a conservative opponent, sometimes raise
  4. adaptive:   everything else, weigh probabilities and the opponent's style

No state is kept between calls. The random source for bluffing is injected.
"""

import logging
from random import Random

from truco.cards import Card, ensure_cards, ensure_vira, rank_value
from truco.config import EngineConfig
from truco.decision import PlayDecision, TrucoDecision
from truco.hand_analyzer import (
    analyze_hand,
    cheapest_winning_card,
    median_card,
    upper_third_card,
    validate_hand,
    weakest_card,
)
from truco.probability import ProbabilityEngine, ProbabilityMatrix

logger = logging.getLogger(__name__)

STRATEGIES = ('aggressive', 'defensive', 'bluff', 'adaptive')


def pct(probability: float) -> int:
    return round(probability * 100)


class DecisionEngine:
    def __init__(self, probability_engine: ProbabilityEngine = None, rng=None, config: EngineConfig = None):
        self.config = config or EngineConfig()
        self.probability_engine = probability_engine or ProbabilityEngine(self.config)
        self._random = rng if rng is not None else Random()

    # -------------------------- #
    #     STRATEGY SELECTION     #
    # -------------------------- #

    def select_strategy(self, game_state, probabilities: ProbabilityMatrix) -> str:
        win_probability = probabilities.win_probability
        profile = game_state.opponent_profile

        # Good hand against a passive opponent
        if win_probability > 0.7 and profile.aggressiveness < 40:
            return 'aggressive'

        # Weak hand against an aggressive opponent
        if win_probability < 0.4 and profile.aggressiveness > 70:
            return 'defensive'

        # Far behind against a conservative opponent
        if game_state.score_diff < -6 and profile.conservativeness > 60:
            return 'bluff'

        return 'adaptive'

    # -------------------------- #
    #        CORE DECISION       #
    # -------------------------- #

    def decide(self, game_state, opponent_card: Card = None):
        """
            Recommend one action for the advised player.

            Args:
                game_state (GameState): Current hand, vira, scores and opponent profile snapshot.
                opponent_card (Card): The card the opponent just played, if any.

            Returns:
                Decision: PlayDecision, TrucoDecision or PassDecision.
        """
        cards = validate_hand(game_state.player_cards)
        if opponent_card is not None:
            ensure_cards([opponent_card])
        ensure_vira(game_state.vira)
        ensure_cards(game_state.table_cards)

        probabilities = self.probability_engine.estimate(
            cards, game_state.vira, game_state.opponent_profile, game_state
        )
        strategy = self.select_strategy(game_state, probabilities)
        analysis = analyze_hand(cards, game_state.vira)

        if strategy == 'aggressive':
            decision = self._aggressive(game_state, analysis, probabilities)
        elif strategy == 'defensive':
            decision = self._defensive(game_state, probabilities)
        elif strategy == 'bluff':
            decision = self._bluff(game_state)
        else:
            decision = self._adaptive(game_state, probabilities, opponent_card)

        logger.debug(f"Strategy '{strategy}' chose {decision.action} ({decision.confidence}%): {decision.reasoning}")
        return decision

    def _aggressive(self, game_state, analysis, probabilities: ProbabilityMatrix):
        if probabilities.truco_probability > 0.6 and game_state.truco_calls < self.config.MAX_TRUCO_CALLS:
            return TrucoDecision(
                confidence=85,
                reasoning=f"Aggressive: strong hand ({analysis.strength}%) against a passive opponent, "
                          f"truco chance {pct(probabilities.truco_probability)}%. Time to raise."
            )

        card = analysis.strongest_card
        return PlayDecision(
            card=card,
            confidence=80,
            reasoning=f"Aggressive: leading with the strongest card {card} "
                      f"at {pct(probabilities.win_probability)}% win chance."
        )

    def _defensive(self, game_state, probabilities: ProbabilityMatrix):
        card = weakest_card(game_state.player_cards, game_state.vira)
        return PlayDecision(
            card=card,
            confidence=60,
            reasoning=f"Defensive: only {pct(probabilities.win_probability)}% win chance against an "
                      f"aggressive opponent. Saving cards with {card}."
        )

    def _bluff(self, game_state):
        if self._random.random() < self.config.BLUFF_CHANCE:
            return TrucoDecision(
                confidence=70,
                reasoning=f"Bluff: behind by {-game_state.score_diff} points against a conservative "
                          f"opponent. Calling truco to push them out."
            )

        card = median_card(game_state.player_cards, game_state.vira)
        return PlayDecision(
            card=card,
            confidence=55,
            reasoning=f"Bluff setup: behind by {-game_state.score_diff} points. Playing {card} "
                      f"and keeping a raise for later."
        )

    def _adaptive(self, game_state, probabilities: ProbabilityMatrix, opponent_card: Card = None):
        win_probability = probabilities.win_probability
        confidence = pct(win_probability)

        if win_probability > 0.65 and probabilities.truco_probability > 0.5:
            return TrucoDecision(
                confidence=confidence,
                reasoning=f"Adaptive: {confidence}% win chance and {pct(probabilities.truco_probability)}% "
                          f"truco chance. Calculated raise."
            )

        card = self.select_card(game_state, opponent_card)
        if opponent_card is not None and rank_value(card, game_state.vira) > rank_value(opponent_card, game_state.vira):
            reason = f"cheapest card that beats {opponent_card}"
        else:
            reason = f"opening against aggressiveness {game_state.opponent_profile.aggressiveness:.0f}, " \
                     f"conservativeness {game_state.opponent_profile.conservativeness:.0f}"
        return PlayDecision(
            card=card,
            confidence=confidence,
            reasoning=f"Adaptive: {confidence}% win chance, score {game_state.score_diff:+d}. "
                      f"Playing {card}, {reason}."
        )

    def select_card(self, game_state, opponent_card: Card = None) -> Card:
        """Card choice of the adaptive strategy, usable on its own when a raise is not possible."""
        cards = validate_hand(game_state.player_cards)
        vira = game_state.vira
        profile = game_state.opponent_profile

        # Answer the opponent as cheaply as possible
        if opponent_card is not None:
            card = cheapest_winning_card(cards, vira, opponent_card)
            if card is not None:
                return card

        if profile.aggressiveness > 60:
            return median_card(cards, vira)

        # Conservative opponents fold to early strength
        if profile.conservativeness > 60:
            return upper_third_card(cards, vira)

        return median_card(cards, vira)


def suggest_play(cards, vira: Card, opponent_card: Card = None, round_number: int = 1):
    """
        Rule-of-thumb advice without probabilities or opponent modelling.

        Args:
            cards: The player's cards, at least one.
            vira (Card): The face-up card.
            opponent_card (Card): The card the opponent just played, if any.
            round_number (int): Which trick of the hand this is, starting at 1.

        Returns:
            Decision: The suggested action.
    """
    cards = validate_hand(cards)
    ensure_vira(vira)
    analysis = analyze_hand(cards, vira)

    # Responding to the opponent's card
    if opponent_card is not None:
        ensure_cards([opponent_card])
        card = cheapest_winning_card(cards, vira, opponent_card)
        if card is not None:
            return PlayDecision(
                card=card,
                confidence=80,
                reasoning=f"Playing {card} to take the round with the cheapest winning card."
            )
        card = weakest_card(cards, vira)
        return PlayDecision(
            card=card,
            confidence=60,
            reasoning=f"Nothing beats {opponent_card}. Throwing away {card}."
        )

    # Leading
    if analysis.strength > 75 and round_number == 1:
        highlight = 'Holding a manilha!' if analysis.has_manilha else 'High cards!'
        return TrucoDecision(
            confidence=90,
            reasoning=f"Very strong hand ({analysis.strength}%). {highlight} Time for truco."
        )

    if analysis.strength > 60:
        card = median_card(cards, vira)
        return PlayDecision(
            card=card,
            confidence=70,
            reasoning=f"Good hand ({analysis.strength}%). Testing the opponent with {card}."
        )

    card = weakest_card(cards, vira)
    return PlayDecision(
        card=card,
        confidence=50,
        reasoning=f"Weak hand ({analysis.strength}%). Playing safe with {card}."
    )
