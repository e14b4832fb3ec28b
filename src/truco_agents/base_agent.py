from random import Random

from truco.hand_analyzer import analyze_hand


class BaseTrucoAgent:
    def __init__(self, seed: int = None, name: str = "Base Agent"):
        self.name = name
        self.seed = None
        self._random = None
        self.init_seed(seed)

    def __repr__(self):
        return self.name

    def init_seed(self, seed: int):
        self.seed = seed
        self._random = Random(seed)

    def game_start(self, start_state):
        """
        Called when the match starts.
        Use this to reset anything kept between hands.
        """
        pass

    def decide_action(self, view):
        """
        Called when it is this agent's turn in a trick.
        Must return a PlayDecision, TrucoDecision or PassDecision.
        """
        raise NotImplementedError

    def fallback_card(self, view):
        """
        Called when this agent asked for truco but cannot raise right now.
        Must return a card from view['cards'].
        """
        return analyze_hand(view['cards'], view['vira']).strongest_card

    def respond_truco(self, view) -> bool:
        """Called when the opponent raises. True accepts, False runs from the hand."""
        return True

    def trick_ended(self, trick_result):
        """
        Called after both cards of a trick are on the table.
        Use this to update your opponent tendencies.
        """
        pass

    def hand_ended(self, hand_history):
        """Called at the very end of a hand."""
        pass
