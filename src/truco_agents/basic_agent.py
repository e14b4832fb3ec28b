from truco.hand_analyzer import analyze_hand
from truco.strategy import suggest_play
from .base_agent import BaseTrucoAgent


class BasicAgent(BaseTrucoAgent):
    """Rule-of-thumb player: no probabilities, no opponent memory."""

    def __init__(self, seed: int = None, name: str = "Basic Agent", accept_strength: int = 50):
        super().__init__(seed, name)
        self.accept_strength = accept_strength

    def decide_action(self, view):
        return suggest_play(view['cards'], view['vira'], view['opponent_card'], view['trick'])

    def respond_truco(self, view) -> bool:
        # Last card already on the table
        if not view['cards']:
            return True
        return analyze_hand(view['cards'], view['vira']).strength >= self.accept_strength
