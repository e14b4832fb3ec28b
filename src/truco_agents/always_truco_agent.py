from truco.decision import TrucoDecision
from .base_agent import BaseTrucoAgent


class AlwaysTrucoAgent(BaseTrucoAgent):
    def __init__(self, seed: int = None, name: str = "Always Truco Agent"):
        super().__init__(seed, name)

    def decide_action(self, view):
        return TrucoDecision(confidence=100, reasoning="Always raise.")
