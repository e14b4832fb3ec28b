from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class EngineConfig:
    """
    Decision engine configuration

    ---- Probability estimates ----
    MIN_WIN_PROBABILITY:   Floor for the reported win probability. Never report certain defeat.
    MAX_WIN_PROBABILITY:   Ceiling for the reported win probability. Never report certain victory.
    MAX_TRUCO_PROBABILITY: Ceiling for the "escalating is right" estimate.
    MAX_BLUFF_PROBABILITY: Ceiling for the "opponent is bluffing" estimate.
    STRONG_CARD_WEIGHT:    Fraction of the opponent-holds-a-strong-card estimate taken off the win probability.

    ---- Strategy execution ----
    BLUFF_CHANCE:    How often the bluff strategy calls truco instead of playing a card.
    MAX_TRUCO_CALLS: The aggressive strategy stops raising once this many calls were made this hand.

    ---- Learning ----
    AGGRESSIVENESS_STEP: Added to an opponent's aggressiveness for every round they saw an escalation.

    ---- Agents ----
    TRUCO_ACCEPT_THRESHOLD: Advisor agents accept an escalation at or above this win probability.
    """

    MIN_WIN_PROBABILITY:   float = 0.05
    MAX_WIN_PROBABILITY:   float = 0.95
    MAX_TRUCO_PROBABILITY: float = 0.9
    MAX_BLUFF_PROBABILITY: float = 0.8
    STRONG_CARD_WEIGHT:    float = 0.4

    BLUFF_CHANCE:    float = 0.3
    MAX_TRUCO_CALLS: int   = 2

    AGGRESSIVENESS_STEP: int = 2

    TRUCO_ACCEPT_THRESHOLD: float = 0.4

    # Factory helpers
    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "EngineConfig":
        cfg = cls()
        if overrides:
            for k, v in overrides.items():
                if hasattr(cfg, k):
                    setattr(cfg, k, v)
        return cfg

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
