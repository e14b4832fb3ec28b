from dataclasses import dataclass
from typing import ClassVar, Union

from truco.cards import Card


@dataclass(frozen=True)
class PlayDecision:
    card: Card
    confidence: int
    reasoning: str
    action: ClassVar[str] = 'play'

    @property
    def card_to_play(self) -> Card:
        return self.card


@dataclass(frozen=True)
class TrucoDecision:
    confidence: int
    reasoning: str
    action: ClassVar[str] = 'truco'
    card_to_play: ClassVar[Card] = None


@dataclass(frozen=True)
class PassDecision:
    confidence: int
    reasoning: str
    action: ClassVar[str] = 'pass'
    card_to_play: ClassVar[Card] = None


Decision = Union[PlayDecision, TrucoDecision, PassDecision]

ACTIONS = ('play', 'truco', 'pass')
