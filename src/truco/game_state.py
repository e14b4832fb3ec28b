import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from truco.cards import Card, InvalidInputError, ensure_cards

if TYPE_CHECKING:
    from truco.profile_store import OpponentProfile


WINNERS = ('player', 'opponent')


@dataclass(frozen=True)
class GameHistoryEntry:
    """One completed round, seen from the advised player's side."""
    round: int
    player_card: Card
    opponent_card: Card
    winner: str                 # player / opponent
    truco_called: bool = False
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if self.winner not in WINNERS:
            raise InvalidInputError(f"Undefined winner '{self.winner}'")
        ensure_cards([self.player_card, self.opponent_card])

    @property
    def opponent_won(self) -> bool:
        return self.winner == 'opponent'


@dataclass
class GameState:
    player_cards: list[Card]
    vira: Card
    opponent_profile: 'OpponentProfile'
    opponent_id: str = 'default'
    table_cards: list[Card] = field(default_factory=list)
    current_round: int = 1
    player_score: int = 0
    opponent_score: int = 0
    truco_calls: int = 0
    history: list[GameHistoryEntry] = field(default_factory=list)

    @property
    def score_diff(self) -> int:
        return self.player_score - self.opponent_score

    def record_round(self, entry: GameHistoryEntry):
        """Appends a finished round. The engine never calls this."""
        if not isinstance(entry, GameHistoryEntry):
            raise InvalidInputError(f"Expected a GameHistoryEntry, got {entry!r}")
        self.history.append(entry)


def create_game_state(player_cards, vira: Card, store, opponent_id: str = 'default', **kwargs) -> GameState:
    """
        Build a fresh state for one hand, holding a snapshot of the opponent's profile.

        Args:
            player_cards: The advised player's cards as Card objects. Use parse_cards for strings.
            vira (Card): The face-up card.
            store (ProfileStore): Where the opponent's profile is read from.
            opponent_id (str): Key of the opponent in the store.
            **kwargs: Any other GameState field, such as scores or table cards.

        Returns:
            GameState: The new state.
    """
    return GameState(
        player_cards=ensure_cards(player_cards),
        vira=vira,
        opponent_profile=store.get_profile(opponent_id),
        opponent_id=opponent_id,
        **kwargs
    )
