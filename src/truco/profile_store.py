import logging
from copy import deepcopy
from dataclasses import dataclass, field

from truco.cards import Card, InvalidInputError, rank_value
from truco.config import EngineConfig
from truco.decision import ACTIONS
from truco.game_state import GameHistoryEntry

logger = logging.getLogger(__name__)


@dataclass
class GamePattern:
    situation: str          # strong_position / weak_position / equal_position
    action: str             # play / truco / pass
    frequency: int = 1
    success_rate: float = 0.0


@dataclass
class OpponentProfile:
    """Per-opponent statistics accumulated over rounds played."""
    opponent_id: str
    name: str = ''
    aggressiveness: float = 50
    bluff_frequency: float = 30
    conservativeness: float = 50
    win_rate: float = 0.5
    total_games: int = 0
    patterns: list[GamePattern] = field(default_factory=list)

    def __post_init__(self):
        if not self.name:
            self.name = f"Opponent {self.opponent_id}"

    def find_pattern(self, situation: str, action: str):
        for pattern in self.patterns:
            if pattern.situation == situation and pattern.action == action:
                return pattern
        return None


def categorize_situation(entry: GameHistoryEntry, vira: Card = None) -> str:
    """Which position the opponent was in, judged by the two cards played."""
    player_value = rank_value(entry.player_card, vira)
    opponent_value = rank_value(entry.opponent_card, vira)

    if opponent_value > player_value:
        return 'strong_position'
    if opponent_value < player_value:
        return 'weak_position'
    return 'equal_position'


class ProfileStore:
    """
    Session-scoped opponent profiles, one per opponent id.

    Reads hand out deep copies so a decision works on a stable snapshot.
    update_profile is the only way to change a stored profile.
    """

    def __init__(self, config: EngineConfig = None):
        self.config = config or EngineConfig()
        self._profiles: dict[str, OpponentProfile] = {}

    def __contains__(self, opponent_id):
        return opponent_id in self._profiles

    def __len__(self):
        return len(self._profiles)

    def _get_or_create(self, opponent_id: str) -> OpponentProfile:
        profile = self._profiles.get(opponent_id)
        if profile is None:
            profile = OpponentProfile(opponent_id)
            self._profiles[opponent_id] = profile
            logger.debug(f"Created default profile for opponent '{opponent_id}'")
        return profile

    def get_profile(self, opponent_id: str) -> OpponentProfile:
        return deepcopy(self._get_or_create(opponent_id))

    def profiles(self) -> list[OpponentProfile]:
        return [deepcopy(profile) for profile in self._profiles.values()]

    def update_profile(self, opponent_id: str, entry: GameHistoryEntry, decision, vira: Card = None) -> OpponentProfile:
        """
            Learn from one completed round.

            Args:
                opponent_id (str): Key of the opponent.
                entry (GameHistoryEntry): The round that just finished.
                decision (Decision): What was recommended to the player that round.
                vira (Card): The vira of the hand, if known, for classifying the situation.

            Returns:
                OpponentProfile: A snapshot of the updated profile.
        """
        # Reject before touching anything stored
        if not isinstance(entry, GameHistoryEntry):
            raise InvalidInputError(f"Expected a GameHistoryEntry, got {entry!r}")
        action = getattr(decision, 'action', None)
        if action not in ACTIONS:
            raise InvalidInputError(f"Undefined decision action '{action}'")

        profile = self._get_or_create(opponent_id)
        outcome = 1 if entry.opponent_won else 0

        profile.total_games += 1
        n = profile.total_games
        profile.win_rate = (profile.win_rate * (n - 1) + outcome) / n

        if entry.truco_called:
            profile.aggressiveness = min(100, profile.aggressiveness + self.config.AGGRESSIVENESS_STEP)

        situation = categorize_situation(entry, vira)
        pattern = profile.find_pattern(situation, action)
        if pattern:
            pattern.frequency += 1
            pattern.success_rate = (pattern.success_rate + outcome) / 2
        else:
            profile.patterns.append(GamePattern(situation, action, frequency=1, success_rate=outcome))

        logger.info(
            f"Updated profile '{opponent_id}': games={profile.total_games} "
            f"win_rate={profile.win_rate:.2f} aggressiveness={profile.aggressiveness}"
        )
        return deepcopy(profile)
