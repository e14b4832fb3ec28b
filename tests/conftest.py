"""
Shared pytest fixtures for the engine tests.

Cards are written in the short form used at the console ('Ac' = ace of clubs).
"""

import pytest

from truco.cards import Card, parse_cards
from truco.game_state import GameState
from truco.profile_store import OpponentProfile, ProfileStore


class FixedRandom:
    """Stands in for random.Random, always returns the same draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def vira():
    """Vira 7♥, so the manilhas are the queens."""
    return Card.from_str('7h')


@pytest.fixture
def store():
    return ProfileStore()


@pytest.fixture
def make_state(vira):
    """Build a GameState from short card strings and profile overrides."""
    def _make_state(hand, profile=None, vira_card=vira, **kwargs):
        profile = profile or OpponentProfile('rival')
        return GameState(
            player_cards=parse_cards(hand),
            vira=vira_card,
            opponent_profile=profile,
            opponent_id=profile.opponent_id,
            **kwargs
        )
    return _make_state


@pytest.fixture
def fixed_random():
    return FixedRandom
