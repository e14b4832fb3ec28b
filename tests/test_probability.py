from random import Random

import pytest

from truco.cards import Card, InvalidCardError, full_deck, parse_cards, rank_value
from truco.config import EngineConfig
from truco.probability import ProbabilityEngine, card_distribution, remaining_cards
from truco.profile_store import OpponentProfile


@pytest.fixture
def engine():
    return ProbabilityEngine()


def estimate(engine, state):
    return engine.estimate(state.player_cards, state.vira, state.opponent_profile, state)


def test_default_profile_estimate(engine, make_state):
    state = make_state(['Ac', 'Kh', '3s'])
    matrix = estimate(engine, state)

    # 14 strong cards left out of 36, weighted by aggressiveness 50
    strong = 14 / 36 * 1.25
    assert matrix.win_probability == pytest.approx(0.6 * (1 - 0.4 * strong))
    assert matrix.truco_probability == pytest.approx(0.6)
    assert matrix.bluff_probability == pytest.approx(0.3)
    assert matrix.card_distribution == {'manilha': 4, 'alta': 10, 'media': 7, 'baixa': 15}


def test_score_adjustments(engine, make_state):
    behind = estimate(engine, make_state(['Ac', 'Kh', '3s'], player_score=2, opponent_score=5))
    assert behind.truco_probability == pytest.approx(0.72)
    assert behind.bluff_probability == pytest.approx(0.3)

    ahead = estimate(engine, make_state(['Ac', 'Kh', '3s'], player_score=5, opponent_score=2))
    assert ahead.truco_probability == pytest.approx(0.6)
    assert ahead.bluff_probability == pytest.approx(0.42)


def test_opponent_adjustment(engine):
    assert engine.opponent_adjustment(OpponentProfile('x')) == 1.0
    assert engine.opponent_adjustment(OpponentProfile('x', aggressiveness=80)) == pytest.approx(0.9)
    assert engine.opponent_adjustment(OpponentProfile('x', conservativeness=80)) == pytest.approx(1.1)
    assert engine.opponent_adjustment(OpponentProfile('x', win_rate=0.8)) == pytest.approx(0.95)
    assert engine.opponent_adjustment(
        OpponentProfile('x', aggressiveness=80, conservativeness=80, win_rate=0.8)
    ) == pytest.approx(0.9 * 1.1 * 0.95)


def test_passive_opponent_boosts_truco(engine, make_state):
    matrix = estimate(engine, make_state(['Ac', 'Kh', '3s'], OpponentProfile('x', aggressiveness=20)))
    assert matrix.truco_probability == pytest.approx(0.78)


def test_win_probability_upper_clamp(engine, make_state, vira):
    best = Card('Q', 'clubs')
    table = [c for c in full_deck() if rank_value(c, vira) >= 8 and c not in (best, vira)]
    state = make_state(['Qc'], OpponentProfile('x', conservativeness=80), table_cards=table)
    assert estimate(engine, state).win_probability == 0.95


def test_win_probability_lower_clamp(engine, make_state):
    state = make_state(['4d'], OpponentProfile('x', aggressiveness=80, win_rate=0.8))
    assert estimate(engine, state).win_probability == 0.05


def test_truco_and_bluff_ceilings(engine, make_state):
    profile = OpponentProfile('x', aggressiveness=10, bluff_frequency=90)
    matrix = estimate(engine, make_state(['Qc', 'Qh', 'Qs'], profile, player_score=3, opponent_score=1))
    assert matrix.truco_probability == 0.9
    assert matrix.bluff_probability == 0.8


def test_no_unseen_cards_left(engine, make_state, vira):
    table = [c for c in full_deck() if c not in (Card('Q', 'clubs'), vira)]
    matrix = estimate(engine, make_state(['Qc'], table_cards=table))
    assert matrix.card_distribution == {}
    assert matrix.win_probability == 0.95


def test_bounds_hold_for_random_situations(engine, make_state):
    rng = Random(11)
    deck = full_deck()
    for _ in range(200):
        vira_card, *hand = rng.sample(deck, 4)
        profile = OpponentProfile(
            'x',
            aggressiveness=rng.randint(0, 100),
            bluff_frequency=rng.randint(0, 100),
            conservativeness=rng.randint(0, 100),
            win_rate=rng.random()
        )
        state = make_state(
            [c.short for c in hand[:rng.randint(1, 3)]], profile, vira_card=vira_card,
            player_score=rng.randint(0, 11), opponent_score=rng.randint(0, 11)
        )
        matrix = estimate(engine, state)
        assert 0.05 <= matrix.win_probability <= 0.95
        assert 0 <= matrix.truco_probability <= 0.9
        assert 0 <= matrix.bluff_probability <= 0.8
        assert sum(matrix.card_distribution.values()) == 40 - len(state.player_cards) - 1


def test_remaining_cards_without_vira():
    hand = parse_cards(['Ac', 'Kh'])
    remaining = remaining_cards(hand, [Card.from_str('3s')])
    assert len(remaining) == 37
    assert card_distribution(remaining) == {'alta': 10, 'media': 11, 'baixa': 16}


def test_config_changes_clamps(make_state):
    engine = ProbabilityEngine(EngineConfig.from_dict({'MAX_WIN_PROBABILITY': 0.5, 'UNKNOWN': 1}))
    state = make_state(['Qc', 'Qh', 'Qs'])
    assert engine.estimate(state.player_cards, state.vira, state.opponent_profile, state).win_probability == 0.5


def test_estimate_rejects_malformed_context(engine, make_state):
    with pytest.raises(InvalidCardError):
        estimate(engine, make_state(['Ac', 'Kh'], vira_card='7h'))
    with pytest.raises(InvalidCardError):
        estimate(engine, make_state(['Ac', 'Kh'], table_cards=['Kd']))
    # No vira is fine, only the base hierarchy applies
    assert estimate(engine, make_state(['Ac', 'Kh'], vira_card=None)).win_probability > 0
