import pytest

from truco.cards import full_deck, parse_cards
from truco.decision import PassDecision, PlayDecision, TrucoDecision
from truco.escalator import PaulistaEscalator
from truco.hand import InvalidActionError, TrucoHand
from truco.match import TrucoMatch
from truco.player import Player
from truco.profile_store import ProfileStore
from truco.seed_gen import derive_agent_seeds, derive_deck_seed, derive_seed, generate_game_seed
from truco_agents.advisor_agent import AdvisorAgent
from truco_agents.always_truco_agent import AlwaysTrucoAgent
from truco_agents.base_agent import BaseTrucoAgent
from truco_agents.basic_agent import BasicAgent


class ScriptedAgent(BaseTrucoAgent):
    """Returns queued decisions, then plays its first card."""

    def __init__(self, decisions=None, accept: bool = True, name: str = "Scripted Agent"):
        self.decisions = list(decisions or [])
        self.accept = accept
        self.tricks = []
        super().__init__(None, name)

    def decide_action(self, view):
        if self.decisions:
            return self.decisions.pop(0)
        return PlayDecision(card=view['cards'][0], confidence=50, reasoning="first card")

    def respond_truco(self, view) -> bool:
        return self.accept

    def trick_ended(self, trick_result):
        self.tricks.append(trick_result)


def stacked_deck(first, second, vira='7h'):
    top = parse_cards(first + second + [vira])
    return top + [card for card in full_deck() if card not in top]


def make_hand(first_agent, second_agent, deck, leader=0):
    players = [Player(0, first_agent, "A"), Player(1, second_agent, "B")]
    return TrucoHand(players, 1, leader, PaulistaEscalator(), deck), players


# -------------------------- #
#       STAKES AND SEEDS     #
# -------------------------- #

def test_paulista_ladder():
    escalator = PaulistaEscalator()
    assert [escalator.get_stakes(calls) for calls in range(6)] == [1, 3, 6, 9, 12, 12]
    assert escalator.get_stakes(-1) == 1
    assert escalator.can_raise(3)
    assert not escalator.can_raise(4)


def test_seeds_are_deterministic():
    assert generate_game_seed(42) == 42
    assert generate_game_seed(0) == 0
    assert generate_game_seed(-5) == 5
    assert 0 <= generate_game_seed() <= 0xFFFFFFFF
    assert derive_deck_seed(42) == derive_seed(42, 0)
    assert derive_agent_seeds(42, 2) == derive_agent_seeds(42, 2)
    assert len(set(derive_agent_seeds(42, 2))) == 2
    with pytest.raises(ValueError):
        derive_seed(-1, 0)


# -------------------------- #
#            HANDS           #
# -------------------------- #

def test_stronger_cards_win_in_two_tricks():
    deck = stacked_deck(['Qc', 'Qh', 'Qs'], ['4d', '4c', '4h'])
    first, second = ScriptedAgent(), ScriptedAgent()
    hand, players = make_hand(first, second, deck)
    hand.run_hand()

    assert str(hand.vira) == '7♥'
    assert hand.winner == 0
    assert hand.points == 1
    assert hand.trick_winners == [0, 0]
    assert [t['winner'] for t in first.tricks] == ['you', 'you']
    assert [t['winner'] for t in second.tricks] == ['opponent', 'opponent']
    assert len(players[0].cards) == 1
    assert (players[0].tricks_won, players[1].tricks_won) == (2, 0)


def test_accepted_truco_raises_stakes():
    deck = stacked_deck(['Qc', 'Qh', 'Qs'], ['4d', '4c', '4h'])
    hand, _ = make_hand(AlwaysTrucoAgent(), ScriptedAgent(accept=True), deck)
    hand.run_hand()

    assert hand.winner == 0
    assert hand.truco_calls == 1
    assert hand.points == 3
    assert [item['action'] for item in hand.hand_log][:3] == ['truco', 'accept', 'play']
    # The raiser cannot raise twice in a row, so it falls back to its strongest card
    assert hand.hand_log[2]['card'] == 'Qc'


def test_declined_truco_ends_hand():
    deck = stacked_deck(['4d', '4c', '4h'], ['Qc', 'Qh', 'Qs'])
    hand, _ = make_hand(AlwaysTrucoAgent(), ScriptedAgent(accept=False), deck)
    hand.run_hand()

    assert hand.winner == 0
    assert hand.points == 1
    assert [item['action'] for item in hand.hand_log] == ['truco', 'run']


def test_passing_gives_hand_away():
    deck = stacked_deck(['Qc', 'Qh', 'Qs'], ['4d', '4c', '4h'])
    run = PassDecision(confidence=10, reasoning="run")
    hand, _ = make_hand(ScriptedAgent([run]), ScriptedAgent(), deck)
    hand.run_hand()
    assert (hand.winner, hand.points) == (1, 1)


def test_unknown_decision_is_rejected():
    deck = stacked_deck(['Qc', 'Qh', 'Qs'], ['4d', '4c', '4h'])
    hand, _ = make_hand(ScriptedAgent(['play Qc']), ScriptedAgent(), deck)
    with pytest.raises(InvalidActionError):
        hand.run_hand()


def test_tied_trick_goes_to_next_decisive_trick():
    # Both threes tie, then the manilha decides
    deck = stacked_deck(['3c', 'Qc', '4h'], ['3h', '5d', 'Kc'])
    hand, _ = make_hand(ScriptedAgent(), ScriptedAgent(), deck)
    hand.run_hand()
    assert hand.trick_winners == [None, 0]
    assert hand.winner == 0


@pytest.mark.parametrize("trick_winners,expected", [
    ([0], None),
    ([None], None),
    ([0, 1], None),
    ([None, None], None),
    ([1, None], 1),
    ([0, 0], 0),
    ([0, 1, None], 0),
    ([1, 0, 0], 0),
    ([None, None, None], 1),
])
def test_decided_winner(trick_winners, expected):
    deck = stacked_deck(['Qc', 'Qh', 'Qs'], ['4d', '4c', '4h'])
    hand, _ = make_hand(ScriptedAgent(), ScriptedAgent(), deck, leader=1)
    hand.trick_winners = trick_winners
    assert hand.decided_winner() == expected


# -------------------------- #
#           MATCHES          #
# -------------------------- #

def test_seeded_match_runs_to_target():
    advisor_agent = AdvisorAgent()
    advisor = Player(0, advisor_agent, "Advisor")
    basic = Player(1, BasicAgent(), "Basic")
    match = TrucoMatch(0, [advisor, basic], PaulistaEscalator(), target_score=12, game_seed=42)
    match.run_game()

    assert match.is_over()
    assert match.get_winner().score >= 12
    assert len(match.hand_histories) == match.hand_count

    results = list(match.get_results())
    assert len(results) == 2
    assert sum(result['won'] for result in results) == 1
    assert all(result['game_seed'] == 42 for result in results)

    profile = advisor_agent.store.get_profile('1')
    assert profile.total_games > 0
    assert 0 <= profile.win_rate <= 1


def test_same_seed_same_match():
    def play(seed):
        players = [Player(0, AdvisorAgent(), "Advisor"), Player(1, BasicAgent(), "Basic")]
        match = TrucoMatch(0, players, PaulistaEscalator(), target_score=6, game_seed=seed)
        match.run_game()
        return [(h['winner_id'], h['points']) for h in match.hand_histories]

    assert play(7) == play(7)


def test_match_needs_two_players():
    with pytest.raises(ValueError):
        TrucoMatch(0, [Player(0, BasicAgent(), "Alone")], PaulistaEscalator())


# -------------------------- #
#      LEARNING IN HANDS     #
# -------------------------- #

def test_own_truco_is_not_learned_as_opponent_aggression():
    store = ProfileStore()
    deck = stacked_deck(['Qc', 'Qh', 'Qs'], ['4d', '4c', '4h'])
    hand, _ = make_hand(AdvisorAgent(seed=1, store=store), ScriptedAgent(), deck)
    hand.run_hand()

    assert hand.hand_log[0]['action'] == 'truco'
    assert hand.hand_log[0]['player_id'] == 0
    profile = store.get_profile('1')
    assert profile.total_games == 2
    assert profile.aggressiveness == 50


def test_opponent_truco_is_learned():
    store = ProfileStore()
    deck = stacked_deck(['4d', '4c', '4h'], ['Qc', 'Qh', 'Qs'])
    raiser = ScriptedAgent([TrucoDecision(confidence=90, reasoning="raise")])
    hand, _ = make_hand(raiser, AdvisorAgent(seed=1, store=store), deck)
    hand.run_hand()

    assert hand.winner == 1
    assert raiser.tricks[0]['truco_called'] is True
    advisor_raised = any(item['action'] == 'truco' and item['player_id'] == 1 and item['trick'] == 1
                         for item in hand.hand_log)
    assert raiser.tricks[0]['opponent_raised'] is advisor_raised
    profile = store.get_profile('0')
    assert profile.total_games == 2
    assert profile.aggressiveness == 52
