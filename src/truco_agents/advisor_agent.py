import logging

from truco.config import EngineConfig
from truco.decision import PlayDecision
from truco.game_state import GameHistoryEntry, create_game_state
from truco.profile_store import ProfileStore
from truco.strategy import DecisionEngine
from .base_agent import BaseTrucoAgent

logger = logging.getLogger(__name__)


class AdvisorAgent(BaseTrucoAgent):
    """
    Plays whatever the adaptive decision engine recommends.

    Opponent profiles live in the injected ProfileStore and are updated after
    every trick, so two agents can share or keep separate memories.
    """

    def __init__(self, seed: int = None, name: str = "Advisor Agent", store: ProfileStore = None, config: EngineConfig = None):
        self.config = config or EngineConfig()
        self.store = store if store is not None else ProfileStore(self.config)
        self.engine = None
        self.history = []
        self.last_decision = None
        super().__init__(seed, name)

    def init_seed(self, seed: int):
        super().init_seed(seed)
        # Bluffs draw from the agent's own seeded stream
        self.engine = DecisionEngine(rng=self._random, config=self.config)

    def build_game_state(self, view):
        return create_game_state(
            view['cards'],
            view['vira'],
            self.store,
            opponent_id=str(view['opponent_id']),
            table_cards=view['table_cards'],
            current_round=view['trick'],
            player_score=view['your_score'],
            opponent_score=view['opponent_score'],
            truco_calls=view['truco_calls'],
            history=list(self.history)
        )

    def decide_action(self, view):
        game_state = self.build_game_state(view)
        decision = self.engine.decide(game_state, view['opponent_card'])
        self.last_decision = decision
        return decision

    def fallback_card(self, view):
        game_state = self.build_game_state(view)
        card = self.engine.select_card(game_state, view['opponent_card'])
        self.last_decision = PlayDecision(
            card=card,
            confidence=self.last_decision.confidence if self.last_decision else 50,
            reasoning=f"Cannot raise again, playing {card} instead."
        )
        return card

    def respond_truco(self, view) -> bool:
        # Last card already on the table
        if not view['cards']:
            return True
        game_state = self.build_game_state(view)
        probabilities = self.engine.probability_engine.estimate(
            game_state.player_cards, game_state.vira, game_state.opponent_profile, game_state
        )
        accepted = probabilities.win_probability >= self.config.TRUCO_ACCEPT_THRESHOLD
        logger.debug(f"{self.name} {'accepts' if accepted else 'runs from'} truco at "
                     f"{probabilities.win_probability:.2f} win probability")
        return accepted

    def trick_ended(self, trick_result):
        # A tied trick says nothing about who was stronger
        if trick_result['winner'] == 'tie':
            return

        entry = GameHistoryEntry(
            round=trick_result['trick'],
            player_card=trick_result['your_card'],
            opponent_card=trick_result['opponent_card'],
            winner='player' if trick_result['winner'] == 'you' else 'opponent',
            truco_called=trick_result['opponent_raised']
        )
        self.history.append(entry)

        if self.last_decision is not None:
            self.store.update_profile(
                str(trick_result['opponent_id']), entry, self.last_decision, vira=trick_result['vira']
            )

    def hand_ended(self, hand_history):
        self.history = []
        self.last_decision = None
