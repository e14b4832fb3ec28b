import logging
from copy import deepcopy
from random import Random

from truco.cards import full_deck
from truco.escalator import BaseEscalator
from truco.hand import TrucoHand
from truco.player import Player
from truco.seed_gen import generate_game_seed, derive_deck_seed, derive_order_seed, derive_agent_seeds

logger = logging.getLogger(__name__)


class TrucoMatch:
    def __init__(self, match_id: int, players: list[Player], escalator: BaseEscalator, target_score: int = 12, game_seed: int = None):
        if len(players) != 2:
            raise ValueError("A match requires exactly 2 players")
        if target_score < 1:
            raise ValueError("Target score should be at least 1")

        self.match_id = match_id
        self.escalator = escalator
        self.target_score = target_score
        self.game_seed = generate_game_seed(game_seed)
        self.hand_count = 0
        self.leader = 0
        self.hand_histories = []

        # Derive seeds from the match seed
        self._deck_random = Random(derive_deck_seed(self.game_seed))
        order_rng = Random(derive_order_seed(self.game_seed))
        agent_seeds = derive_agent_seeds(self.game_seed, len(players))

        # Shuffle who deals first
        self.player_list = sorted(players, key=lambda p: p.player_id)
        order_rng.shuffle(self.player_list)

        for player in self.player_list:
            player.score = 0
            player.hands_won = 0
            player.agent.init_seed(agent_seeds.pop())

        self.game_start()

    def game_start(self):
        for seat, player in enumerate(self.player_list):
            start_state = {
                "match_id": self.match_id,
                "target_score": self.target_score,
                "your_id": player.player_id,
                "opponent_id": self.player_list[1 - seat].player_id,
                "order": seat
            }
            player.agent.game_start(deepcopy(start_state))

    def shuffled_deck(self):
        deck = full_deck()
        self._deck_random.shuffle(deck)
        return deck

    def is_over(self) -> bool:
        return any(player.score >= self.target_score for player in self.player_list)

    def run_hand(self) -> TrucoHand:
        self.hand_count += 1
        hand = TrucoHand(self.player_list, self.hand_count, self.leader, self.escalator, self.shuffled_deck())
        hand.run_hand()

        winner = self.player_list[hand.winner]
        winner.gain(hand.points)
        winner.hands_won += 1
        logger.info(f"Match {self.match_id} hand {self.hand_count}: {winner} wins {hand.points} point(s)")

        history = hand.get_history()
        self.hand_histories.append(history)
        for player in self.player_list:
            player.agent.hand_ended(deepcopy(history))

        # The lead alternates every hand
        self.leader = 1 - self.leader
        return hand

    def run_game(self):
        while not self.is_over():
            self.run_hand()

    def get_winner(self) -> Player:
        assert self.is_over()
        return max(self.player_list, key=lambda p: p.score)

    def get_results(self):
        winner = self.get_winner()
        for player in self.player_list:
            opponent = self.player_list[1 - self.player_list.index(player)]
            result = {
                'match_id': self.match_id,
                'game_seed': self.game_seed,
                'agent_name': player.agent.name,
                'won': int(player is winner),
                'score': player.score,
                'opponent_score': opponent.score,
                'hands_won': player.hands_won,
                'hand_count': self.hand_count
            }
            yield result
