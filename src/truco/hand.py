import logging
from copy import deepcopy

from truco.cards import Card, rank_value
from truco.decision import PassDecision, PlayDecision, TrucoDecision
from truco.escalator import BaseEscalator
from truco.player import Player

logger = logging.getLogger(__name__)


class InvalidActionError(Exception):
    """Raised when an agent returns something that is not a decision."""
    pass


class TrucoHand:
    def __init__(
            self,
            player_list: list[Player],
            hand_id: int,
            leader: int,
            escalator: BaseEscalator,
            deck: list[Card]
    ):
        assert len(player_list) == 2
        assert len(deck) >= 7
        self.player_list = player_list
        self.hand_id = hand_id
        self.leader = leader            # Plays first in the first trick, wins if every trick ties
        self.escalator = escalator
        self.deck = deck
        self.vira = None
        self.trick = 0
        self.truco_calls = 0
        self.last_raiser = None
        self.trick_raisers = set()       # Seats that raised during the current trick
        self.table_cards = []
        self.trick_winners = []         # Seat index, or None for a tied trick
        self.winner = None
        self.points = 0
        self.hand_log = []

    def deal(self):
        """Three cards each, then the vira."""
        for index, player in enumerate(self.player_list):
            player.hand_start()
            player.receive_cards(self.deck[index * 3:index * 3 + 3])
        self.vira = self.deck[6]
        logger.debug(f"Hand {self.hand_id}: vira {self.vira}")

    def log(self, seat: int, action: str, card: Card = None):
        if action not in ['play', 'truco', 'accept', 'run']:
            raise InvalidActionError(f"Undefined action '{action}'")
        log_item = {
            'player_id': self.player_list[seat].player_id,
            'trick': self.trick,
            'action': action,
            'card': card.short if card else None,
            'stakes': self.escalator.get_stakes(self.truco_calls)
        }
        self.hand_log.append(log_item)

    def can_raise(self, seat: int) -> bool:
        return self.escalator.can_raise(self.truco_calls) and self.last_raiser != seat

    def get_view(self, seat: int, opponent_card: Card = None) -> dict:
        player = self.player_list[seat]
        opponent = self.player_list[1 - seat]
        view = {
            # --- PRIVATE INFO ---
            "cards": list(player.cards),

            # --- PUBLIC SHARED INFO ---
            "hand_id": self.hand_id,
            "trick": self.trick,
            "vira": self.vira,
            "opponent_card": opponent_card,
            "table_cards": list(self.table_cards),

            # --- SCORES AND STAKES ---
            "your_id": player.player_id,
            "opponent_id": opponent.player_id,
            "your_score": player.score,
            "opponent_score": opponent.score,
            "truco_calls": self.truco_calls,
            "stakes": self.escalator.get_stakes(self.truco_calls),
            "can_raise": self.can_raise(seat),

            "hand_log": self.hand_log
        }
        return deepcopy(view)

    def end_hand(self, winner: int, points: int):
        self.winner = winner
        self.points = points

    def raise_stakes(self, seat: int) -> bool:
        """Asks the other seat to accept. Returns False when they run."""
        responder = 1 - seat
        self.log(seat, 'truco')
        accepted = self.player_list[responder].agent.respond_truco(self.get_view(responder))
        if not accepted:
            self.log(responder, 'run')
            self.end_hand(seat, self.escalator.get_stakes(self.truco_calls))
            return False

        self.truco_calls += 1
        self.last_raiser = seat
        self.trick_raisers.add(seat)
        self.log(responder, 'accept')
        return True

    def take_turn(self, seat: int, opponent_card: Card = None):
        """Returns the card played, or None when the hand ended during the turn."""
        player = self.player_list[seat]

        while True:
            view = self.get_view(seat, opponent_card)
            decision = player.agent.decide_action(view)

            if isinstance(decision, PassDecision):
                self.log(seat, 'run')
                self.end_hand(1 - seat, self.escalator.get_stakes(self.truco_calls))
                return None

            if isinstance(decision, TrucoDecision):
                if self.can_raise(seat):
                    if not self.raise_stakes(seat):
                        return None
                    continue
                # The raise cannot be honoured, the agent still has to play
                card = player.agent.fallback_card(view)
            elif isinstance(decision, PlayDecision):
                card = decision.card
            else:
                raise InvalidActionError(f"Undefined decision {decision!r}")

            player.play(card)
            self.table_cards.append(card)
            self.log(seat, 'play', card)
            return card

    def resolve_trick(self, first: int, cards: dict) -> int:
        """Returns the seat that won the trick, or None on a tie."""
        first_value = rank_value(cards[first], self.vira)
        second_value = rank_value(cards[1 - first], self.vira)
        if first_value > second_value:
            return first
        if second_value > first_value:
            return 1 - first
        return None

    def decided_winner(self):
        """Seat that already won the hand, or None if more tricks are needed."""
        wins = [self.trick_winners.count(seat) for seat in (0, 1)]
        for seat in (0, 1):
            if wins[seat] >= 2:
                return seat

        decisive = [winner for winner in self.trick_winners if winner is not None]
        has_tie = None in self.trick_winners

        if len(self.trick_winners) == 3:
            if wins[0] != wins[1]:
                return 0 if wins[0] > wins[1] else 1
            if decisive:
                return decisive[0]
            return self.leader

        # A tie next to a won trick settles the hand for the trick winner
        if has_tie and decisive:
            return decisive[0]
        return None

    def notify_trick(self, trick_cards: dict, trick_winner):
        for seat, player in enumerate(self.player_list):
            if trick_winner is None:
                winner = 'tie'
            else:
                winner = 'you' if trick_winner == seat else 'opponent'
            trick_result = {
                'hand_id': self.hand_id,
                'trick': self.trick,
                'vira': self.vira,
                'your_card': trick_cards[seat],
                'opponent_card': trick_cards[1 - seat],
                'winner': winner,
                'truco_called': bool(self.trick_raisers),
                'opponent_raised': (1 - seat) in self.trick_raisers,
                'opponent_id': self.player_list[1 - seat].player_id
            }
            player.agent.trick_ended(trick_result)

    def run_hand(self):
        self.deal()
        current = self.leader

        for trick in range(1, 4):
            self.trick = trick
            self.trick_raisers = set()
            trick_cards = {}

            for seat in (current, 1 - current):
                opponent_card = trick_cards.get(1 - seat)
                card = self.take_turn(seat, opponent_card)
                if card is None:
                    return
                trick_cards[seat] = card

            trick_winner = self.resolve_trick(current, trick_cards)
            self.trick_winners.append(trick_winner)
            if trick_winner is not None:
                self.player_list[trick_winner].tricks_won += 1
            self.notify_trick(trick_cards, trick_winner)

            # Trick winner leads the next one, ties keep the order
            if trick_winner is not None:
                current = trick_winner

            winner = self.decided_winner()
            if winner is not None:
                self.end_hand(winner, self.escalator.get_stakes(self.truco_calls))
                return

    def get_history(self) -> dict:
        return {
            'hand_id': self.hand_id,
            'vira': self.vira,
            'winner_id': self.player_list[self.winner].player_id,
            'points': self.points,
            'truco_calls': self.truco_calls,
            'hand_log': self.hand_log
        }
