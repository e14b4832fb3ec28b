from truco.cards import Card


class Player:
    def __init__(self, player_id: int, agent, name: str = "Player"):
        self.player_id = player_id
        self.name = name
        self.agent = agent
        self.score = 0
        self.cards = []
        self.tricks_won = 0
        self.hands_won = 0

    def __repr__(self):
        return f"{self.name} ({self.agent.name})"

    def hand_start(self):
        self.cards = []
        self.tricks_won = 0

    def receive_cards(self, cards: list[Card]):
        if len(cards) != 3:
            raise ValueError("Wrong card amount")
        self.cards = list(cards)

    def play(self, card: Card) -> Card:
        if card not in self.cards:
            raise ValueError(f"{self.name} does not hold {card}")
        self.cards.remove(card)
        return card

    def gain(self, points: int):
        if points < 0:
            raise ValueError("Cannot gain negative points")
        self.score += points
