from dataclasses import dataclass


class InvalidInputError(ValueError):
    """Raised when the caller hands the engine something it cannot rank or decide on."""
    pass


class InvalidCardError(InvalidInputError):
    """Raised when a card has an unknown suit or rank, or a hand holds a non-card."""
    pass


# Weakest to strongest, wraps around after '3' when finding the manilha
RANK_SEQUENCE = ['4', '5', '6', '7', 'Q', 'J', 'K', 'A', '2', '3']

BASE_HIERARCHY = {
    '4': 1, '5': 2, '6': 3, '7': 4, 'Q': 5, 'J': 6, 'K': 7, 'A': 8, '2': 9, '3': 10
}

# Manilha precedence, weakest to strongest
SUIT_ORDER = ['diamonds', 'spades', 'hearts', 'clubs']

SUITS = ['hearts', 'diamonds', 'clubs', 'spades']

SUIT_SYMBOLS = {
    'hearts': '♥',
    'diamonds': '♦',
    'clubs': '♣',
    'spades': '♠',
}

SUIT_ALIASES = {
    'h': 'hearts', '♥': 'hearts',
    'd': 'diamonds', '♦': 'diamonds',
    'c': 'clubs', '♣': 'clubs',
    's': 'spades', '♠': 'spades',
}

MANILHA_BASE = 11
MAX_RANK_VALUE = 14


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self):
        if self.rank not in BASE_HIERARCHY:
            raise InvalidCardError(f"Undefined rank '{self.rank}'")
        if self.suit not in SUIT_SYMBOLS:
            raise InvalidCardError(f"Undefined suit '{self.suit}'")

    def __str__(self):
        return f"{self.rank}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short(self) -> str:
        """Two character form like 'Ac', used in CSV output and console input."""
        return f"{self.rank}{self.suit[0]}"

    @staticmethod
    def from_str(text: str) -> 'Card':
        """
            Parse a card like 'Ac', '3s', 'q♦' or 'K hearts'.

            Args:
                text (str): Rank first, then a suit letter, symbol or name.

            Returns:
                Card: The parsed card.
        """
        if not isinstance(text, str):
            raise InvalidCardError(f"Cannot parse card from {text!r}")
        cleaned = text.strip().replace(' ', '')
        if len(cleaned) < 2:
            raise InvalidCardError(f"Card must look like 'Ac', got {text!r}")

        rank = cleaned[0].upper()
        suit_text = cleaned[1:].lower()
        suit = SUIT_ALIASES.get(suit_text, suit_text)
        return Card(rank, suit)


def parse_cards(texts) -> list[Card]:
    return [Card.from_str(text) for text in texts]


def full_deck() -> list[Card]:
    """All 40 cards, no 8, 9, 10 or jokers."""
    return [Card(rank, suit) for suit in SUITS for rank in RANK_SEQUENCE]


def manilha_rank(vira_rank: str) -> str:
    if vira_rank not in BASE_HIERARCHY:
        raise InvalidCardError(f"Undefined rank '{vira_rank}'")
    index = RANK_SEQUENCE.index(vira_rank)
    return RANK_SEQUENCE[(index + 1) % len(RANK_SEQUENCE)]


def is_manilha(card: Card, vira: Card = None) -> bool:
    if vira is None:
        return False
    return card.rank == manilha_rank(vira.rank)


def rank_value(card: Card, vira: Card = None) -> int:
    """
        Strength of a card in the current hand.

        Args:
            card (Card): The card to rank.
            vira (Card): The face-up card. Without it only the base hierarchy applies.

        Returns:
            int: 1 ('4') to 10 ('3') for regular cards, 11 to 14 for manilhas.
    """
    if is_manilha(card, vira):
        return MANILHA_BASE + SUIT_ORDER.index(card.suit)
    return BASE_HIERARCHY[card.rank]


def get_manilhas(vira: Card) -> list[Card]:
    """Returns the four manilhas for this vira, weakest first."""
    rank = manilha_rank(vira.rank)
    return [Card(rank, suit) for suit in SUIT_ORDER]


def ensure_cards(cards) -> list[Card]:
    """Checks that every item is a Card and returns them as a list."""
    cards = list(cards)
    for card in cards:
        if not isinstance(card, Card):
            raise InvalidCardError(f"Expected a Card, got {card!r}")
    return cards


def ensure_vira(vira):
    """A missing vira is allowed, anything else must be a Card."""
    if vira is not None and not isinstance(vira, Card):
        raise InvalidCardError(f"Expected a Card for the vira, got {vira!r}")
    return vira


if __name__ == '__main__':
    example_vira = Card.from_str('7h')
    print(f"Vira {example_vira}, manilhas: {[str(c) for c in get_manilhas(example_vira)]}")
    for example_card in parse_cards(['Ac', 'Kh', '3s', 'Qd', 'Qc']):
        print(example_card, rank_value(example_card, example_vira))
