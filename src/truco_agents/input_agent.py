from truco.cards import Card, InvalidCardError
from truco.decision import PassDecision, PlayDecision, TrucoDecision
from truco.hand_analyzer import analyze_hand, strength_label
from .advisor_agent import AdvisorAgent


def box_padding(pretty_list: list, boundary_char: str = "*"):
    longest_item = max(pretty_list, key=len)
    padding_to = max(len(longest_item) + 2, 22)
    padded_list = []
    for item in pretty_list:
        short = padding_to - len(item)
        left = short // 2
        padded_list.append(boundary_char + left * " " + item + (short - left) * " " + boundary_char)

    border = (padding_to + 2) * boundary_char
    return [border] + padded_list + [border]


def pretty_card(card: Card) -> str:
    """Colored card string with the Unicode suit, like [A♣]."""
    colors = {
        'spades': 30,      # black
        'hearts': 31,      # red
        'diamonds': 33,    # yellow
        'clubs': 34,       # blue
    }
    return f"\033[{colors[card.suit]}m[{card}]\033[0m"


def pretty_cards(cards) -> str:
    return " ".join(pretty_card(card) for card in cards)


class InputAgent(AdvisorAgent):
    """
    A human at the console. The advisor's recommendation is shown as a hint
    and the opponent's profile keeps learning from every trick.
    """

    def __init__(self, seed: int = None, name: str = "Input Agent", show_hint: bool = True, **kwargs):
        super().__init__(seed, name, **kwargs)
        self.show_hint = show_hint

    def pretty_print_view(self, view: dict):
        pretty_print = [""]
        pretty_print.append(f"[ Hand {view['hand_id']} / Trick {view['trick']} ] You are playing as #{view['your_id']}")

        scores = [f"You {view['your_score']}", f"Opponent {view['opponent_score']}", f"Hand worth {view['stakes']}"]
        pretty_print = pretty_print + box_padding(scores)

        pretty_print.append(f"Vira: {pretty_card(view['vira'])}")
        if view['opponent_card'] is not None:
            pretty_print.append(f"Opponent played: {pretty_card(view['opponent_card'])}")
        analysis = analyze_hand(view['cards'], view['vira'])
        pretty_print.append(f"Your cards: {pretty_cards(view['cards'])}  "
                            f"(strength {analysis.strength}%, {strength_label(analysis.strength)})")

        for item in pretty_print:
            print(item)

    def print_hint(self, decision):
        if isinstance(decision, PlayDecision):
            headline = f"play {pretty_card(decision.card)}"
        else:
            headline = decision.action
        print(f"Hint: {headline} ({decision.confidence}%) - {decision.reasoning}")

    def read_card(self, text: str, cards: list[Card]):
        try:
            card = Card.from_str(text)
        except InvalidCardError as e:
            print(e)
            return None
        if card not in cards:
            print(f"You do not hold {card}")
            return None
        return card

    def decide_action(self, view: dict):
        self.pretty_print_view(view)
        if self.show_hint:
            self.print_hint(super().decide_action(view))

        while True:
            cmd = input("Input your action (play <card>/truco/run): ").strip()
            to_list = cmd.split(' ')
            action = to_list[0].lower()

            if action == 'play' and len(to_list) > 1:
                card = self.read_card(to_list[1], view['cards'])
                if card is not None:
                    decision = PlayDecision(card=card, confidence=100, reasoning="Chosen at the console.")
                    break
            elif action == 'truco':
                if not view['can_raise']:
                    print("You cannot raise right now.")
                    continue
                decision = TrucoDecision(confidence=100, reasoning="Chosen at the console.")
                break
            elif action in ('run', 'pass'):
                decision = PassDecision(confidence=100, reasoning="Chosen at the console.")
                break

        self.last_decision = decision
        return decision

    def respond_truco(self, view) -> bool:
        print(f"Opponent calls truco! Hand would be worth more than {view['stakes']}.")
        if view['cards']:
            print(f"Your cards: {pretty_cards(view['cards'])}")
        while True:
            answer = input("Accept? (y/n): ").strip().lower()
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False

    def trick_ended(self, trick_result):
        print(f"Trick {trick_result['trick']}: {pretty_card(trick_result['your_card'])} vs "
              f"{pretty_card(trick_result['opponent_card'])}, winner: {trick_result['winner']}")
        super().trick_ended(trick_result)

    def hand_ended(self, hand_history):
        print(f"Hand {hand_history['hand_id']} won by #{hand_history['winner_id']} for {hand_history['points']} point(s)")
        super().hand_ended(hand_history)
