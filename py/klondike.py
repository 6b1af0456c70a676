import random
import copy
import json
from enum import Enum
from dataclasses import dataclass
from typing import override


NUM_TABLEAUS = 7
NUM_FOUNDATIONS = 4


class IllegalMoveError(ValueError):
    """Raised when the table is asked to perform a move the rules forbid."""


class Color(str, Enum):
    RED = "RED"
    BLACK = "BLACK"


class Suit(str, Enum):
    HEART = "HEART"
    DIAMOND = "DIAMOND"
    CLUB = "CLUB"
    SPADE = "SPADE"

    @staticmethod
    def index_map():
        return {
            0: Suit.HEART,
            1: Suit.DIAMOND,
            2: Suit.CLUB,
            3: Suit.SPADE,
        }

    @staticmethod
    def from_index(index: int) -> "Suit":
        try:
            return Suit.index_map()[index]
        except KeyError:
            msg = f"Invalid suit index {index}"
            raise ValueError(msg) from None

    @property
    def color(self) -> Color:
        if self == Suit.HEART or self == Suit.DIAMOND:
            return Color.RED
        elif self == Suit.CLUB or self == Suit.SPADE:
            return Color.BLACK
        else:
            msg = f"Suit {self} has no color"
            raise ValueError(msg)

    @override
    def __str__(self) -> str:
        return {
            Suit.HEART: "♥",
            Suit.DIAMOND: "♦",
            Suit.CLUB: "♣",
            Suit.SPADE: "♠",
        }[self]

    def __int__(self) -> int:
        for idx, sut in Suit.index_map().items():
            if sut == self:
                return idx

        msg = f"Suit {self} not found in index map"
        raise ValueError(msg)


class Number(str, Enum):
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def int_repr(self) -> int:
        return {
            Number.ACE: 1,
            Number.TWO: 2,
            Number.THREE: 3,
            Number.FOUR: 4,
            Number.FIVE: 5,
            Number.SIX: 6,
            Number.SEVEN: 7,
            Number.EIGHT: 8,
            Number.NINE: 9,
            Number.TEN: 10,
            Number.JACK: 11,
            Number.QUEEN: 12,
            Number.KING: 13,
        }[self]

    @staticmethod
    def number_map():
        return {item.int_repr: item for item in Number}

    @staticmethod
    def from_int(value: int) -> "Number":
        try:
            return Number.number_map()[value]
        except KeyError:
            msg = f"Invalid card number {value}"
            raise ValueError(msg) from None

    @override
    def __str__(self) -> str:
        return self.value

    @override
    def __repr__(self) -> str:
        return self.value

    def __int__(self) -> int:
        return int(self.int_repr)


@dataclass(frozen=True)
class Card:
    suit: Suit
    number: Number

    @property
    def color(self) -> Color:
        return self.suit.color

    @property
    def rank(self) -> int:
        return int(self.number)

    def sort_key(self) -> tuple[int, int]:
        return int(self.suit), int(self.number)

    def __lt__(self, other: "Card") -> bool:
        return self.sort_key() < other.sort_key()

    def __deepcopy__(self, memo: dict) -> "Card":
        return self

    def as_jsonable_dict(self) -> dict:
        return {
            "suit": self.suit.value,
            "rank": self.number.value,
            "color": self.suit.color.value,
        }

    @override
    def __str__(self) -> str:
        return f"{self.number} {self.suit}"

    @override
    def __repr__(self) -> str:
        return f"{self.number} {self.suit}"


type HidableCard = Card | None


class Stack:
    def __init__(self, initial_cards: list[Card] | None = None):
        self.cards = list(initial_cards or [])

    def as_jsonable_dict(self) -> dict:
        return {
            "cards": [card.as_jsonable_dict() for card in self.cards],
        }

    @override
    def __str__(self) -> str:
        return f"Stack: {self.cards}"

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self.cards)

    def add_to_top(self, card: Card) -> None:
        self.cards.append(card)

    def add_to_bottom(self, card: Card) -> None:
        self.cards.insert(0, card)

    def add_multiple_to_top(self, cards: list[Card]) -> None:
        self.cards.extend(cards)

    def inspect_top(self) -> HidableCard:
        if len(self.cards) == 0:
            return None
        return self.cards[-1]

    def inspect_all(self) -> list[Card]:
        return self.cards.copy()

    def get_from_top(self) -> HidableCard:
        if len(self.cards) == 0:
            return None
        return self.cards.pop()

    def get_all(self) -> list[Card]:
        cards = self.cards
        self.cards = []
        return cards

    def reverse(self) -> None:
        self.cards.reverse()

    def __len__(self) -> int:
        return len(self.cards)


class StackWithHidden:
    def as_jsonable_dict(self) -> dict:
        return {
            "hidden": self.hidden.as_jsonable_dict(),
            "visible": self.visible.as_jsonable_dict(),
        }

    def __init__(self):
        self.hidden = Stack()
        self.visible = Stack()

    @override
    def __str__(self) -> str:
        return f"StackWithHidden: {self.hidden} {self.visible}"

    def add_to_top(self, card: Card, *, hide: bool = False) -> None:
        if hide:
            self.hidden.add_to_top(card)
        else:
            self.visible.add_to_top(card)

    def add_multiple_to_top(self, cards: list[Card], *, hide: bool = False) -> None:
        if hide:
            self.hidden.add_multiple_to_top(cards)
        else:
            self.visible.add_multiple_to_top(cards)

    def inspect_top(self) -> HidableCard:
        return self.visible.inspect_top()

    def inspect_all(self) -> list[HidableCard]:
        cards: list[HidableCard] = [None for _ in range(len(self.hidden))]
        cards.extend(self.visible.inspect_all())
        return cards

    def get_from_top(self) -> tuple[HidableCard, bool]:
        assert not (len(self.visible) == 0 and len(self.hidden) > 0)  # noqa: S101
        card_from_top = self.visible.get_from_top()
        did_move = False
        if len(self.visible) == 0 and len(self.hidden) > 0:
            from_top = self.hidden.get_from_top()
            assert from_top is not None  # noqa: S101
            self.visible.add_to_bottom(from_top)
            did_move = True

        return card_from_top, did_move

    def __len__(self) -> int:
        return self.visible_len() + self.hidden_len()

    def visible_len(self) -> int:
        return len(self.visible)

    def hidden_len(self) -> int:
        return len(self.hidden)


class KlondikeState(str, Enum):
    SETUP = "SETUP"
    PLAYING = "PLAYING"
    WON = "WON"


@dataclass(kw_only=True, eq=True)
class Render:
    state: str
    stock_size: int
    waste: HidableCard
    foundations: list[HidableCard]  # top card on each foundation, indexed by suit
    tableaus: list[list[HidableCard]]  # all cards on each tableau with null for hidden cards
    move_count: int


class Klondike:
    """A draw-one Klondike table.

    Every ``move_*`` method performs exactly one rule-legal mutation and raises
    ``IllegalMoveError`` instead of touching the table when the move is not
    allowed. Foundation ``i`` only ever holds cards of ``Suit.from_index(i)``.
    """

    def __init__(self) -> None:
        self.deck = [Card(suit, number) for suit in Suit for number in Number]
        self.foundations = [Stack() for _ in range(NUM_FOUNDATIONS)]
        self.tableaus = [StackWithHidden() for _ in range(NUM_TABLEAUS)]
        self.stock = Stack()
        self.waste = Stack()

        self.state = KlondikeState.SETUP
        self.move_count = 0

    def reset(self, seed: int | None = None):
        self.foundations = [Stack() for _ in range(NUM_FOUNDATIONS)]
        self.tableaus = [StackWithHidden() for _ in range(NUM_TABLEAUS)]
        self.stock = Stack()
        self.waste = Stack()
        self.move_count = 0
        self.state = KlondikeState.SETUP

        hand = Stack(self.deck.copy())
        hand.shuffle(random.Random(seed))
        for idx, tableau in enumerate(self.tableaus):
            for k in range(idx + 1):
                from_top = hand.get_from_top()
                assert from_top is not None  # noqa: S101
                tableau.add_to_top(from_top, hide=k != idx)
        self.stock.add_multiple_to_top(hand.get_all())

    def _played(self) -> None:
        self.move_count += 1
        self.state = KlondikeState.WON if self.is_done() else KlondikeState.PLAYING

    def move_stock_to_waste(self):
        card = self.stock.get_from_top()
        if card is None:
            msg = "Cannot draw from an empty stock pile"
            raise IllegalMoveError(msg)
        self.waste.add_to_top(card)
        self._played()

    def cycle_waste_to_stock(self):
        # Turning the waste over puts the cards back in their original draw order.
        self.waste.reverse()
        self.stock.add_multiple_to_top(self.waste.get_all())
        self._played()

    def is_card_placable_on_foundation(self, card: Card, foundation_idx: int) -> bool:
        if int(card.suit) != foundation_idx:
            return False
        foundation = self.foundations[foundation_idx]
        if len(foundation) == 0:
            return card.number == Number.ACE
        top_card = foundation.inspect_top()
        if top_card is None:
            return False
        return int(top_card.number) == int(card.number) - 1

    def is_card_placable_on_tableau(self, card: Card, tableau: StackWithHidden) -> bool:
        if len(tableau) == 0:
            return card.number == Number.KING
        top_card = tableau.inspect_top()
        if top_card is None:
            return False
        return top_card.suit.color != card.suit.color and int(top_card.number) == int(card.number) + 1

    def _check_indices(self, *, tableau_idx: int | None = None, foundation_idx: int | None = None) -> None:
        if tableau_idx is not None and not 0 <= tableau_idx < NUM_TABLEAUS:
            msg = f"Invalid tableau index {tableau_idx}"
            raise IllegalMoveError(msg)
        if foundation_idx is not None and not 0 <= foundation_idx < NUM_FOUNDATIONS:
            msg = f"Invalid foundation index {foundation_idx}"
            raise IllegalMoveError(msg)

    def move_waste_to_foundation(self, foundation_idx: int):
        self._check_indices(foundation_idx=foundation_idx)
        card = self.waste.inspect_top()
        if card is None or not self.is_card_placable_on_foundation(card, foundation_idx):
            msg = f"Cannot move waste card {card} to foundation {foundation_idx}"
            raise IllegalMoveError(msg)
        _ = self.waste.get_from_top()
        self.foundations[foundation_idx].add_to_top(card)
        self._played()

    def move_tableau_to_foundation(self, tableau_idx: int, foundation_idx: int):
        self._check_indices(tableau_idx=tableau_idx, foundation_idx=foundation_idx)
        tableau = self.tableaus[tableau_idx]
        card = tableau.inspect_top()
        if card is None or not self.is_card_placable_on_foundation(card, foundation_idx):
            msg = f"Cannot move tableau {tableau_idx} card {card} to foundation {foundation_idx}"
            raise IllegalMoveError(msg)
        card, _hidden_to_visible = tableau.get_from_top()
        assert card is not None  # noqa: S101
        self.foundations[foundation_idx].add_to_top(card)
        self._played()

    def move_waste_to_tableau(self, tableau_idx: int):
        self._check_indices(tableau_idx=tableau_idx)
        tableau = self.tableaus[tableau_idx]
        card = self.waste.inspect_top()
        if card is None or not self.is_card_placable_on_tableau(card, tableau):
            msg = f"Cannot move waste card {card} to tableau {tableau_idx}"
            raise IllegalMoveError(msg)
        _ = self.waste.get_from_top()
        tableau.add_to_top(card)
        self._played()

    def move_tableau_to_tableau(self, from_tableau_idx: int, from_tableau_card_idx: int, to_tableau_idx: int):
        """Move the run starting at ``from_tableau_card_idx`` (counted from the bottom,
        hidden cards included) onto another tableau."""
        self._check_indices(tableau_idx=from_tableau_idx)
        self._check_indices(tableau_idx=to_tableau_idx)
        if from_tableau_idx == to_tableau_idx:
            msg = f"Cannot move tableau {from_tableau_idx} onto itself"
            raise IllegalMoveError(msg)

        from_tableau = self.tableaus[from_tableau_idx]
        to_tableau = self.tableaus[to_tableau_idx]

        if not from_tableau.hidden_len() <= from_tableau_card_idx < len(from_tableau):
            msg = f"No visible card at index {from_tableau_card_idx} of tableau {from_tableau_idx}"
            raise IllegalMoveError(msg)
        card = from_tableau.inspect_all()[from_tableau_card_idx]
        if card is None or not self.is_card_placable_on_tableau(card, to_tableau):
            msg = f"Cannot move {card} from tableau {from_tableau_idx} to tableau {to_tableau_idx}"
            raise IllegalMoveError(msg)

        hand = Stack()
        for _ in range(len(from_tableau) - from_tableau_card_idx):
            ft, _hidden_to_visible = from_tableau.get_from_top()
            assert ft is not None  # noqa: S101
            hand.add_to_bottom(ft)
        to_tableau.add_multiple_to_top(hand.get_all())
        self._played()

    def is_done(self) -> bool:
        return all(len(foundation) == 13 for foundation in self.foundations)  # noqa: PLR2004

    def render(self) -> Render:
        return Render(
            state=self.state.value,
            stock_size=len(self.stock),
            waste=self.waste.inspect_top(),
            foundations=[foundation.inspect_top() for foundation in self.foundations],
            tableaus=[tableau.inspect_all() for tableau in self.tableaus],
            move_count=self.move_count,
        )

    def copy(self) -> "Klondike":
        return copy.deepcopy(self)

    def as_jsonable_dict(self) -> dict:
        return {
            "foundations": [foundation.as_jsonable_dict() for foundation in self.foundations],
            "tableaus": [tableau.as_jsonable_dict() for tableau in self.tableaus],
            "stock": self.stock.as_jsonable_dict(),
            "waste": self.waste.as_jsonable_dict(),
        }

    def as_json(self) -> str:
        return json.dumps(self.as_jsonable_dict())

    @override
    def __str__(self) -> str:
        lines = [
            f"Stock: {len(self.stock)} cards, waste: {self.waste.inspect_top() or '<NONE>'}",
            "Foundations: " + " ".join(str(foundation.inspect_top() or "--") for foundation in self.foundations),
        ]
        for idx, tableau in enumerate(self.tableaus):
            lines.append(f"  T{idx}: {tableau.hidden_len()} hidden, {tableau.visible.inspect_all()}")
        return "\n".join(lines)
