import logging
from collections.abc import Callable, Iterator

from klondike import Card, Klondike
from location import LocationTag, Move
import oracle

logger = logging.getLogger(__name__)


class KnowledgeMissError(LookupError):
    """Raised when a card that should have been seen in the stock is unknown."""


class StockKnowledge:
    """Draw order of the stock pile, learned once by cycling through it.

    The physical order of the stock never changes, so after the initial sweep
    the sequence stays correct as long as every card that leaves the waste
    pile for good is forgotten.
    """

    def __init__(self) -> None:
        self._cards: list[Card] = []
        self.explored = False

    def record_drawn(self, card: Card) -> None:
        self.explored = True
        self._cards.append(card)

    def forget(self, card: Card) -> None:
        if card not in self._cards:
            logger.debug("Forgetting %s which was never recorded", card)
            return
        self._cards.remove(card)

    def forget_waste_top(self, state: Klondike, move: Move) -> None:
        if move.from_location.tag != LocationTag.WASTE_PILE:
            return
        card = oracle.waste_top(state)
        if card is None:
            return
        # every card that reaches the waste pile was seen during the sweep
        del self._cards[self.locate(card)]

    def locate(self, card: Card) -> int:
        try:
            return self._cards.index(card)
        except ValueError:
            msg = f"{card} is not in the known stock pile"
            raise KnowledgeMissError(msg) from None

    def find(self, predicate: Callable[[Card], bool]) -> Card | None:
        for card in self._cards:
            if predicate(card):
                return card
        return None

    def cards(self) -> list[Card]:
        return self._cards.copy()

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards.copy())

    def __len__(self) -> int:
        return len(self._cards)
