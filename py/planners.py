"""Multi-step plans that use the known stock order.

Both planners only read the table. A plan is a sequence of ``PlanStep``
values in execution order; the move that the plan is building towards (the
source run landing on its destination) is not part of it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from klondike import NUM_TABLEAUS, Card, Klondike, Number
from location import Foundation, Move, PlanStep, Tableau, WastePile
from stock_knowledge import StockKnowledge
import oracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Path:
    exists: bool
    steps: tuple[PlanStep, ...] = field(default=())


NO_PATH = Path(exists=False)


def _search_stock(
    knowledge: StockKnowledge, wanted: Callable[[Card], bool], destination: Tableau | Foundation
) -> PlanStep | None:
    card = knowledge.find(wanted)
    if card is None:
        return None
    return PlanStep(Move(WastePile(), destination), card)


def _search_tableaus(
    state: Klondike,
    left_in_deck: list[int],
    excluded: set[int],
    wanted: Callable[[Card], bool],
    destination: Tableau | Foundation,
) -> tuple[int, PlanStep] | None:
    for column in range(NUM_TABLEAUS):
        if column in excluded or left_in_deck[column] <= 0:
            continue
        position = left_in_deck[column] - 1
        card = oracle.exposed_cards(state, column)[position]
        if wanted(card):
            return column, PlanStep(Move(Tableau(column, position), destination), card)
    return None


def compute_foundation_path(state: Klondike, knowledge: StockKnowledge, src: int) -> Path:
    """Find the promotions that let the exposed top card of ``src`` reach its foundation.

    Every missing rank of the card's suit is looked up in the known stock
    first and then on top of the other columns. A column that gives up a card
    exposes the one beneath it for the next rank.
    """
    cards = oracle.exposed_cards(state, src)
    if len(cards) == 0:
        return NO_PATH
    deck_card = cards[-1]
    foundation = Foundation.for_card(deck_card)

    # Any ACE should already be up from the initial sweep or an obvious move.
    foundation_card = oracle.foundation_top(state, foundation.suit_index)
    if foundation_card is None:
        return NO_PATH

    left_in_deck = [len(oracle.exposed_cards(state, column)) for column in range(NUM_TABLEAUS)]
    steps: list[PlanStep] = []

    for looking_for in range(foundation_card.rank + 1, deck_card.rank):

        def wanted(card: Card, looking_for: int = looking_for) -> bool:
            return card.rank == looking_for and card.suit == deck_card.suit

        step = _search_stock(knowledge, wanted, foundation)
        if step is None:
            found = _search_tableaus(state, left_in_deck, {src}, wanted, foundation)
            if found is None:
                logger.debug("No %s of %s available for %s", Number.from_int(looking_for), deck_card.suit, deck_card)
                return NO_PATH
            column, step = found
            left_in_deck[column] -= 1
        steps.append(step)

    return Path(exists=True, steps=tuple(steps))


def is_impossible_join(src: Card, dest: Card) -> bool:
    gap = dest.rank - src.rank
    if gap <= 0:
        return True
    if gap % 2 == 0:
        return src.color != dest.color
    return src.color == dest.color


def compute_join_path(state: Klondike, knowledge: StockKnowledge, src_deck: int, dest_deck: int) -> Path:
    """Find the cards to stack on ``dest_deck`` so the whole face-up run of
    ``src_deck`` can be moved on top of them.

    The chain is searched upwards from the bottommost exposed card of
    ``src_deck`` and returned highest card first, which is the order it has
    to be built in.
    """
    src_cards = oracle.exposed_cards(state, src_deck)
    if len(src_cards) == 0:
        return NO_PATH
    src = src_cards[0]

    dest_cards = oracle.exposed_cards(state, dest_deck)
    dest = dest_cards[-1] if len(dest_cards) > 0 else None
    if dest is not None and is_impossible_join(src, dest):
        logger.debug("Joining %s onto %s is an impossible move", src, dest)
        return NO_PATH

    limit = dest.rank - 1 if dest is not None else int(Number.KING)
    destination = Tableau(dest_deck, 0)

    # Each other column can only lend its current top card: the plan is run
    # in reverse, so a card beneath it would have to move first.
    left_in_deck = [len(oracle.exposed_cards(state, column)) for column in range(NUM_TABLEAUS)]
    used = {src_deck, dest_deck}
    steps: list[PlanStep] = []

    start = src
    while start.rank < limit:
        logger.debug("Looking for continuation for %s", start)

        def wanted(card: Card, start: Card = start) -> bool:
            return card.rank == start.rank + 1 and card.color != start.color

        step = _search_stock(knowledge, wanted, destination)
        if step is not None:
            logger.debug("Found %s in stock", step.card)
        else:
            found = _search_tableaus(state, left_in_deck, used, wanted, destination)
            if found is None:
                return NO_PATH
            column, step = found
            used.add(column)
            logger.debug("Found %s in tableau %d", step.card, column)
        steps.append(step)
        start = step.card

    steps.reverse()
    return Path(exists=True, steps=tuple(steps))
