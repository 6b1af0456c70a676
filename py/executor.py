import logging
from collections.abc import Sequence

from klondike import Card, Klondike
from location import ContractViolation, Foundation, Location, Move, PlanStep, Tableau, WastePile
from stock_knowledge import KnowledgeMissError, StockKnowledge
import oracle

logger = logging.getLogger(__name__)


def perform_move(state: Klondike, move: Move) -> Klondike:
    """Play a single move through the oracle and return the new state."""
    src = move.from_location
    dest = move.to_location

    if isinstance(src, WastePile) and isinstance(dest, Tableau):
        return oracle.move_from_visible_pile_to_tableau(state, dest.column)
    elif isinstance(src, WastePile) and isinstance(dest, Foundation):
        return oracle.move_from_visible_pile_to_foundation(state, dest.suit_index)
    elif isinstance(src, Tableau) and isinstance(dest, Foundation):
        return oracle.move_from_tableau_to_foundation(state, src.column, dest.suit_index)
    elif isinstance(src, Tableau) and isinstance(dest, Tableau):
        position = oracle.TableauPosition(
            column=src.column,
            num_hidden=oracle.num_down_cards(state, src.column),
            position=src.position,
        )
        return oracle.move_from_column_to_column(state, position, dest.column)

    msg = f"Cannot perform move {move}"
    raise ContractViolation(msg)


def expose_in_waste(state: Klondike, knowledge: StockKnowledge, card: Card) -> Klondike:
    """Cycle the stock until ``card`` is on top of the waste pile."""
    _ = knowledge.locate(card)

    # Two full passes through stock and waste are enough to see every card.
    max_turns = 2 * (oracle.stock_size(state) + len(state.waste) + 1)
    for _ in range(max_turns):
        waste_card = oracle.waste_top(state)
        if waste_card == card:
            return state
        if oracle.stock_size(state) == 0:
            state = oracle.reset_stock_pile(state)
        else:
            state = oracle.draw_from_stock_pile(state)

    msg = f"{card} never showed up while cycling the stock pile"
    raise KnowledgeMissError(msg)


def execute_path(
    state: Klondike,
    knowledge: StockKnowledge,
    path: Sequence[PlanStep],
    src: int,
    dest: Location,
) -> Klondike:
    """Play every step of ``path`` and then move the run of ``src`` onto ``dest``."""
    for idx, step in enumerate(path):
        logger.info("  Step %d: %s", idx, step)

        if isinstance(step.move.from_location, WastePile):
            state = expose_in_waste(state, knowledge, step.card)

        knowledge.forget_waste_top(state, step.move)
        state = perform_move(state, step.move)

    state = perform_move(state, Move(Tableau(src, 0), dest))
    logger.info("Completed a successful cycle")
    return state
