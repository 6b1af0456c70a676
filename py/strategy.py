"""Step-by-step Klondike strategy that peeks at the stock pile order.

Moves are tried in a fixed priority:

1. obvious moves (ACE and DEUCE promotions, freeing hidden cards),
2. join paths that move a run with hidden cards beneath it onto another column,
3. join paths that move a fully exposed column somewhere else,
4. foundation paths for single-card columns,
5. foundation paths for any column, as a last resort.
"""

import logging
from collections.abc import Callable

from klondike import NUM_TABLEAUS, Klondike, Number
from location import Foundation, Tableau
from obvious_moves import calculate_obvious_move
from planners import compute_foundation_path, compute_join_path
from executor import execute_path, perform_move
from stock_knowledge import StockKnowledge
import oracle

logger = logging.getLogger(__name__)


def apply_obvious_moves(state: Klondike, knowledge: StockKnowledge) -> Klondike:
    while True:
        move = calculate_obvious_move(state)
        if move is None:
            return state
        logger.info("Obvious move %s", move)
        knowledge.forget_waste_top(state, move)
        state = perform_move(state, move)


def strategy_init(initial_state: Klondike, knowledge: StockKnowledge) -> Klondike:
    """Draw through the whole stock once to learn its order.

    Cards that can be played while drawing are played. Seeing the stock order
    is public information, so the sweep ends by turning the waste back over.
    """
    if knowledge.explored:
        msg = "The stock pile has already been explored"
        raise ValueError(msg)

    state = initial_state
    knowledge.explored = True

    for _ in range(oracle.stock_size(initial_state)):
        state = oracle.draw_from_stock_pile(state)
        card = oracle.waste_top(state)
        assert card is not None  # noqa: S101
        knowledge.record_drawn(card)
        state = apply_obvious_moves(state, knowledge)

    for idx, card in enumerate(knowledge):
        logger.info("%d = %s", idx, card)

    return oracle.reset_stock_pile(state)


def _join_onto(state: Klondike, knowledge: StockKnowledge, src: int, dest: int) -> Klondike | None:
    logger.debug("Searching for %d -> %d", src, dest)
    path = compute_join_path(state, knowledge, src, dest)
    if not path.exists:
        logger.debug("Path not found")
        return None

    logger.info("Path %d -> %d exists, executing %d steps", src, dest, len(path.steps))
    dest_len = len(oracle.exposed_cards(state, dest))
    return execute_path(state, knowledge, path.steps, src, Tableau(dest, max(dest_len - 1, 0)))


def _promote(state: Klondike, knowledge: StockKnowledge, src: int) -> Klondike | None:
    path = compute_foundation_path(state, knowledge, src)
    if not path.exists:
        return None

    deck_card = oracle.exposed_cards(state, src)[-1]
    logger.info("Promoting %s from tableau %d after %d steps", deck_card, src, len(path.steps))
    return execute_path(state, knowledge, path.steps, src, Foundation.for_card(deck_card))


def enroute_to_obvious_by_peeking(state: Klondike, knowledge: StockKnowledge) -> tuple[Klondike, bool]:
    # Move a run off hidden cards, using stock cards to bridge the gap.
    for src in reversed(range(NUM_TABLEAUS)):
        if oracle.num_down_cards(state, src) == 0:
            continue
        for dest in range(NUM_TABLEAUS):
            if src == dest:
                continue
            new_state = _join_onto(state, knowledge, src, dest)
            if new_state is not None:
                return new_state, True

    # Move fully exposed columns around. Kings stay put, moving them gains nothing.
    for src in reversed(range(NUM_TABLEAUS)):
        cards = oracle.exposed_cards(state, src)
        if oracle.num_down_cards(state, src) != 0 or len(cards) == 0 or cards[0].number == Number.KING:
            continue
        for dest in range(NUM_TABLEAUS):
            if src == dest:
                continue
            new_state = _join_onto(state, knowledge, src, dest)
            if new_state is not None:
                return new_state, True

    # Promote single cards, which reveals a hidden card or frees a column for a king.
    logger.debug("Attempting lazy promotion")
    for src in range(NUM_TABLEAUS):
        if len(oracle.exposed_cards(state, src)) != 1:
            continue
        new_state = _promote(state, knowledge, src)
        if new_state is not None:
            return new_state, True

    logger.debug("Attempting desperate promotion")
    for src in range(NUM_TABLEAUS):
        if len(oracle.exposed_cards(state, src)) == 0:
            continue
        new_state = _promote(state, knowledge, src)
        if new_state is not None:
            return new_state, True

    return state, False


def strategy_step(state: Klondike, knowledge: StockKnowledge) -> tuple[Klondike, bool]:
    """Play the next move, or the next planned sequence of moves.

    Returns the new state and whether anything was played.
    """
    logger.debug("Called step on\n%s", state)

    move = calculate_obvious_move(state)
    if move is not None:
        logger.info("Obvious move %s", move)
        knowledge.forget_waste_top(state, move)
        return perform_move(state, move), True

    return enroute_to_obvious_by_peeking(state, knowledge)


def play(
    state: Klondike,
    knowledge: StockKnowledge,
    max_steps: int = 1000,
    on_step: Callable[[Klondike, int], None] | None = None,
    max_revisits: int = 3,
) -> tuple[Klondike, int]:
    """Run ``strategy_step`` until the game is won, stuck, or ``max_steps`` is reached.

    The strategy is deterministic, so a table seen more than ``max_revisits``
    times means it is going around in circles and the game stops there too.
    ``on_step`` is called with the new state and step count after every step.
    """
    seen_states: dict[str, int] = {}
    steps = 0
    while steps < max_steps and not state.is_done():
        state, moved = strategy_step(state, knowledge)
        if not moved:
            logger.info("No more moves after %d steps", steps)
            break
        steps += 1
        if on_step is not None:
            on_step(state, steps)

        game_state = state.as_json()
        seen_states[game_state] = seen_states.get(game_state, 0) + 1
        if seen_states[game_state] > max_revisits:
            logger.info("Loop detected after %d steps", steps)
            break
    return state, steps
