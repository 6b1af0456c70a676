"""Moves that can be played right away without peeking at the stock pile.

Only ACE and DEUCE promotions count as obvious. Promoting anything higher
early can strand cards the tableau still needs, so the planners handle those.
"""

import logging

from klondike import NUM_TABLEAUS, Card, Klondike, Number
from location import Foundation, Move, Tableau, WastePile
import oracle

logger = logging.getLogger(__name__)


def possible_to_play_deuce(state: Klondike, card: Card) -> bool:
    if card.number != Number.TWO:
        return False
    foundation_card = oracle.foundation_top(state, int(card.suit))
    return foundation_card is not None and foundation_card.number == Number.ACE


def _top_promotion(state: Klondike, should_promote) -> Move | None:
    card = oracle.waste_top(state)
    if card is not None and should_promote(card):
        return Move(WastePile(), Foundation.for_card(card))

    for column in range(NUM_TABLEAUS):
        cards = oracle.exposed_cards(state, column)
        if len(cards) == 0:
            continue
        if should_promote(cards[-1]):
            return Move(Tableau(column, len(cards) - 1), Foundation.for_card(cards[-1]))
    return None


def downcard_freeing_candidates(state: Klondike) -> list[tuple[int, int, int]]:
    """All ``(num_down_cards, src, dest)`` relocations that would uncover a hidden card."""
    candidates = []
    for src in reversed(range(NUM_TABLEAUS)):
        num_down = oracle.num_down_cards(state, src)
        if num_down == 0:
            continue
        src_card = oracle.exposed_cards(state, src)[0]

        for dest in range(NUM_TABLEAUS):
            if dest == src:
                continue
            dest_cards = oracle.exposed_cards(state, dest)
            if len(dest_cards) == 0:
                if src_card.number == Number.KING:
                    candidates.append((num_down, src, dest))
            else:
                dest_card = dest_cards[-1]
                if src_card.rank == dest_card.rank - 1 and src_card.color != dest_card.color:
                    candidates.append((num_down, src, dest))
    return candidates


def calculate_obvious_move(state: Klondike) -> Move | None:
    move = _top_promotion(state, lambda card: card.number == Number.ACE)
    if move is not None:
        return move

    move = _top_promotion(state, lambda card: possible_to_play_deuce(state, card))
    if move is not None:
        logger.debug("Possible to promote deuce %s", move)
        return move

    candidates = downcard_freeing_candidates(state)
    if len(candidates) == 0:
        return None

    # max() keeps the first of equally weighted candidates
    _num_down, src, dest = max(candidates, key=lambda candidate: candidate[0])
    dest_len = len(oracle.exposed_cards(state, dest))
    logger.debug(
        "Moving visible tableau %d (%s) -> %d to release more hidden cards",
        src,
        oracle.exposed_cards(state, src)[0],
        dest,
    )
    return Move(Tableau(src, 0), Tableau(dest, max(dest_len - 1, 0)))
