"""Value-semantics access to a Klondike table.

The strategy never mutates a table in place: every mutator below copies its
input, performs one primitive move on the copy and returns it. Illegal
requests raise ``IllegalMoveError`` from the underlying table.
"""

from dataclasses import dataclass

from klondike import Card, IllegalMoveError, Klondike


@dataclass(frozen=True)
class TableauPosition:
    column: int
    num_hidden: int
    position: int  # index within the face-up run


def waste_top(state: Klondike) -> Card | None:
    return state.waste.inspect_top()


def stock_size(state: Klondike) -> int:
    return len(state.stock)


def exposed_cards(state: Klondike, column: int) -> list[Card]:
    """Face-up cards of ``column``, bottommost first."""
    return state.tableaus[column].visible.inspect_all()


def num_down_cards(state: Klondike, column: int) -> int:
    return state.tableaus[column].hidden_len()


def foundation_top(state: Klondike, suit_index: int) -> Card | None:
    return state.foundations[suit_index].inspect_top()


def draw_from_stock_pile(state: Klondike) -> Klondike:
    new_state = state.copy()
    new_state.move_stock_to_waste()
    return new_state


def reset_stock_pile(state: Klondike) -> Klondike:
    new_state = state.copy()
    new_state.cycle_waste_to_stock()
    return new_state


def move_from_visible_pile_to_tableau(state: Klondike, column: int) -> Klondike:
    new_state = state.copy()
    new_state.move_waste_to_tableau(column)
    return new_state


def move_from_visible_pile_to_foundation(state: Klondike, suite: int) -> Klondike:
    new_state = state.copy()
    new_state.move_waste_to_foundation(suite)
    return new_state


def move_from_tableau_to_foundation(state: Klondike, column: int, suite: int) -> Klondike:
    new_state = state.copy()
    new_state.move_tableau_to_foundation(column, suite)
    return new_state


def move_from_column_to_column(state: Klondike, position: TableauPosition, dest_column: int) -> Klondike:
    actual_hidden = num_down_cards(state, position.column)
    if position.num_hidden != actual_hidden:
        msg = (
            f"Tableau {position.column} has {actual_hidden} hidden cards, "
            f"move was planned with {position.num_hidden}"
        )
        raise IllegalMoveError(msg)
    new_state = state.copy()
    new_state.move_tableau_to_tableau(
        position.column,
        position.num_hidden + position.position,
        dest_column,
    )
    return new_state
