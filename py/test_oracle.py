import pytest
from klondike import IllegalMoveError
from table_builder import build_game, card
import oracle


def test_accessors():
    state = build_game(
        stock=["3D", "4D"],
        waste=["8S"],
        tableaus={1: (["2C", "2S"], ["9H", "8C"])},
        foundations={1: "2D"},
    )

    assert oracle.waste_top(state) == card("8S")
    assert oracle.stock_size(state) == 2
    assert oracle.exposed_cards(state, 1) == [card("9H"), card("8C")]
    assert oracle.exposed_cards(state, 0) == []
    assert oracle.num_down_cards(state, 1) == 2
    assert oracle.foundation_top(state, 1) == card("2D")
    assert oracle.foundation_top(state, 0) is None


def test_mutators_do_not_touch_their_input():
    state = build_game(stock=["AH", "KS"])

    drawn = oracle.draw_from_stock_pile(state)
    promoted = oracle.move_from_visible_pile_to_foundation(drawn, 0)

    assert oracle.stock_size(state) == 2
    assert oracle.waste_top(state) is None
    assert oracle.waste_top(drawn) == card("AH")
    assert oracle.foundation_top(drawn, 0) is None
    assert oracle.foundation_top(promoted, 0) == card("AH")


def test_reset_stock_pile():
    state = build_game(stock=["AH", "KS"])
    state = oracle.draw_from_stock_pile(oracle.draw_from_stock_pile(state))

    state = oracle.reset_stock_pile(state)

    assert oracle.waste_top(state) is None
    assert oracle.waste_top(oracle.draw_from_stock_pile(state)) == card("AH")


def test_move_from_column_to_column():
    state = build_game(tableaus={0: (["5D"], ["QD", "JC"]), 1: ([], ["KS"])})

    moved = oracle.move_from_column_to_column(state, oracle.TableauPosition(0, 1, 0), 1)

    assert oracle.exposed_cards(moved, 1) == [card("KS"), card("QD"), card("JC")]
    assert oracle.exposed_cards(moved, 0) == [card("5D")]


def test_move_from_column_to_column_checks_hidden_count():
    state = build_game(tableaus={0: (["5D"], ["QD"]), 1: ([], ["KS"])})

    with pytest.raises(IllegalMoveError):
        oracle.move_from_column_to_column(state, oracle.TableauPosition(0, 0, 0), 1)


def test_illegal_moves_fail_loudly():
    state = build_game(waste=["5H"], tableaus={0: ([], ["6H"])})

    with pytest.raises(IllegalMoveError):
        oracle.move_from_visible_pile_to_tableau(state, 0)
    with pytest.raises(IllegalMoveError):
        oracle.move_from_tableau_to_foundation(state, 0, 0)
    with pytest.raises(IllegalMoveError):
        oracle.draw_from_stock_pile(state)
