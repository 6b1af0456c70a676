import pytest
from klondike import IllegalMoveError
from location import Foundation, Move, PlanStep, Tableau, WastePile
from executor import execute_path, expose_in_waste, perform_move
from planners import compute_join_path
from stock_knowledge import KnowledgeMissError, StockKnowledge
from table_builder import build_game, card
import oracle


def knowledge_of_stock(state) -> StockKnowledge:
    knowledge = StockKnowledge()
    for c in reversed(state.stock.inspect_all()):
        knowledge.record_drawn(c)
    return knowledge


def test_perform_waste_to_tableau():
    state = build_game(waste=["QS"], tableaus={0: ([], ["KH"])})

    new_state = perform_move(state, Move(WastePile(), Tableau(0)))

    assert oracle.exposed_cards(new_state, 0) == [card("KH"), card("QS")]
    assert oracle.waste_top(state) == card("QS")


def test_perform_waste_to_foundation():
    state = build_game(waste=["AC"])

    new_state = perform_move(state, Move(WastePile(), Foundation(2)))

    assert oracle.foundation_top(new_state, 2) == card("AC")


def test_perform_tableau_to_foundation():
    state = build_game(tableaus={3: (["6D"], ["AD"])})

    new_state = perform_move(state, Move(Tableau(3, 0), Foundation(1)))

    assert oracle.foundation_top(new_state, 1) == card("AD")
    assert oracle.exposed_cards(new_state, 3) == [card("6D")]


def test_perform_tableau_to_tableau_moves_from_position():
    state = build_game(tableaus={0: (["2C", "3C"], ["9D", "8S", "7H"]), 1: ([], ["9H"])})

    new_state = perform_move(state, Move(Tableau(0, 1), Tableau(1, 0)))

    assert oracle.exposed_cards(new_state, 1) == [card("9H"), card("8S"), card("7H")]
    assert oracle.exposed_cards(new_state, 0) == [card("9D")]
    assert oracle.num_down_cards(new_state, 0) == 2


def test_perform_illegal_move_fails_loudly():
    state = build_game(waste=["2C"])

    with pytest.raises(IllegalMoveError):
        perform_move(state, Move(WastePile(), Foundation(2)))


def test_expose_in_waste_resets_the_stock():
    state = build_game(stock=["3S", "9D", "KC"])
    knowledge = knowledge_of_stock(state)
    state = oracle.draw_from_stock_pile(oracle.draw_from_stock_pile(state))

    exposed = expose_in_waste(state, knowledge, card("3S"))

    assert oracle.waste_top(exposed) == card("3S")
    assert oracle.stock_size(exposed) == 2


def test_expose_in_waste_when_already_on_top():
    state = build_game(stock=["3S", "9D"])
    knowledge = knowledge_of_stock(state)
    state = oracle.draw_from_stock_pile(state)

    assert expose_in_waste(state, knowledge, card("3S")) is state


def test_expose_unknown_card():
    state = build_game(stock=["3S", "9D"])
    knowledge = knowledge_of_stock(state)

    with pytest.raises(KnowledgeMissError):
        expose_in_waste(state, knowledge, card("4H"))


def test_expose_card_missing_from_the_stock():
    state = build_game(stock=["3S", "9D"])
    knowledge = knowledge_of_stock(state)
    knowledge.record_drawn(card("4H"))

    with pytest.raises(KnowledgeMissError):
        expose_in_waste(state, knowledge, card("4H"))


def test_execute_join_path():
    state = build_game(
        stock=["AD", "6H", "8H"],
        tableaus={
            0: (["2S"], ["5C"]),
            1: ([], ["9S"]),
            3: ([], ["QC", "7C"]),
        },
    )
    knowledge = knowledge_of_stock(state)
    path = compute_join_path(state, knowledge, 0, 1)
    assert path.exists

    new_state = execute_path(state, knowledge, path.steps, 0, Tableau(1, 0))

    assert oracle.exposed_cards(new_state, 1) == [card(text) for text in ["9S", "8H", "7C", "6H", "5C"]]
    assert oracle.exposed_cards(new_state, 0) == [card("2S")]
    assert oracle.exposed_cards(new_state, 3) == [card("QC")]
    assert knowledge.cards() == [card("AD")]
    # the input state is left alone
    assert oracle.exposed_cards(state, 1) == [card("9S")]


def test_execute_foundation_path():
    state = build_game(
        stock=["3H", "KS"],
        foundations={0: "AH"},
        tableaus={0: (["JD"], ["4H"]), 2: ([], ["2H"])},
    )
    knowledge = knowledge_of_stock(state)
    steps = (
        PlanStep(Move(Tableau(2, 0), Foundation(0)), card("2H")),
        PlanStep(Move(WastePile(), Foundation(0)), card("3H")),
    )

    new_state = execute_path(state, knowledge, steps, 0, Foundation(0))

    assert oracle.foundation_top(new_state, 0) == card("4H")
    assert oracle.exposed_cards(new_state, 0) == [card("JD")]
    assert oracle.exposed_cards(new_state, 2) == []
    assert knowledge.cards() == [card("KS")]


def test_perform_waste_king_onto_empty_column():
    state = build_game(waste=["KS"], tableaus={0: ([], ["QH"])})

    new_state = perform_move(state, Move(WastePile(), Tableau(2)))

    assert oracle.exposed_cards(new_state, 2) == [card("KS")]
    assert oracle.waste_top(new_state) is None
