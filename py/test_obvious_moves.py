from location import Foundation, Move, Tableau, WastePile
from obvious_moves import calculate_obvious_move, downcard_freeing_candidates, possible_to_play_deuce
from table_builder import build_game, card


def test_no_move_on_empty_table():
    assert calculate_obvious_move(build_game()) is None


def test_waste_ace_goes_first():
    state = build_game(waste=["AD"], tableaus={2: ([], ["AS"])})

    assert calculate_obvious_move(state) == Move(WastePile(), Foundation(1))


def test_lowest_tableau_ace_wins():
    state = build_game(
        waste=["9D"],
        tableaus={1: (["3C"], ["8S", "AC"]), 4: ([], ["AH"])},
    )

    assert calculate_obvious_move(state) == Move(Tableau(1, 1), Foundation(2))


def test_ace_beats_deuce():
    state = build_game(waste=["2H"], foundations={0: "AH"}, tableaus={6: ([], ["AS"])})

    assert calculate_obvious_move(state) == Move(Tableau(6, 0), Foundation(3))


def test_waste_deuce():
    state = build_game(waste=["2C"], foundations={2: "AC"}, tableaus={0: ([], ["2H"])})

    assert possible_to_play_deuce(state, card("2C"))
    assert not possible_to_play_deuce(state, card("2H"))
    assert calculate_obvious_move(state) == Move(WastePile(), Foundation(2))


def test_tableau_deuce():
    state = build_game(tableaus={0: ([], ["2H"])}, foundations={0: "AH"})

    assert calculate_obvious_move(state) == Move(Tableau(0, 0), Foundation(0))


def test_deuce_needs_ace_on_foundation():
    state = build_game(tableaus={0: ([], ["2H"])}, foundations={0: "2H"})

    assert calculate_obvious_move(state) is None


def test_deuce_before_freeing_down_cards():
    state = build_game(
        foundations={2: "AC"},
        tableaus={
            0: (["4H", "5H"], ["9S"]),
            1: ([], ["10D"]),
            3: ([], ["2C"]),
        },
    )

    assert calculate_obvious_move(state) == Move(Tableau(3, 0), Foundation(2))


def test_higher_promotions_are_not_obvious():
    state = build_game(foundations={0: "3H"}, tableaus={0: ([], ["4H"])})

    assert calculate_obvious_move(state) is None


def test_frees_column_with_most_down_cards():
    state = build_game(
        tableaus={
            1: (["2D"], ["9S"]),
            2: (["3D", "4D", "5D"], ["9C", "8H"]),
            5: ([], ["10H"]),
        },
    )

    # both 9s fit on the 10H; tableau 2 hides more cards
    assert calculate_obvious_move(state) == Move(Tableau(2, 0), Tableau(5, 0))


def test_king_to_empty_column():
    state = build_game(
        tableaus={
            0: (["4H"], ["3C"]),
            3: (["2D", "6S"], ["KH", "QS"]),
            4: ([], ["8D"]),
            5: ([], ["9C"]),
            6: ([], ["5S"]),
            1: ([], ["JH"]),
            2: ([], ["JS"]),
        },
    )

    assert calculate_obvious_move(state) is None

    state.tableaus[4].visible.get_all()
    assert calculate_obvious_move(state) == Move(Tableau(3, 0), Tableau(4, 0))


def test_equal_weights_prefer_highest_source_then_lowest_destination():
    state = build_game(
        tableaus={
            0: ([], ["10H"]),
            2: (["3D"], ["9S"]),
            4: (["5D"], ["9C"]),
            6: ([], ["10D"]),
        },
    )

    candidates = downcard_freeing_candidates(state)

    assert candidates == [(1, 4, 0), (1, 4, 6), (1, 2, 0), (1, 2, 6)]
    assert calculate_obvious_move(state) == Move(Tableau(4, 0), Tableau(0, 0))


def test_same_color_does_not_free():
    state = build_game(tableaus={0: (["3D"], ["9H"]), 1: ([], ["10D"])})

    assert downcard_freeing_candidates(state) == []


def test_calculator_is_idempotent_and_pure():
    state = build_game(
        stock=["4S"],
        waste=["7D"],
        tableaus={0: (["3D"], ["9H"]), 1: ([], ["10D"])},
        foundations={3: "2S"},
    )
    before = state.as_json()

    assert calculate_obvious_move(state) is None
    assert calculate_obvious_move(state) is None
    assert state.as_json() == before
