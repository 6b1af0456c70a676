"""Hand-built tables for the tests."""

from klondike import Klondike, Card, Suit, Number, Stack


SUIT_LETTERS = {"H": Suit.HEART, "D": Suit.DIAMOND, "C": Suit.CLUB, "S": Suit.SPADE}


def card(text: str) -> Card:
    """Parse short card names such as ``"10H"``, ``"AS"`` or ``"QD"``."""
    return Card(SUIT_LETTERS[text[-1]], Number(text[:-1]))


def build_game(
    *,
    stock: list[str] | None = None,
    waste: list[str] | None = None,
    tableaus: dict[int, tuple[list[str], list[str]]] | None = None,
    foundations: dict[int, str] | None = None,
) -> Klondike:
    """Build a table by hand.

    ``stock`` is listed in draw order, ``waste`` bottom to top, each tableau is
    ``(hidden, visible)`` bottom to top and each foundation is given by its top
    card (everything below it is filled in).
    """
    game = Klondike()
    game.stock = Stack([card(text) for text in reversed(stock or [])])
    game.waste = Stack([card(text) for text in waste or []])
    for idx, (hidden, visible) in (tableaus or {}).items():
        game.tableaus[idx].hidden = Stack([card(text) for text in hidden])
        game.tableaus[idx].visible = Stack([card(text) for text in visible])
    for idx, top in (foundations or {}).items():
        top_card = card(top)
        game.foundations[idx] = Stack([Card(top_card.suit, Number.from_int(n)) for n in range(1, top_card.rank + 1)])
    return game
