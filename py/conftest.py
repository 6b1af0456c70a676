import pytest
from klondike import Klondike


@pytest.fixture
def klondike_game():
    game = Klondike()
    game.reset(seed=7)
    return game
