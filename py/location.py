from enum import Enum
from dataclasses import dataclass
from typing import override

from klondike import NUM_FOUNDATIONS, NUM_TABLEAUS, Card


class ContractViolation(TypeError):
    """Raised when a location or move is used in a way the strategy never should."""


class LocationTag(str, Enum):
    WASTE_PILE = "WASTE_PILE"
    TABLEAU = "TABLEAU"
    FOUNDATION = "FOUNDATION"


@dataclass(frozen=True)
class WastePile:
    @property
    def tag(self) -> LocationTag:
        return LocationTag.WASTE_PILE

    @override
    def __str__(self) -> str:
        return "waste pile"


@dataclass(frozen=True)
class Tableau:
    column: int
    position: int = 0  # where in the face-up run a tableau-to-tableau move starts

    def __post_init__(self) -> None:
        if not 0 <= self.column < NUM_TABLEAUS:
            msg = f"Invalid tableau column {self.column}"
            raise ContractViolation(msg)

    @property
    def tag(self) -> LocationTag:
        return LocationTag.TABLEAU

    @override
    def __str__(self) -> str:
        return f"tableau {self.column} position {self.position}"


@dataclass(frozen=True)
class Foundation:
    suit_index: int

    def __post_init__(self) -> None:
        if not 0 <= self.suit_index < NUM_FOUNDATIONS:
            msg = f"Invalid foundation index {self.suit_index}"
            raise ContractViolation(msg)

    @staticmethod
    def for_card(card: Card) -> "Foundation":
        return Foundation(int(card.suit))

    @property
    def tag(self) -> LocationTag:
        return LocationTag.FOUNDATION

    @override
    def __str__(self) -> str:
        return f"foundation {self.suit_index}"


type Location = WastePile | Tableau | Foundation


LEGAL_PAIRS = {
    (LocationTag.WASTE_PILE, LocationTag.TABLEAU),
    (LocationTag.WASTE_PILE, LocationTag.FOUNDATION),
    (LocationTag.TABLEAU, LocationTag.FOUNDATION),
    (LocationTag.TABLEAU, LocationTag.TABLEAU),
}


@dataclass(frozen=True)
class Move:
    from_location: Location
    to_location: Location

    def __post_init__(self) -> None:
        pair = (self.from_location.tag, self.to_location.tag)
        if pair not in LEGAL_PAIRS:
            msg = f"Unsupported move from {self.from_location} to {self.to_location}"
            raise ContractViolation(msg)

    @override
    def __str__(self) -> str:
        return f"from {self.from_location} to {self.to_location}"


@dataclass(frozen=True)
class PlanStep:
    move: Move
    card: Card

    @override
    def __str__(self) -> str:
        return f"{self.move} {self.card}"
