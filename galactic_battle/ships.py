"""Ship types that make up a player's fleet."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO


class ShipStatus(Enum):
    """Condition of a ship during the battle."""

    OPERATIVE = "operative"
    DAMAGED = "damaged"
    SUNK = "sunk"


@dataclass(frozen=True)
class ShipPosition:
    """One grid cell occupied by a ship: a row letter and a 1-based column."""

    row: str
    col: int


class BattleShip(ABC):
    """A ship occupying ``size`` cells that sinks after ``hits_to_destroy`` hits."""

    def __init__(self, size: int, hits_to_destroy: int, laser_bursts: int, symbol: str) -> None:
        self.size = size
        self.remaining_hits = hits_to_destroy
        self.laser_bursts = laser_bursts
        self.symbol = symbol
        self.status = ShipStatus.OPERATIVE
        self._positions: list[Optional[ShipPosition]] = [None] * size

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name of the ship type."""

    def shoot(self, out: Optional[TextIO] = None) -> int:
        """Announce a volley on ``out`` and return the number of laser bursts."""
        stream = sys.stdout if out is None else out
        stream.write(f"{self.display_name} firing {self.laser_bursts} shots!\n")
        return self.laser_bursts

    def mark_hit(self) -> None:
        """Register a hit; the ship becomes damaged, or sunk when no hits remain."""
        if self.status is ShipStatus.SUNK:
            return
        self.remaining_hits -= 1
        self.status = ShipStatus.SUNK if self.remaining_hits <= 0 else ShipStatus.DAMAGED

    def occupies_cell(self, row: str, col: int) -> bool:
        """Return whether the ship covers the given cell."""
        target = ShipPosition(row, col)
        return any(pos == target for pos in self._positions if pos is not None)

    def set_position(self, index: int, row: str, col: int) -> None:
        """Record the cell of the ship's ``index``-th segment; out-of-range indexes are ignored."""
        if 0 <= index < self.size:
            self._positions[index] = ShipPosition(row, col)

    def position(self, index: int) -> ShipPosition:
        """Return the cell of the ship's ``index``-th segment."""
        if not 0 <= index < self.size:
            raise IndexError(f"segment index {index} out of range for ship of size {self.size}")
        pos = self._positions[index]
        if pos is None:
            raise LookupError(f"segment {index} has not been placed")
        return pos

    @property
    def positions(self) -> list[ShipPosition]:
        """Cells of all placed segments, in placement order."""
        return [pos for pos in self._positions if pos is not None]

    def is_sunk(self) -> bool:
        """Return whether the ship has been sunk."""
        return self.status is ShipStatus.SUNK


class StarDestroyer(BattleShip):
    """Size 5, destroyed after 4 hits, fires 3 bursts."""

    display_name = "Star Destroyer"

    def __init__(self) -> None:
        super().__init__(5, 4, 3, "5")


class MonCalamariCruiser(BattleShip):
    """Size 4, destroyed after 3 hits, fires 4 bursts."""

    display_name = "Mon Calamari Cruiser"

    def __init__(self) -> None:
        super().__init__(4, 3, 4, "4")


class XWingSquadron(BattleShip):
    """Size 3, destroyed after 2 hits, fires 2 bursts."""

    display_name = "X-Wing Squadron"

    def __init__(self) -> None:
        super().__init__(3, 2, 2, "3")


class TIEFighter(BattleShip):
    """Size 1, destroyed by a single hit, fires 1 burst."""

    display_name = "TIE Fighter"

    def __init__(self) -> None:
        super().__init__(1, 1, 1, "1")