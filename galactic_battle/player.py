"""A battle participant: fleet, grids, turns, gifts and statistics."""

from __future__ import annotations

import random
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, TextIO

from galactic_battle.ships import (
    BattleShip,
    MonCalamariCruiser,
    ShipStatus,
    StarDestroyer,
    TIEFighter,
    XWingSquadron,
)

MAX_ROWS = 12
MAX_COLS = 12
MAX_FLEET = 12
EMPTY = "*"
MISS = "0"

# Ships deployed for each battle mode, in placement order.
FLEETS: dict[int, list[tuple[type[BattleShip], int]]] = {
    1: [(StarDestroyer, 1), (MonCalamariCruiser, 1), (XWingSquadron, 1), (TIEFighter, 2)],
    2: [(StarDestroyer, 2), (MonCalamariCruiser, 2), (XWingSquadron, 2), (TIEFighter, 4)],
    3: [(StarDestroyer, 4), (MonCalamariCruiser, 3), (XWingSquadron, 2), (TIEFighter, 4)],
}

# Upper bound of a 1..100 roll and the gift it selects.
_GIFT_ODDS = [(10, 1), (40, 2), (60, 3), (80, 4), (100, 5)]

_BONUS_SHIPS: list[tuple[int, type[BattleShip], str]] = [
    (10, StarDestroyer, "You are awarded a Star Destroyer!\n"),
    (30, MonCalamariCruiser, "You are awarded a Mon Calamari Cruiser!\n"),
    (60, XWingSquadron, "You are awarded an X-Wing Squadron!\n"),
    (100, TIEFighter, "You are awarded a TIE Fighter!\n"),
]

_NUMBER = re.compile(r"\s*([+-]?\d+)")


def parse_coordinate(text: str) -> tuple[str, int]:
    """Split a coordinate such as ``b4`` into its row letter and 1-based column.

    Raises ValueError when no column number follows the row letter.
    """
    if len(text) < 2:
        raise ValueError(f"invalid coordinate: {text!r}")
    match = _NUMBER.match(text[1:])
    if match is None:
        raise ValueError(f"invalid coordinate: {text!r}")
    return text[0], int(match.group(1))


def _stdin_reader() -> Callable[[], str]:
    def tokens():
        for line in sys.stdin:
            yield from line.split()

    stream = tokens()

    def read() -> str:
        try:
            return next(stream)
        except StopIteration:
            raise EOFError("no more input") from None

    return read


@dataclass
class PlayerStats:
    """Running totals shown after each round."""

    total_shots: int = 0
    hits: int = 0
    misses: int = 0
    lost_cells: int = 0
    lost_by_size: dict[int, int] = field(default_factory=dict)


class Player:
    """One side of the battle, reading its moves from ``read_token``."""

    def __init__(
        self,
        name: str,
        read_token: Optional[Callable[[], str]] = None,
        out: Optional[TextIO] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.name = name
        self.read_token = read_token if read_token is not None else _stdin_reader()
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.fleet: list[BattleShip] = []
        self.grid = [[EMPTY] * MAX_COLS for _ in range(MAX_ROWS)]
        self.attack_grid = [[EMPTY] * MAX_COLS for _ in range(MAX_ROWS)]
        self.reduced_shots_next_round = 0
        self.force_single_shot_next_round = False
        self.shoot_again = False
        self.stats = PlayerStats()

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _prompt(self, text: str) -> str:
        self._write(text)
        if hasattr(self.out, "flush"):
            self.out.flush()
        return self.read_token()

    def _roll(self) -> int:
        return self.rng.randint(1, 100)

    def display_grid(self) -> None:
        """Print the player's own fleet grid beside the attack board."""
        header = "".join(f"{n} " if n < 10 else str(n) for n in range(1, MAX_COLS + 1))
        lines = [
            f"\nPlayer: {self.name}\n\n",
            "Your Fleet\t\t\t\tAttack Board\n",
            f"  {header}\t  {header}\n",
        ]
        for index, (own, attack) in enumerate(zip(self.grid, self.attack_grid)):
            label = chr(ord("a") + index)
            own_cells = "".join(f"{cell} " for cell in own)
            attack_cells = "".join(f"{cell} " for cell in attack)
            lines.append(f"{label} {own_cells}\t{label} {attack_cells}\n")
        lines.append("\n")
        self._write("".join(lines))

    def add_ship(self, ship: BattleShip) -> bool:
        """Add a ship to the fleet; returns False when the fleet is already full."""
        if len(self.fleet) < MAX_FLEET:
            self.fleet.append(ship)
            return True
        self._write("Hey! Ship count is full!\n")
        return False

    def all_ships_sunk(self) -> bool:
        """Return whether every ship in the fleet has been sunk."""
        return all(ship.is_sunk() for ship in self.fleet)

    def deploy(self, mode: int) -> None:
        """Place and enlist the fleet for battle mode 1, 2 or 3; other modes deploy nothing."""
        for ship_type, count in FLEETS.get(mode, []):
            for _ in range(count):
                ship = ship_type()
                self.place_ship(ship)
                self.add_ship(ship)

    def place_ship(self, ship: BattleShip) -> None:
        """Ask for start and end cells until the ship fits on the grid, then place it."""
        self.display_grid()
        while True:
            self._write(f"You are placing a ship of size: {ship.size}\n")
            start = self._prompt("Enter start coordinate: ")
            end = self._prompt("Enter end coordinate: ")
            try:
                start_letter, start_col = parse_coordinate(start)
                end_letter, end_col = parse_coordinate(end)
            except ValueError:
                self._write("Error! Invalid coordinate format! Try again.\n")
                continue

            start_row = ord(start_letter) - ord("a")
            end_row = ord(end_letter) - ord("a")
            start_c = start_col - 1
            end_c = end_col - 1
            in_bounds = all(0 <= r < MAX_ROWS for r in (start_row, end_row)) and all(
                0 <= c < MAX_COLS for c in (start_c, end_c)
            )
            if not in_bounds:
                self._write("Error! Coordinates out of bounds! Try again.\n")
                continue

            row_diff = end_row - start_row
            col_diff = end_c - start_c
            if not (row_diff == 0 or col_diff == 0 or abs(row_diff) == abs(col_diff)):
                self._write(
                    "Error! You can only horizontal, vertical or diagonal placement is allowed.\n"
                )
                continue

            if max(abs(row_diff), abs(col_diff)) + 1 != ship.size:
                self._write(
                    "Error! Your entered coordinates do not match with ship size "
                    f"({ship.size}). Try again.\n"
                )
                continue

            step_row = (row_diff > 0) - (row_diff < 0)
            step_col = (col_diff > 0) - (col_diff < 0)
            cells = [
                (start_row + i * step_row, start_c + i * step_col) for i in range(ship.size)
            ]
            if any(self.grid[r][c] != EMPTY for r, c in cells):
                self._write("Ship overlaps with another. Try different coordinates.\n")
                continue

            for index, (r, c) in enumerate(cells):
                self.grid[r][c] = ship.symbol
                ship.set_position(index, chr(r + ord("a")), c + 1)
            return

    def _shots_this_round(self) -> int:
        if self.force_single_shot_next_round:
            self.force_single_shot_next_round = False
            return 1
        shots = max((ship.laser_bursts for ship in self.fleet if not ship.is_sunk()), default=0)
        if self.reduced_shots_next_round > 0 and shots > 1:
            shots -= 1
            self.reduced_shots_next_round -= 1
        return shots

    def _fire(self, enemy: Player, row_letter: str, row: int, col: int) -> bool:
        col_index = col - 1
        target = enemy.grid[row][col_index]
        if target == EMPTY:
            self._write("MISS.\n")
            self.attack_grid[row][col_index] = MISS
            enemy.grid[row][col_index] = MISS
            return False

        self._write("Lucky You!!! HIT!\n")
        self.attack_grid[row][col_index] = target
        ship = next((s for s in enemy.fleet if s.occupies_cell(row_letter, col)), None)
        if ship is not None:
            ship.mark_hit()
            if ship.is_sunk():
                self.stats.lost_cells += ship.size
                self.stats.lost_by_size[ship.size] = self.stats.lost_by_size.get(ship.size, 0) + 1
                for pos in ship.positions:
                    enemy.grid[ord(pos.row) - ord("a")][pos.col - 1] = target
                self._write(">> You sank a ship! Full body revealed!\n")
        return True

    def take_turn(self, enemy: Player) -> None:
        """Play one turn of shots against ``enemy``, then award any gift earned."""
        max_shots = self._shots_this_round()
        self._write(f"\n{self.name}, it's your turn. You can shoot {max_shots} time(s).\n")

        shots_done = 0
        hits = 0
        while shots_done < max_shots:
            coord = self._prompt("Enter coordinate to shoot (e.g., b4): ")
            if len(coord) < 2:
                self._write("Invalid format! Try again.\n")
                continue
            row_letter = coord[0]
            if not "a" <= row_letter <= "z":
                self._write("Invalid char!! You can only use lower case characters!\n")
                continue
            try:
                _, col = parse_coordinate(coord)
            except ValueError:
                self._write("Invalid format! Try again.\n")
                continue
            row = ord(row_letter) - ord("a")
            if not (0 <= row < MAX_ROWS and 0 <= col - 1 < MAX_COLS):
                self._write("Invalid coordinate! Out of bounds.\n")
                continue
            if self.attack_grid[row][col - 1] != EMPTY:
                self._write("You've already shot here! Try a different coordinate.\n")
                continue
            if self._fire(enemy, row_letter, row, col):
                hits += 1
            shots_done += 1

        self.stats.total_shots += max_shots
        self.stats.hits += hits
        self.stats.misses += max_shots - hits

        if hits >= 2:
            self._write("\nCongrats!! Your Bonus gift is coming...\n")
            dice = self._roll()
            gift = next(g for bound, g in _GIFT_ODDS if dice <= bound)
            self.apply_gift(enemy, gift)

        self._write(f"\n{self.name}'s updated grid:\n")
        self.display_grid()
        self._write(f"\n{enemy.name}'s updated grid:\n")
        enemy.display_grid()

    def apply_gift(self, enemy: Player, gift_id: int) -> None:
        """Apply bonus gift 1 to 5; other identifiers have no effect."""
        if gift_id == 1:
            self._write("Gift 1 is applied to you!! Random battleship added to your fleet!\n")
            roll = self._roll()
            _, ship_type, message = next(entry for entry in _BONUS_SHIPS if roll <= entry[0])
            ship = ship_type()
            self._write(message)
            self.bonus_add_ship(ship)
            self.add_ship(ship)
        elif gift_id == 2:
            self._write("Gift 2 is applied to you!! You get only ONE extra shot for this round!\n")
        elif gift_id == 3:
            self._write("Gift 3 is applied to you!! Your enemy will have one less shot next round!\n")
            enemy.reduced_shots_next_round += 1
        elif gift_id == 4:
            self._write("Gift 4 is applied to you!! Your enemy can only shoot ONCE next round!\n")
            enemy.force_single_shot_next_round = True
        elif gift_id == 5:
            self._write("Gift 5 is applied to you!! You will take another turn right away!\n")
            self.shoot_again = True

    def bonus_add_ship(self, ship: BattleShip) -> None:
        """Read the two announced bonus coordinates, then place the ship interactively."""
        self._prompt("Enter coordinates for your bonus ship: ")
        self.read_token()
        self.place_ship(ship)

    def print_stats(self) -> None:
        """Print shot totals, sunk counts and the status of every ship."""
        lost = self.stats.lost_by_size
        lines = [
            f"\n=== Player Stats for: {self.name} ===\n",
            f"Total Shoots: {self.stats.total_shots}\n",
            f"Hits: {self.stats.hits}\n",
            f"Misses: {self.stats.misses}\n",
            f"Lost: {self.stats.lost_cells} cells\n",
            f"Lost Star Destroyer (5): {lost.get(5, 0)}\n",
            f"Lost Mon Calamari Cruiser (4): {lost.get(4, 0)}\n",
            f"Lost X-Wing Squadron (3): {lost.get(3, 0)}\n",
            f"Lost TIE Fighter (1): {lost.get(1, 0)}\n",
            "\n-- Ship Statuses --\n",
        ]
        for number, ship in enumerate(self.fleet, start=1):
            if ship.status is ShipStatus.SUNK:
                state = "SUNK"
            elif ship.status is ShipStatus.DAMAGED:
                state = f"DAMAGED ({ship.remaining_hits} hit(s) left)"
            else:
                state = "OPERATIVE"
            lines.append(f"Ship {number} [{ship.symbol}] - {state}\n")
        lines.append("---------------------------\n")
        self._write("".join(lines))

    def reset_shoot_again(self) -> None:
        """Clear the extra-turn flag set by gift 5."""
        self.shoot_again = False