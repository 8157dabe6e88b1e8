# galactic-battle

A two-player battleship game for the terminal, set in space. Both players
share one keyboard. Each of them places a fleet of starships on a grid, and
then they take turns firing laser bursts at the other fleet.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Playing

```
galactic-battle
```

The game reads whitespace-separated words from standard input. It first asks
for the two players' names (one word each) and a battle mode:

| Mode | Name                 | Fleet per player                                                 |
|------|----------------------|------------------------------------------------------------------|
| 1    | The Swiftstrike      | 1 Star Destroyer, 1 Mon Calamari Cruiser, 1 X-Wing, 2 TIE        |
| 2    | The Starlight Clash  | 2 Star Destroyers, 2 Mon Calamari Cruisers, 2 X-Wings, 4 TIE     |
| 3    | Wrath of Titans      | 4 Star Destroyers, 3 Mon Calamari Cruisers, 2 X-Wings, 4 TIE     |

Whatever the mode, the board is 12 rows (`a` to `l`) by 12 columns. Any other
mode number deploys no ships at all, so the first turn ends the game. If the
input runs out, the command prints a newline and exits with status 1; a
finished battle exits with status 0.

### Ships

| Ship                 | Symbol | Cells | Hits to sink | Laser bursts |
|----------------------|--------|-------|--------------|--------------|
| Star Destroyer       | `5`    | 5     | 4            | 3            |
| Mon Calamari Cruiser | `4`    | 4     | 3            | 4            |
| X-Wing Squadron      | `3`    | 3     | 2            | 2            |
| TIE Fighter          | `1`    | 1     | 1            | 1            |

A ship sinks once it has taken its number of hits, which may be fewer than
its number of cells.

### Placing ships

Coordinates are a lower-case row letter followed by a column number, such as
`a1` or `c10`. For each ship you enter a start and an end coordinate. A ship
may lie horizontally, vertically or diagonally, the distance between the two
coordinates must match the ship's size, and ships may not overlap. A rejected
placement is explained and asked for again.

### Turns

On your turn you may fire as many shots as the ship with the most laser
bursts still afloat in your fleet. A hit shows the ship's symbol on your
attack board, and a miss shows `0` on both boards. When a ship sinks, all of
its cells are revealed. Shooting a cell you have already shot is refused.

Two or more hits in one turn earn a random gift (odds in brackets):

1. (10%) a random new ship for your fleet. You are first asked for two bonus
   coordinates, which are read and set aside, and then you place the ship
   in the usual way. The fleet holds at most 12 ships; beyond that the ship
   is not added.
2. (30%) a message announcing one extra shot; it has no further effect.
3. (20%) your enemy fires one shot fewer next round (never fewer than one).
4. (20%) your enemy may fire only once next round.
5. (20%) you take another turn immediately.

After each round, except one followed by an extra turn, statistics for both
players are printed: shots, hits and misses, the enemy ships that player has
sunk (shown under the "Lost" lines) and the status of each of the player's
own ships. The game ends when one player's whole fleet has been sunk, and the
final grids are shown.

## Using the package

- `galactic_battle.ships`: `ShipStatus`, `ShipPosition`, the abstract
  `BattleShip` and its kinds `StarDestroyer`, `MonCalamariCruiser`,
  `XWingSquadron` and `TIEFighter`.
- `galactic_battle.player`: `Player`, which holds a fleet, its own grid and
  an attack grid, and plays turns (`deploy`, `place_ship`, `take_turn`,
  `apply_gift`, `print_stats`, …); and `parse_coordinate`, which splits text
  such as `"b4"` into `("b", 4)` and raises `ValueError` when no column
  follows.
- `galactic_battle.game`: `play`, which runs a whole battle and returns the
  winning `Player`, and `main`, the command's entry point.

`play` and `Player` take a function that returns the next input word, an
output stream and a `random.Random`, so a whole game can be driven from
scripted input with a fixed seed:

```python
import io
import random

from galactic_battle.game import play

words = iter("Han Leia 9".split())
out = io.StringIO()
winner = play(lambda: next(words), out, random.Random(1))
print(winner.name)
```