"""Running a full two-player battle from the command line."""

from __future__ import annotations

import random
import sys
from collections.abc import Callable, Iterator
from typing import Optional, TextIO

from galactic_battle.player import Player


def _stdin_tokens() -> Callable[[], str]:
    def tokens() -> Iterator[str]:
        for line in sys.stdin:
            yield from line.split()

    stream = tokens()

    def read() -> str:
        try:
            return next(stream)
        except StopIteration:
            raise EOFError("no more input") from None

    return read


def _ask(read_token: Callable[[], str], out: TextIO, text: str) -> str:
    out.write(text)
    if hasattr(out, "flush"):
        out.flush()
    return read_token()


def _read_mode(token: str) -> int:
    # An unreadable mode behaves like mode 0: no fleet is deployed.
    try:
        return int(token)
    except ValueError:
        return 0


def play(
    read_token: Optional[Callable[[], str]] = None,
    out: Optional[TextIO] = None,
    rng: Optional[random.Random] = None,
) -> Player:
    """Play one battle to the end and return the winning player."""
    read = read_token if read_token is not None else _stdin_tokens()
    stream = out if out is not None else sys.stdout
    dice = rng if rng is not None else random.Random()
    write = stream.write

    write("Welcome to Galactic Battle NCC!\n")
    name1 = _ask(read, stream, "Enter Player 1 name: ")
    name2 = _ask(read, stream, "Enter Player 2 name: ")
    write("\nSelect Battle Mode:\n")
    write("1.The Swiftstrike (5x8)\n")
    write("2.The Starlight Clash (8x10)\n")
    write("3.Wrath of Titans (10x12)\n")
    mode = _read_mode(_ask(read, stream, "Enter mode: "))

    p1 = Player(name1, read, stream, dice)
    p2 = Player(name2, read, stream, dice)

    write(f"\n--- {name1}'s turn to place ships ---\n")
    p1.deploy(mode)
    write(f"\n--- {name2}'s turn to place ships ---\n")
    p2.deploy(mode)

    write("\nAll ships deployed. Lets begin!\n")

    p1_turn = dice.randrange(2) == 0
    starter = name1 if p1_turn else name2
    write(f"\nRandomizing first player... {starter} will start!\n")

    round_number = 1
    while True:
        write(f"\n========== ROUND {round_number} ==========\n")
        attacker, defender = (p1, p2) if p1_turn else (p2, p1)

        write(f"{attacker.name}'s turn:\n")
        attacker.take_turn(defender)

        if defender.all_ships_sunk():
            write(f"{attacker.name} WINS THE BATTLE!\n")
            winner = attacker
            break

        if attacker.shoot_again:
            if attacker is p1:
                write(f"Gift 5 Activated → {attacker.name} gets another turn immediately!\n")
            else:
                write(f"You earned Gift 5!!!{attacker.name} gets another turn immediately!\n")
            attacker.reset_shoot_again()
            continue

        write(f"\nROUND {round_number} STATS:\n")
        p1.print_stats()
        p2.print_stats()

        p1_turn = not p1_turn
        round_number += 1

    write("\nFINAL GRIDS:\n")
    p1.display_grid()
    p2.display_grid()
    write("\nBattle Complete!!!\n")
    return winner


def main(argv: Optional[list[str]] = None) -> int:
    """Start an interactive battle on standard input and output."""
    del argv
    try:
        play()
    except (EOFError, KeyboardInterrupt):
        sys.stdout.write("\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())