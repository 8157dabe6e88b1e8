import io
from collections import deque

import pytest

from galactic_battle.player import MAX_COLS, MAX_ROWS, Player, parse_coordinate
from galactic_battle.ships import (
    MonCalamariCruiser,
    ShipPosition,
    ShipStatus,
    StarDestroyer,
    TIEFighter,
    XWingSquadron,
)


class ScriptedRng:
    def __init__(self, values):
        self.values = list(values)

    def randint(self, low, high):
        value = self.values.pop(0)
        assert low <= value <= high
        return value


def reader(tokens):
    queue = deque(tokens)

    def read():
        if not queue:
            raise EOFError
        return queue.popleft()

    return read


def make_player(name="Ann", tokens=(), rolls=()):
    out = io.StringIO()
    return Player(name, reader(tokens), out, ScriptedRng(rolls)), out


def with_ships(name, placements, extra=(), rolls=()):
    tokens = [t for _, start, end in placements for t in (start, end)] + list(extra)
    player, out = make_player(name, tokens, rolls)
    for ship, _, _ in placements:
        player.place_ship(ship)
        player.add_ship(ship)
    return player, out


def test_parse_coordinate_splits_letter_and_column():
    assert parse_coordinate("b4") == ("b", 4)
    assert parse_coordinate("a12") == ("a", 12)


@pytest.mark.parametrize("text", ["a", "", "ax", "b-"])
def test_parse_coordinate_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_coordinate(text)


def test_new_player_grids_are_empty():
    player, _ = make_player()
    assert len(player.grid) == MAX_ROWS
    assert all(row == ["*"] * MAX_COLS for row in player.grid)
    assert all(row == ["*"] * MAX_COLS for row in player.attack_grid)
    assert player.all_ships_sunk()


def test_place_ship_horizontal():
    player, _ = make_player(tokens=["a1", "a5"])
    ship = StarDestroyer()
    player.place_ship(ship)
    assert player.grid[0][:5] == ["5"] * 5
    assert player.grid[0][5] == "*"
    assert ship.positions == [ShipPosition("a", c) for c in range(1, 6)]


def test_place_ship_vertical_reversed():
    player, _ = make_player(tokens=["c2", "a2"])
    ship = XWingSquadron()
    player.place_ship(ship)
    assert [player.grid[r][1] for r in range(3)] == ["3", "3", "3"]
    assert ship.position(0) == ShipPosition("c", 2)
    assert ship.position(2) == ShipPosition("a", 2)


def test_place_ship_diagonal():
    player, _ = make_player(tokens=["a1", "d4"])
    ship = MonCalamariCruiser()
    player.place_ship(ship)
    assert [player.grid[i][i] for i in range(4)] == ["4"] * 4
    assert ship.occupies_cell("d", 4)


def test_place_ship_rejects_wrong_size_then_accepts():
    player, out = make_player(tokens=["a1", "a3", "b1", "b5"])
    ship = StarDestroyer()
    player.place_ship(ship)
    assert "do not match with ship size (5)" in out.getvalue()
    assert ship.position(0) == ShipPosition("b", 1)


def test_place_ship_rejects_out_of_bounds():
    player, out = make_player(tokens=["m1", "m1", "a13", "a13", "l12", "l12"])
    ship = TIEFighter()
    player.place_ship(ship)
    assert out.getvalue().count("Coordinates out of bounds") == 2
    assert player.grid[11][11] == "1"


def test_place_ship_rejects_bent_line():
    player, out = make_player(tokens=["a1", "b3", "a1", "a3"])
    player.place_ship(XWingSquadron())
    assert "horizontal, vertical or diagonal" in out.getvalue()
    assert player.grid[0][:3] == ["3"] * 3


def test_place_ship_rejects_overlap():
    player, out = make_player(tokens=["a1", "a5", "a3", "c3", "b3", "d3"])
    player.place_ship(StarDestroyer())
    ship = XWingSquadron()
    player.place_ship(ship)
    assert "overlaps with another" in out.getvalue()
    assert ship.positions[0] == ShipPosition("b", 3)
    assert player.grid[0][2] == "5"


def test_add_ship_refuses_beyond_twelve():
    player, out = make_player()
    for _ in range(12):
        assert player.add_ship(TIEFighter())
    assert not player.add_ship(TIEFighter())
    assert len(player.fleet) == 12
    assert "Hey! Ship count is full!" in out.getvalue()


def test_deploy_mode_one():
    tokens = ["a1", "a5", "b1", "b4", "c1", "c3", "d1", "d1", "e1", "e1"]
    player, _ = make_player(tokens=tokens)
    player.deploy(1)
    kinds = [type(ship) for ship in player.fleet]
    assert kinds == [StarDestroyer, MonCalamariCruiser, XWingSquadron, TIEFighter, TIEFighter]
    assert player.grid[4][0] == "1"


def test_deploy_mode_three_overflows_fleet():
    tokens = []
    for letter in "abcd":
        tokens += [f"{letter}1", f"{letter}5"]
    for letter in "efg":
        tokens += [f"{letter}1", f"{letter}4"]
    for letter in "hi":
        tokens += [f"{letter}1", f"{letter}3"]
    for col in range(1, 5):
        tokens += [f"j{col}", f"j{col}"]
    player, out = make_player(tokens=tokens)
    player.deploy(3)
    assert len(player.fleet) == 12
    assert "Hey! Ship count is full!" in out.getvalue()
    assert player.grid[9][3] == "1"


def test_deploy_unknown_mode_places_nothing():
    player, _ = make_player()
    player.deploy(7)
    assert player.fleet == []


def test_take_turn_sinks_enemy_tie():
    shooter, out = with_ships("Ann", [(TIEFighter(), "a1", "a1")], extra=["b2"])
    enemy, _ = with_ships("Bob", [(TIEFighter(), "b2", "b2")])
    shooter.take_turn(enemy)
    assert enemy.all_ships_sunk()
    assert shooter.attack_grid[1][1] == "1"
    assert shooter.stats.hits == 1
    assert shooter.stats.total_shots == 1
    assert shooter.stats.lost_by_size == {1: 1}
    assert shooter.stats.lost_cells == 1
    assert "Full body revealed" in out.getvalue()


def test_take_turn_miss_marks_both_grids():
    shooter, out = with_ships("Ann", [(TIEFighter(), "a1", "a1")], extra=["c3"])
    enemy, _ = with_ships("Bob", [(TIEFighter(), "b2", "b2")])
    shooter.take_turn(enemy)
    assert shooter.attack_grid[2][2] == "0"
    assert enemy.grid[2][2] == "0"
    assert shooter.stats.misses == 1
    assert "MISS." in out.getvalue()
    assert not enemy.all_ships_sunk()


def test_take_turn_reprompts_on_bad_input():
    extra = ["A1", "b", "bx", "z1", "b13", "b2"]
    shooter, out = with_ships("Ann", [(TIEFighter(), "a1", "a1")], extra=extra)
    enemy, _ = with_ships("Bob", [(TIEFighter(), "b2", "b2")])
    shooter.take_turn(enemy)
    text = out.getvalue()
    assert "Invalid char!!" in text
    assert text.count("Invalid format! Try again.") == 2
    assert text.count("Out of bounds.") == 2
    assert enemy.all_ships_sunk()


def test_take_turn_refuses_repeat_cell():
    shooter, out = with_ships(
        "Ann", [(XWingSquadron(), "a1", "a3")], extra=["c3", "c3", "c4"]
    )
    enemy, _ = with_ships("Bob", [(TIEFighter(), "l12", "l12")])
    shooter.take_turn(enemy)
    assert "already shot here" in out.getvalue()
    assert shooter.stats.misses == 2


def test_forced_single_shot():
    shooter, out = with_ships("Ann", [(MonCalamariCruiser(), "a1", "a4")], extra=["c3"])
    enemy, _ = with_ships("Bob", [(TIEFighter(), "l12", "l12")])
    shooter.force_single_shot_next_round = True
    shooter.take_turn(enemy)
    assert "You can shoot 1 time(s)" in out.getvalue()
    assert shooter.stats.total_shots == 1
    assert not shooter.force_single_shot_next_round


def test_reduced_shots():
    shooter, out = with_ships(
        "Ann", [(MonCalamariCruiser(), "a1", "a4")], extra=["c1", "c2", "c3"]
    )
    enemy, _ = with_ships("Bob", [(TIEFighter(), "l12", "l12")])
    shooter.reduced_shots_next_round = 1
    shooter.take_turn(enemy)
    assert "You can shoot 3 time(s)" in out.getvalue()
    assert shooter.reduced_shots_next_round == 0


def test_two_hits_award_gift():
    shooter, out = with_ships(
        "Ann",
        [(MonCalamariCruiser(), "a1", "a4")],
        extra=["a1", "a2", "e5", "e6"],
        rolls=[95],
    )
    enemy, _ = with_ships("Bob", [(XWingSquadron(), "a1", "a3"), (TIEFighter(), "l12", "l12")])
    shooter.take_turn(enemy)
    assert enemy.fleet[0].is_sunk()
    assert shooter.shoot_again
    assert "Gift 5 is applied" in out.getvalue()
    shooter.reset_shoot_again()
    assert not shooter.shoot_again


def test_gifts_three_and_four_affect_enemy():
    shooter, _ = make_player()
    enemy, _ = make_player("Bob")
    shooter.apply_gift(enemy, 3)
    shooter.apply_gift(enemy, 4)
    assert enemy.reduced_shots_next_round == 1
    assert enemy.force_single_shot_next_round


def test_gift_one_adds_bonus_ship():
    shooter, out = make_player(tokens=["x", "y", "c1", "c5"], rolls=[5])
    enemy, _ = make_player("Bob")
    shooter.apply_gift(enemy, 1)
    assert isinstance(shooter.fleet[-1], StarDestroyer)
    assert shooter.grid[2][:5] == ["5"] * 5
    assert "You are awarded a Star Destroyer!" in out.getvalue()


def test_print_stats_lists_statuses():
    player, out = make_player()
    damaged = StarDestroyer()
    damaged.mark_hit()
    sunk = TIEFighter()
    sunk.mark_hit()
    player.add_ship(damaged)
    player.add_ship(sunk)
    player.add_ship(XWingSquadron())
    player.print_stats()
    text = out.getvalue()
    assert damaged.status is ShipStatus.DAMAGED
    assert "Ship 1 [5] - DAMAGED (3 hit(s) left)" in text
    assert "Ship 2 [1] - SUNK" in text
    assert "Ship 3 [3] - OPERATIVE" in text
    assert "=== Player Stats for: Ann ===" in text


def test_display_grid_layout():
    player, out = make_player(tokens=["a1", "a1"])
    player.place_ship(TIEFighter())
    out.truncate(0)
    out.seek(0)
    player.display_grid()
    lines = out.getvalue().split("\n")
    assert "Player: Ann" in lines
    assert "  1 2 3 4 5 6 7 8 9 101112\t  1 2 3 4 5 6 7 8 9 101112" in lines
    row_a = next(line for line in lines if line.startswith("a "))
    assert row_a.startswith("a 1 * ")
    assert len([line for line in lines if line[:2].strip() in "abcdefghijkl" and line[:1].isalpha()]) == MAX_ROWS