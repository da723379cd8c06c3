"""Tests for the static grid model."""

import unittest

from sokobot.grid import DOWN, RIGHT, UP, Cell, Grid
from sokobot.parsing import parse_layers, parse_level


class TestGrid(unittest.TestCase):

    def setUp(self):
        self.grid = parse_level("""\
#####
#  .#
# $ #
#@  #
#####""").grid

    def test_dimensions(self):
        self.assertEqual(self.grid.rows, 5)
        self.assertEqual(self.grid.cols, 5)

    def test_classify(self):
        self.assertIs(self.grid.classify(0, 0), Cell.WALL)
        self.assertIs(self.grid.classify(1, 3), Cell.GOAL)
        self.assertIs(self.grid.classify(2, 2), Cell.FLOOR)   # box cell
        self.assertIs(self.grid.classify(3, 1), Cell.FLOOR)   # player cell

    def test_goals(self):
        self.assertEqual(self.grid.goals, frozenset({self.grid.index(1, 3)}))

    def test_bounds(self):
        self.assertTrue(self.grid.in_bounds(0, 0))
        self.assertTrue(self.grid.in_bounds(4, 4))
        self.assertFalse(self.grid.in_bounds(-1, 0))
        self.assertFalse(self.grid.in_bounds(0, 5))
        self.assertFalse(self.grid.in_bounds(5, 0))

    def test_wall_or_outside(self):
        self.assertTrue(self.grid.is_wall_or_outside(0, 2))
        self.assertTrue(self.grid.is_wall_or_outside(-1, 2))
        self.assertTrue(self.grid.is_wall_or_outside(2, 7))
        self.assertFalse(self.grid.is_wall_or_outside(2, 2))
        self.assertFalse(self.grid.is_wall_or_outside(1, 3))

    def test_index_and_coords(self):
        pos = self.grid.index(3, 2)
        self.assertEqual(pos, 17)
        self.assertEqual(self.grid.coords(pos), (3, 2))

    def test_step(self):
        pos = self.grid.index(2, 2)
        self.assertEqual(self.grid.step(pos, UP), self.grid.index(1, 2))
        self.assertEqual(self.grid.step(pos, RIGHT, -1), self.grid.index(2, 1))
        self.assertIsNone(self.grid.step(self.grid.index(4, 0), DOWN))

    def test_cell_count_mismatch_raises(self):
        with self.assertRaises(ValueError):
            Grid(2, 2, (Cell.FLOOR,) * 3)

    def test_from_rows_pads(self):
        grid = Grid.from_rows([[Cell.WALL], [Cell.WALL, Cell.GOAL]])
        self.assertEqual((grid.rows, grid.cols), (2, 2))
        self.assertIs(grid.classify(0, 1), Cell.FLOOR)
        self.assertEqual(grid.goals, frozenset({3}))


class TestDeadCells(unittest.TestCase):

    def test_corner_dead_cells(self):
        grid = parse_level("""\
#####
#  .#
# $ #
#@  #
#####""").grid
        expected = {grid.index(1, 1), grid.index(3, 1), grid.index(3, 3)}
        self.assertEqual(grid.dead_cells, frozenset(expected))
        self.assertTrue(grid.statically_dead(grid.index(3, 1)))
        # goal in a corner is never dead
        self.assertFalse(grid.statically_dead(grid.index(1, 3)))
        # along a wall but not in a corner
        self.assertFalse(grid.statically_dead(grid.index(2, 1)))
        self.assertFalse(grid.statically_dead(grid.index(1, 2)))

    def test_board_edge_counts_as_wall(self):
        # single row: up and down are outside the board
        grid = parse_layers(3, 1, [".  "]).grid
        self.assertEqual(grid.dead_cells, frozenset({2}))

    def test_walls_are_never_dead(self):
        grid = parse_level("""\
####
#@ #
####""").grid
        for pos in grid.dead_cells:
            self.assertIs(grid.cells[pos], Cell.FLOOR)


if __name__ == "__main__":
    unittest.main(verbosity=2)
