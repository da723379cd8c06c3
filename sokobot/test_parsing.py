"""Tests for level parsing and the two input encodings."""

import os
import tempfile
import unittest

from sokobot.grid import Cell, Grid
from sokobot.parsing import load_levels, parse_layers, parse_level
from sokobot.puzzles import PUZZLES, get_puzzle_names


class TestParseLevel(unittest.TestCase):

    def test_simple_level(self):
        puzzle = parse_level("""\
######
#.   #
# $  #
#  @ #
######""")
        grid = puzzle.grid
        self.assertEqual(puzzle.player, grid.index(3, 3))
        self.assertEqual(puzzle.boxes, (grid.index(2, 2),))
        self.assertEqual(grid.goals, frozenset({grid.index(1, 1)}))
        self.assertEqual(grid.rows, 5)
        self.assertEqual(grid.cols, 6)

    def test_box_on_goal(self):
        puzzle = parse_level("""\
#####
# *@#
#   #
#####""")
        pos = puzzle.grid.index(1, 2)
        self.assertIn(pos, puzzle.grid.goals)       # * counts as goal
        self.assertIn(pos, puzzle.boxes)            # * counts as box

    def test_player_on_goal(self):
        puzzle = parse_level("""\
#####
#  $#
# + #
#####""")
        self.assertEqual(puzzle.player, puzzle.grid.index(2, 2))
        self.assertIn(puzzle.player, puzzle.grid.goals)

    def test_ragged_rows_padded(self):
        puzzle = parse_level("####\n#@$.#\n####")
        self.assertEqual(puzzle.grid.cols, 5)
        self.assertIs(puzzle.grid.classify(0, 4), Cell.FLOOR)

    def test_empty_raises(self):
        with self.assertRaises(ValueError):
            parse_level("\n\n")

    def test_all_puzzles_parse(self):
        for name in get_puzzle_names():
            with self.subTest(puzzle=name):
                puzzle = parse_level(PUZZLES[name])
                self.assertEqual(puzzle.problems(), [])
                self.assertEqual(len(puzzle.boxes), len(puzzle.grid.goals))


class TestParseLayers(unittest.TestCase):

    MAP = ["#####",
           "#  .#",
           "#####"]

    def test_separate_layers(self):
        items = ["     ",
                 " @$  ",
                 "     "]
        puzzle = parse_layers(5, 3, self.MAP, items)
        self.assertEqual(puzzle.player, 6)
        self.assertEqual(puzzle.boxes, (7,))
        self.assertEqual(puzzle.grid.goals, frozenset({8}))

    def test_items_on_goals(self):
        items = ["     ",
                 " +*  ",
                 "     "]
        puzzle = parse_layers(5, 3, ["#####", "#   #", "#####"], items)
        self.assertEqual(puzzle.player, 6)
        self.assertEqual(puzzle.boxes, (7,))
        self.assertEqual(puzzle.grid.goals, frozenset({6, 7}))

    def test_character_grids(self):
        map_data = [list(row) for row in self.MAP]
        items = [list("     "), list(" @$  "), list("     ")]
        puzzle = parse_layers(5, 3, map_data, items)
        self.assertEqual((puzzle.player, puzzle.boxes), (6, (7,)))

    def test_combined_fallback(self):
        puzzle = parse_layers(5, 3, ["#####", "#@$.#", "#####"])
        self.assertEqual(puzzle.player, 6)
        self.assertEqual(puzzle.boxes, (7,))
        self.assertEqual(puzzle.grid.goals, frozenset({8}))
        self.assertIs(puzzle.grid.classify(1, 1), Cell.FLOOR)

    def test_fallback_when_items_lack_boxes(self):
        items = ["     ",
                 " @   ",
                 "     "]
        puzzle = parse_layers(5, 3, ["#####", "# $.#", "#####"], items)
        self.assertEqual(puzzle.player, 6)
        self.assertEqual(puzzle.boxes, (7,))

    def test_fallback_combined_goal_symbols(self):
        puzzle = parse_layers(5, 3, ["#####", "#+* #", "#####"],
                              ["", "", ""])
        self.assertEqual(puzzle.player, 6)
        self.assertEqual(puzzle.grid.goals, frozenset({6, 7}))

    def test_short_rows_read_as_floor(self):
        puzzle = parse_layers(5, 3, ["#####", "#@$.", "###"])
        self.assertIs(puzzle.grid.classify(1, 4), Cell.FLOOR)
        self.assertIs(puzzle.grid.classify(2, 4), Cell.FLOOR)

    def test_grid_built_row_by_row(self):
        puzzle = parse_layers(4, 2, ["#.", "# ."], [" @$"])
        W, F, G = Cell.WALL, Cell.FLOOR, Cell.GOAL
        self.assertEqual(puzzle.grid, Grid.from_rows([[W, G, F, F],
                                                      [W, F, G, F]]))
        self.assertEqual(puzzle.player, 1)
        self.assertEqual(puzzle.boxes, (2,))


class TestProblems(unittest.TestCase):

    def test_no_player(self):
        problems = parse_level("####\n#.$#\n####").problems()
        self.assertTrue(any("player" in p for p in problems))

    def test_no_boxes(self):
        problems = parse_level("####\n#.@#\n####").problems()
        self.assertTrue(any("boxes" in p for p in problems))

    def test_box_goal_mismatch(self):
        problems = parse_level("""\
#####
#$$.#
# @ #
#####""").problems()
        self.assertEqual(len(problems), 1)
        self.assertIn("exceeds", problems[0])

    def test_extra_goals_are_fine(self):
        self.assertEqual(parse_level("""\
#####
#.$.#
# @ #
#####""").problems(), [])


class TestLoadLevels(unittest.TestCase):

    def test_comments_and_blank_lines(self):
        content = "; 1\n#####\n#@$.#\n#####\n\n\n; 2\n####\n#@*#\n####\n"
        fd, path = tempfile.mkstemp(suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            levels = load_levels(path)
        finally:
            os.remove(path)
        self.assertEqual(levels, ["#####\n#@$.#\n#####", "####\n#@*#\n####"])
        self.assertEqual(parse_level(levels[1]).boxes, (6,))


if __name__ == "__main__":
    unittest.main(verbosity=2)
