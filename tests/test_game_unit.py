import unittest

from game import (
    Grid,
    InvalidInputError,
    Tile,
    count_turns,
    find_path,
    is_valid_path,
)


class TestGameUnit(unittest.TestCase):
    def _mk_grid(self, rows):
        return Grid.from_types(rows)

    def test_given_type_rows_when_building_grid_then_padding_and_coords_correct(self):
        grid = self._mk_grid([
            ['A', 'B', '.'],
            [None, 'B', 'A'],
        ])
        self.assertEqual((grid.cols, grid.rows), (5, 4))
        self.assertEqual(len(grid.cells), 20)
        self.assertEqual(grid.index(2, 1), 7)
        self.assertEqual(grid.at(1, 1), Tile('1-1', 'A', 1, 1))
        self.assertIsNone(grid.at(3, 1))
        self.assertIsNone(grid.at(0, 0))
        self.assertEqual(grid.type_at((2, 2)), 'B')
        self.assertEqual(grid.tile_count, 4)
        self.assertEqual([pos for pos, _ in grid.occupied()], [(1, 1), (2, 1), (2, 2), (3, 2)])
        for x, y in grid.coords():
            if grid.is_border(x, y):
                self.assertIsNone(grid.at(x, y))
        self.assertEqual(len(list(grid.interior())), 6)

    def test_given_out_of_bounds_position_when_reading_then_invalid_input(self):
        grid = self._mk_grid([['A', 'A']])
        with self.assertRaises(InvalidInputError):
            grid.at(4, 0)
        with self.assertRaises(InvalidInputError):
            grid.at(-1, 1)

    def test_given_broken_invariants_when_constructing_grid_then_invalid_input(self):
        empty = [None] * 16  # padded 2x2
        with self.assertRaises(InvalidInputError):
            Grid(0, 2, tuple(empty))
        with self.assertRaises(InvalidInputError):
            Grid(2, 2, tuple(empty[:-1]))
        on_border = list(empty)
        on_border[0] = Tile('t', 'A', 0, 0)
        with self.assertRaises(InvalidInputError):
            Grid(2, 2, tuple(on_border))
        wrong_coords = list(empty)
        wrong_coords[5] = Tile('t', 'A', 2, 2)  # index 5 is (1, 1)
        with self.assertRaises(InvalidInputError):
            Grid(2, 2, tuple(wrong_coords))
        dup = list(empty)
        dup[5] = Tile('t', 'A', 1, 1)
        dup[6] = Tile('t', 'A', 2, 1)
        with self.assertRaises(InvalidInputError):
            Grid(2, 2, tuple(dup))
        stray = list(empty)
        stray[5] = 'A'
        with self.assertRaises(InvalidInputError):
            Grid(2, 2, tuple(stray))
        with self.assertRaises(InvalidInputError):
            Grid.from_types([['A', 'A'], ['A']])

    def test_given_grid_when_replacing_cells_then_new_value_and_original_untouched(self):
        grid = self._mk_grid([['A', 'A', 'B', 'B']])
        cleared = grid.without([(1, 1), (2, 1)])
        self.assertEqual(grid.tile_count, 4)
        self.assertEqual(cleared.tile_count, 2)
        self.assertIsNone(cleared.at(1, 1))
        self.assertFalse(cleared.is_cleared())
        self.assertTrue(cleared.without([(3, 1), (4, 1)]).is_cleared())
        self.assertTrue(Grid.empty(3, 2).is_cleared())

    def test_given_selection_and_path_when_pretty_then_markers_rendered(self):
        grid = self._mk_grid([['A', '.', 'A']])
        txt = grid.pretty(selected=[(1, 1), (3, 1)], path=[(1, 1), (2, 1), (3, 1)])
        self.assertIn('[A]', txt)
        self.assertIn('*', txt)
        self.assertIn('·', txt)
        self.assertEqual(len(txt.splitlines()), 3)
        self.assertNotIn('[', grid.pretty())

    def test_given_adjacent_pair_when_find_path_then_two_points_no_turns(self):
        grid = self._mk_grid([['A', 'A']])
        path = find_path((1, 1), (2, 1), grid)
        self.assertEqual(path, [(1, 1), (2, 1)])
        self.assertEqual(count_turns(path), 0)

    def test_given_corner_route_when_find_path_then_exactly_one_turn(self):
        grid = self._mk_grid([
            ['A', '.'],
            ['B', 'A'],
        ])
        path = find_path((1, 1), (2, 2), grid)
        self.assertEqual(path, [(1, 1), (2, 1), (2, 2)])
        self.assertEqual(count_turns(path), 1)

    def test_given_blocked_interior_when_find_path_then_routes_through_border(self):
        grid = self._mk_grid([
            ['A', 'B', 'A'],
            ['C', 'D', 'E'],
        ])
        path = find_path((1, 1), (3, 1), grid)
        self.assertEqual(path, [(1, 1), (1, 0), (2, 0), (3, 0), (3, 1)])
        self.assertEqual(count_turns(path), 2)
        self.assertTrue(any(y == 0 for _, y in path))

    def test_given_route_needing_three_turns_when_find_path_then_none(self):
        grid = self._mk_grid([
            ['A', 'B', 'C', 'D'],
            ['E', '.', '.', 'F'],
            ['G', 'H', 'A', 'I'],
        ])
        self.assertIsNone(find_path((1, 1), (3, 3), grid))

    def test_given_checkerboard_when_find_path_then_none(self):
        grid = self._mk_grid([
            ['A', 'B'],
            ['B', 'A'],
        ])
        self.assertIsNone(find_path((1, 1), (2, 2), grid))
        self.assertIsNone(find_path((2, 1), (1, 2), grid))

    def test_given_short_circuit_cases_when_find_path_then_none(self):
        grid = self._mk_grid([
            ['A', 'B', '.'],
            ['B', 'A', '.'],
        ])
        self.assertIsNone(find_path((1, 1), (1, 1), grid))  # same cell
        self.assertIsNone(find_path((1, 1), (2, 1), grid))  # different types
        self.assertIsNone(find_path((3, 1), (3, 2), grid))  # both empty
        self.assertIsNone(find_path((1, 1), (3, 1), grid))  # one empty
        with self.assertRaises(InvalidInputError):
            find_path((1, 1), (9, 9), grid)

    def test_given_paths_when_counting_and_validating_then_expected(self):
        grid = self._mk_grid([
            ['A', '.'],
            ['B', 'A'],
        ])
        self.assertEqual(count_turns([(0, 0), (1, 0), (2, 0)]), 0)
        self.assertEqual(count_turns([(0, 0), (1, 0), (1, 1), (2, 1)]), 2)
        self.assertTrue(is_valid_path([(1, 1), (2, 1), (2, 2)], grid))
        # through a tile
        self.assertFalse(is_valid_path([(1, 1), (1, 2), (2, 2)], grid))
        # diagonal step
        self.assertFalse(is_valid_path([(1, 1), (2, 2)], grid))
        # mismatched endpoints
        self.assertFalse(is_valid_path([(1, 1), (1, 2)], grid))
        # three turns around the outside
        self.assertFalse(is_valid_path(
            [(1, 1), (0, 1), (0, 2), (0, 3), (1, 3), (2, 3), (2, 2)], grid
        ))
        self.assertFalse(is_valid_path([(1, 1)], grid))


if __name__ == '__main__':
    unittest.main(verbosity=2)
