import random
import unittest

from game import (
    GameState,
    Grid,
    Settings,
    apply_match,
    check_solvability,
    new_game,
    request_hint,
    reshuffle,
    resolve_stuck,
)


class TestGameSession(unittest.TestCase):
    def test_given_settings_when_new_game_then_board_dealt_from_settings_or_map(self):
        settings = Settings(width=4, height=2, tile_types=('A', 'B'), seed=3)
        state = new_game(settings)
        self.assertEqual(state.grid.tile_count, 8)
        self.assertEqual((state.score, state.combo, state.status), (0, 0, 'playing'))
        self.assertEqual(new_game(settings).grid, state.grid)  # seeded

        from_map = new_game(settings, rng=random.Random(1), occupancy=[[1, 0], [0, 1]])
        self.assertEqual((from_map.grid.width, from_map.grid.height), (2, 2))
        self.assertEqual(from_map.grid.tile_count, 2)

    def test_given_map_without_pairs_when_new_game_then_already_won(self):
        settings = Settings(tile_types=('A',))
        lone = new_game(settings, rng=random.Random(0), occupancy=[[1, 0], [0, 0]])
        self.assertEqual(lone.grid.tile_count, 0)
        self.assertTrue(lone.is_won())
        blank = new_game(settings, rng=random.Random(0), occupancy=[[0, 0]])
        self.assertEqual(blank.status, 'won')

    def test_given_last_pair_when_matching_then_scored_and_won(self):
        state = GameState(grid=Grid.from_types([['A', 'A']]))
        after = apply_match(state, (1, 1), (2, 1), now=10.0)
        self.assertIsNotNone(after)
        self.assertEqual(after.score, 100)
        self.assertEqual(after.combo, 1)
        self.assertEqual(after.stats.match_count, 1)
        self.assertEqual(after.stats.path_lengths, (2,))
        self.assertTrue(after.is_won())
        self.assertTrue(after.grid.is_cleared())
        # original value untouched
        self.assertEqual(state.grid.tile_count, 2)
        self.assertFalse(state.is_won())

    def test_given_quick_successive_matches_when_matching_then_combo_bonus(self):
        state = GameState(grid=Grid.from_types([['A', 'A', 'B', 'B']]))
        first = apply_match(state, (1, 1), (2, 1), now=0.0)
        second = apply_match(first, (3, 1), (4, 1), now=2.0)
        self.assertEqual(second.combo, 2)
        self.assertEqual(second.score, 100 + 120)
        self.assertTrue(second.is_won())

        slow = apply_match(first, (3, 1), (4, 1), now=10.0)
        self.assertEqual(slow.combo, 1)
        self.assertEqual(slow.score, 200)

    def test_given_unconnectable_pair_when_matching_then_none(self):
        state = GameState(grid=Grid.from_types([['A', 'B'], ['B', 'A']]))
        self.assertIsNone(apply_match(state, (1, 1), (2, 2), now=0.0))
        self.assertIsNone(apply_match(state, (1, 1), (2, 1), now=0.0))

    def test_given_hint_and_shuffle_requests_then_counted(self):
        state = GameState(grid=Grid.from_types([['A', 'A', 'B', 'B']]))
        state, hint = request_hint(state)
        self.assertIsNotNone(hint)
        self.assertEqual(state.stats.hint_count, 1)

        stuck = GameState(grid=Grid.from_types([['A', 'B'], ['B', 'A']]))
        same, none = request_hint(stuck)
        self.assertIsNone(none)
        self.assertEqual(same.stats.hint_count, 0)

        shuffled = reshuffle(state, random.Random(5))
        self.assertEqual(shuffled.stats.shuffle_count, 1)
        self.assertEqual(shuffled.grid.tile_count, 4)

    def test_given_stuck_board_when_resolving_then_reshuffled_until_solvable(self):
        stuck = GameState(grid=Grid.from_types([['A', 'B'], ['B', 'A']]))
        resolved = resolve_stuck(stuck, random.Random(7), max_attempts=50)
        self.assertTrue(check_solvability(resolved.grid))
        self.assertGreaterEqual(resolved.stats.shuffle_count, 1)

        solvable = GameState(grid=Grid.from_types([['A', 'A']]))
        self.assertIs(resolve_stuck(solvable, random.Random(7)), solvable)

        capped = resolve_stuck(stuck, random.Random(7), max_attempts=0)
        self.assertIs(capped, stuck)


if __name__ == '__main__':
    unittest.main(verbosity=2)
