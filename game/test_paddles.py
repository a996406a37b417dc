"""Unit tests for game.paddles module"""
import unittest
from game.paddles import PaddleStore, is_vertical_slot, is_horizontal_slot
from utils.settings import GameConfig


class TestGeometry(unittest.TestCase):

    def test_edges_are_vertical(self):
        self.assertTrue(is_vertical_slot(1, 3))
        self.assertTrue(is_vertical_slot(3, 3))
        self.assertFalse(is_vertical_slot(2, 3))

    def test_middle_is_horizontal(self):
        self.assertTrue(is_horizontal_slot(2, 3))
        self.assertFalse(is_horizontal_slot(1, 3))
        self.assertFalse(is_horizontal_slot(3, 3))

    def test_single_player_has_no_paddle(self):
        self.assertFalse(is_vertical_slot(1, 1))
        self.assertFalse(is_horizontal_slot(1, 1))


class TestPaddleStore(unittest.TestCase):

    def setUp(self):
        self.config = GameConfig()
        self.store = PaddleStore(self.config)
        for slot in (1, 2, 3):
            self.store.ensure(slot)

    def test_ensure_initialises_to_vertical_midpoint(self):
        self.assertEqual(self.store.get(1), 8)
        self.store.set(1, 4)
        self.store.ensure(1)
        self.assertEqual(self.store.get(1), 4)

    def test_edge_slots_accept_only_vertical_moves(self):
        for slot in (1, 3):
            self.store.move(slot, 'up', 3)
            self.assertEqual(self.store.get(slot), 6)
            self.store.move(slot, 'down', 3)
            self.assertEqual(self.store.get(slot), 8)
            self.store.move(slot, 'left', 3)
            self.store.move(slot, 'right', 3)
            self.assertEqual(self.store.get(slot), 8)

    def test_middle_slot_accepts_only_horizontal_moves(self):
        self.store.move(2, 'left', 3)
        self.assertEqual(self.store.get(2), 6)
        self.store.move(2, 'right', 3)
        self.store.move(2, 'right', 3)
        self.assertEqual(self.store.get(2), 10)
        self.store.move(2, 'up', 3)
        self.store.move(2, 'down', 3)
        self.assertEqual(self.store.get(2), 10)

    def test_single_player_input_ignored(self):
        store = PaddleStore(self.config)
        store.ensure(1)
        for direction in ('up', 'down', 'left', 'right'):
            store.move(1, direction, 1)
        self.assertEqual(store.get(1), 8)

    def test_offsets_stay_in_clamp_range(self):
        for _ in range(20):
            self.store.move(1, 'up', 3)
            self.store.move(2, 'right', 3)
        self.assertEqual(self.store.get(1), self.config.paddle_size)
        self.assertEqual(self.store.get(2), self.config.tile_width - self.config.paddle_size)
        for _ in range(20):
            self.store.move(1, 'down', 3)
            self.store.move(2, 'left', 3)
        self.assertEqual(self.store.get(1), self.config.tile_height - self.config.paddle_size)
        self.assertEqual(self.store.get(2), self.config.paddle_size)

    def test_unknown_slot_ignored(self):
        self.store.move(7, 'up', 3)
        self.assertNotIn(7, self.store)

    def test_prune_keeps_only_occupied_slots(self):
        self.store.ensure(5)
        self.store.prune(2)
        self.assertEqual(self.store.slots(), [1, 2])

    def test_legal_range_follows_orientation(self):
        store = PaddleStore(GameConfig(tile_width=32, tile_height=16))
        self.assertEqual(store.legal_range(1, 3), (2, 14))
        self.assertEqual(store.legal_range(2, 3), (2, 30))
        self.assertIsNone(store.legal_range(1, 1))

    def test_reclamp_after_orientation_change(self):
        store = PaddleStore(GameConfig(tile_width=32, tile_height=16))
        store.set(1, 8)
        store.set(2, 30)
        store.reclamp(2)
        self.assertEqual(store.get(2), 14)
        self.assertEqual(store.get(1), 8)
        # lone player keeps whatever offset it had
        store.prune(1)
        store.set(1, 1)
        store.reclamp(1)
        self.assertEqual(store.get(1), 1)

    def test_as_dict_uses_string_keys(self):
        self.assertEqual(self.store.as_dict(), {'1': 8, '2': 8, '3': 8})


if __name__ == '__main__':
    unittest.main()
