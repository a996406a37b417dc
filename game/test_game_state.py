"""Unit tests for game.game_state module"""
import unittest
from game.game_state import GameStateManager
from network.protocol import decode_message, encode_message, game_state_message


class TestGameStateManager(unittest.TestCase):
    """Test GameStateManager class"""

    def setUp(self):
        """Set up a three-player snapshot"""
        self.game_state = game_state_message(
            ball_x=21.35,
            ball_y=3.0000000001,
            ball_vel_x=-0.15,
            total_players=3,
            paddle_positions={'1': 8, '2': 11.5, '3': 2},
            team_scores={'red': 4, 'blue': 7},
            last_scoring_team='blue',
        )
        self.manager = GameStateManager(self.game_state)
        self.manager.apply_assignment({'type': 'assigned', 'number': 2, 'totalPlayers': 3, 'team': 'blue'})

    def test_initialization(self):
        """Test manager initialization"""
        self.assertTrue(self.manager.is_valid)
        self.assertFalse(GameStateManager().is_valid)

    def test_assignment(self):
        self.assertEqual(self.manager.number, 2)
        self.assertEqual(self.manager.team, 'blue')

    def test_ball(self):
        self.assertEqual(self.manager.get_ball_position(), (21.35, 3.0000000001))
        self.assertEqual(self.manager.get_ball_velocity_x(), -0.15)

    def test_local_ball_position(self):
        x, y = self.manager.get_local_ball_position()
        self.assertAlmostEqual(x, 5.35)
        self.assertIsNone(self.manager.get_local_ball_position(3))

    def test_paddles(self):
        self.assertEqual(self.manager.get_paddle_positions(), {1: 8, 2: 11.5, 3: 2})
        self.assertEqual(self.manager.get_paddle_orientation(), 'horizontal')
        self.assertEqual(self.manager.get_paddle_orientation(1), 'vertical')
        self.assertEqual(self.manager.get_paddle_orientation(3), 'vertical')
        self.assertEqual(self.manager.get_paddle_world_position(2), (27.5, 0.0))
        self.assertEqual(self.manager.get_paddle_world_position(1), (0.0, 8))
        self.assertEqual(self.manager.get_paddle_world_position(3), (47, 2))
        self.assertIsNone(self.manager.get_paddle_world_position(4))

    def test_single_player_has_no_orientation(self):
        self.manager.update(dict(self.game_state, totalPlayers=1))
        self.assertIsNone(self.manager.get_paddle_orientation(1))

    def test_scores(self):
        self.assertEqual(self.manager.get_team_scores(), {'red': 4, 'blue': 7})
        self.assertEqual(self.manager.get_leading_team(), 'blue')
        self.assertEqual(self.manager.get_last_scoring_team(), 'blue')

    def test_tie_has_no_leader(self):
        self.manager.update(dict(self.game_state, teamScores={'red': 2, 'blue': 2}))
        self.assertIsNone(self.manager.get_leading_team())

    def test_json_round_trip(self):
        """Numbers survive server encode and client decode unchanged"""
        received = GameStateManager(decode_message(encode_message(self.game_state)))
        self.assertEqual(received.get_ball_position(), self.manager.get_ball_position())
        self.assertEqual(received.get_paddle_positions(), self.manager.get_paddle_positions())
        self.assertEqual(received.get_team_scores(), self.manager.get_team_scores())
        self.assertEqual(received.get_last_scoring_team(), 'blue')

    def test_msgpack_round_trip(self):
        received = GameStateManager(decode_message(encode_message(self.game_state, binary=True)))
        self.assertEqual(received.get_ball_position(), self.manager.get_ball_position())
        self.assertEqual(received.get_paddle_positions(), self.manager.get_paddle_positions())


if __name__ == '__main__':
    unittest.main()
