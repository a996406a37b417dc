"""
Game State Management Module

Client-side view of the server's broadcasts. It wraps the latest ``gameState``
snapshot (clients keep no other world state) together with the slot, team and
player count from the last ``assigned`` message, and answers rendering
questions such as which paddle a slot owns and where it sits in the world.
"""
from typing import Dict, Optional, Tuple, Any

from config.constants import TILE_WIDTH, TILE_HEIGHT, TEAMS
from game.paddles import is_vertical_slot, is_horizontal_slot


class GameStateManager:
    """
    Facade over the raw ``gameState`` dictionary received from the server.

    Snapshots are full, never deltas, so ``update`` simply replaces the
    previous one.
    """

    def __init__(self, game_state: Optional[Dict[str, Any]] = None,
                 tile_width: float = TILE_WIDTH, tile_height: float = TILE_HEIGHT):
        """
        Initialize the game state manager.

        Args:
            game_state: The raw gameState message from the server
            tile_width: Width of one player's tile in world units
            tile_height: Height of one player's tile in world units
        """
        self._game_state = game_state or {}
        self.tile_width = tile_width
        self.tile_height = tile_height
        self.number: Optional[int] = None
        self.team: Optional[str] = None
        self.assigned_total: int = 0

    def update(self, game_state: Optional[Dict[str, Any]]) -> None:
        """Replace the snapshot with the latest one from the server."""
        self._game_state = game_state or {}

    def apply_assignment(self, message: Dict[str, Any]) -> None:
        """Record the slot, team and player count from an ``assigned`` message."""
        self.number = message.get('number')
        self.team = message.get('team')
        self.assigned_total = message.get('totalPlayers', 0)

    @property
    def is_valid(self) -> bool:
        """Check if a snapshot has been received."""
        return bool(self._game_state)

    # Ball

    def get_ball_position(self) -> Tuple[float, float]:
        return (self._game_state.get('ballX', 0.0), self._game_state.get('ballY', 0.0))

    def get_ball_velocity_x(self) -> float:
        return self._game_state.get('ballVelX', 0.0)

    def get_local_ball_position(self, slot: Optional[int] = None) -> Optional[Tuple[float, float]]:
        """
        Ball position relative to a slot's own tile.

        Returns:
            (x, y) inside the tile, or None when the ball is in another tile
        """
        slot = slot or self.number
        if not slot:
            return None
        x, y = self.get_ball_position()
        left = (slot - 1) * self.tile_width
        if left <= x <= left + self.tile_width:
            return (x - left, y)
        return None

    # Players and paddles

    def get_total_players(self) -> int:
        return self._game_state.get('totalPlayers', self.assigned_total)

    def get_paddle_positions(self) -> Dict[int, float]:
        """Paddle offsets keyed by slot number (JSON object keys are strings)."""
        positions = self._game_state.get('paddlePositions', {})
        return {int(slot): offset for slot, offset in positions.items()}

    def get_paddle_offset(self, slot: int) -> Optional[float]:
        return self.get_paddle_positions().get(slot)

    def get_paddle_orientation(self, slot: Optional[int] = None) -> Optional[str]:
        """'vertical' for edge slots, 'horizontal' for middle ones, None when alone."""
        slot = slot or self.number
        total = self.get_total_players()
        if not slot:
            return None
        if is_vertical_slot(slot, total):
            return 'vertical'
        if is_horizontal_slot(slot, total):
            return 'horizontal'
        return None

    def get_paddle_world_position(self, slot: int) -> Optional[Tuple[float, float]]:
        """
        Centre of a slot's paddle in world coordinates.

        Middle slots have a paddle on both the top and the bottom edge; the
        top one is returned.
        """
        offset = self.get_paddle_offset(slot)
        orientation = self.get_paddle_orientation(slot)
        if offset is None or orientation is None:
            return None
        if orientation == 'vertical':
            x = 0.0 if slot == 1 else self.get_total_players() * self.tile_width - 1
            return (x, offset)
        return ((slot - 1) * self.tile_width + offset, 0.0)

    # Scores

    def get_team_scores(self) -> Dict[str, int]:
        scores = self._game_state.get('teamScores', {})
        return {team: scores.get(team, 0) for team in TEAMS}

    def get_team_score(self, team: str) -> int:
        return self.get_team_scores().get(team, 0)

    def get_last_scoring_team(self) -> Optional[str]:
        """Team to flash, or None once the flash has decayed."""
        return self._game_state.get('lastScoringTeam')

    def get_leading_team(self) -> Optional[str]:
        """Team with the higher score, or None on a tie."""
        scores = self.get_team_scores()
        red, blue = (scores[team] for team in TEAMS)
        if red == blue:
            return None
        return TEAMS[0] if red > blue else TEAMS[1]
