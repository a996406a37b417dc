"""
Physics Engine

Advances the single shared ball once per tick, resolves wall and paddle
collisions and credits team scores. There is no continuous collision
detection: a ball faster than the collision window per tick can tunnel
through a paddle.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from config.constants import TEAMS
from game.paddles import PaddleStore
from utils.helpers import clamp
from utils.settings import GameConfig

logger = logging.getLogger('FaviconPong.physics')


@dataclass
class Ball:
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class ScoreFlash:
    """Decaying marker of the last team to score, for client feedback."""
    team: Optional[str] = None
    frames_remaining: int = 0

    def trigger(self, team: str, duration: int) -> None:
        self.team = team
        self.frames_remaining = duration

    def advance(self) -> None:
        if self.frames_remaining > 0:
            self.frames_remaining -= 1
        if self.frames_remaining == 0:
            self.team = None


@dataclass
class TeamScores:
    scores: Dict[str, int] = field(default_factory=lambda: {team: 0 for team in TEAMS})

    def award(self, team: str) -> None:
        self.scores[team] = self.scores.get(team, 0) + 1

    def __getitem__(self, team: str) -> int:
        return self.scores.get(team, 0)

    def as_dict(self) -> Dict[str, int]:
        return dict(self.scores)


class PhysicsEngine:
    """Owns the ball, the team scores and the score flash.

    ``step`` is deterministic given the paddle offsets and the slot-to-team
    lookup, which makes it unit-testable without any transport.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.ball = Ball(
            x=self.config.tile_width / 2,
            y=self.config.center_y,
            vx=self.config.ball_velocity_x,
            vy=self.config.ball_velocity_y,
        )
        self.team_scores = TeamScores()
        self.score_flash = ScoreFlash()
        self.tick_count = 0

    def is_waiting(self, total_players: int) -> bool:
        return total_players < self.config.min_players

    def center_ball(self, total_players: int) -> None:
        """Pin the ball to the middle of the world."""
        self.ball.x = self.config.world_width(max(total_players, 1)) / 2
        self.ball.y = self.config.center_y

    def step(self, paddles: PaddleStore, total_players: int,
             team_for_slot: Callable[[int], Optional[str]]) -> Optional[str]:
        """Run one tick. Returns the team that scored this tick, if any."""
        self.tick_count += 1
        if self.is_waiting(total_players):
            self.center_ball(total_players)
            self.score_flash.advance()
            return None

        self._integrate()
        world_width = self.config.world_width(total_players)
        self._bounce_off_walls(world_width)
        scored = self._resolve_paddles(paddles, total_players, world_width, team_for_slot)

        ball = self.ball
        ball.x = clamp(ball.x, 0, world_width)
        ball.y = clamp(ball.y, 0, self.config.tile_height)

        self.score_flash.advance()
        return scored

    def _integrate(self) -> None:
        self.ball.x += self.ball.vx
        self.ball.y += self.ball.vy

    def _bounce_off_walls(self, world_width: float) -> None:
        ball = self.ball
        if ball.x <= 0:
            ball.vx = -ball.vx
            ball.x = 0
        elif ball.x >= world_width:
            ball.vx = -ball.vx
            ball.x = world_width

        height = self.config.tile_height
        if ball.y <= 0 or ball.y >= height:
            ball.vy = -ball.vy
            ball.y = clamp(ball.y, 0, height)

    def _resolve_paddles(self, paddles: PaddleStore, total_players: int, world_width: float,
                         team_for_slot: Callable[[int], Optional[str]]) -> Optional[str]:
        cfg = self.config
        ball = self.ball
        reach = cfg.paddle_size + cfg.collision_tolerance
        hits = []

        # Left edge: slot 1, vertical paddle at x=0
        left = paddles.get(1)
        if left is not None and ball.x <= 1 and ball.vx < 0 and abs(ball.y - left) <= reach:
            ball.vx = abs(ball.vx)
            ball.x = 1
            hits.append(1)

        # Right edge: slot N, vertical paddle at x=world_width-1
        right = paddles.get(total_players)
        right_x = world_width - 1
        if right is not None and ball.x >= right_x - 1 and ball.vx > 0 and abs(ball.y - right) <= reach:
            ball.vx = -abs(ball.vx)
            ball.x = right_x - 1
            hits.append(total_players)

        # Middle slots: horizontal paddles on the top and bottom edge of their tile
        top_line = cfg.paddle_size + 1
        bottom_line = cfg.tile_height - cfg.paddle_size - 1
        for slot in range(2, total_players):
            offset = paddles.get(slot)
            if offset is None:
                continue
            paddle_x = (slot - 1) * cfg.tile_width + offset
            if abs(ball.x - paddle_x) > reach:
                continue
            if ball.y <= top_line and ball.vy < 0:
                ball.vy = abs(ball.vy)
                ball.y = top_line
                hits.append(slot)
            if ball.y >= bottom_line and ball.vy > 0:
                ball.vy = -abs(ball.vy)
                ball.y = bottom_line
                hits.append(slot)

        # The first occupied paddle hit in this order scores
        for slot in hits:
            team = team_for_slot(slot)
            if team is None:
                logger.debug(f"Paddle hit on slot {slot} has no occupant, no point awarded")
                continue
            self.team_scores.award(team)
            self.score_flash.trigger(team, cfg.score_flash_duration)
            return team
        return None
