"""Settings management utilities for the Favicon Pong server"""
import os
import json
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

from config.constants import (
    DEFAULT_HOST, DEFAULT_PORT, FPS,
    TILE_WIDTH, TILE_HEIGHT,
    BALL_VELOCITY_X, BALL_VELOCITY_Y,
    PADDLE_SIZE, PADDLE_SPEED, PADDLE_COLLISION_TOLERANCE,
    MIN_PLAYERS, SCORE_FLASH_DURATION
)

logger = logging.getLogger('FaviconPong.settings')


def default_settings() -> Dict[str, Any]:
    """Return a fresh copy of the default server settings"""
    return {
        'host': DEFAULT_HOST,
        'port': DEFAULT_PORT,
        'fps': FPS,
        'tile_width': TILE_WIDTH,
        'tile_height': TILE_HEIGHT,
        'ball_velocity_x': BALL_VELOCITY_X,
        'ball_velocity_y': BALL_VELOCITY_Y,
        'paddle_size': PADDLE_SIZE,
        'paddle_speed': PADDLE_SPEED,
        'collision_tolerance': PADDLE_COLLISION_TOLERANCE,
        'min_players': MIN_PLAYERS,
        'score_flash_duration': SCORE_FLASH_DURATION,
    }


def load_settings(settings_file: str = 'server_settings.json',
                  environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Load settings from file, then apply HOST/PORT environment overrides.

    Unknown keys in the file are ignored. A missing file means defaults;
    an unreadable one is logged and also falls back to defaults.
    """
    settings = default_settings()
    if os.path.exists(settings_file):
        try:
            with open(settings_file, 'r') as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                settings.update({k: v for k, v in loaded.items() if k in settings})
            else:
                logger.warning(f"Ignoring {settings_file}: expected a JSON object")
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {settings_file}, using defaults: {e}")

    env = os.environ if environ is None else environ
    if env.get('HOST'):
        settings['host'] = env['HOST']
    if env.get('PORT'):
        try:
            settings['port'] = int(env['PORT'])
        except ValueError:
            logger.warning(f"Ignoring invalid PORT value {env['PORT']!r}")

    fps = settings['fps']
    if isinstance(fps, bool) or not isinstance(fps, (int, float)) or fps <= 0:
        logger.warning(f"Ignoring invalid fps value {fps!r}")
        settings['fps'] = FPS
    return settings


@dataclass(frozen=True)
class GameConfig:
    """Simulation parameters shared by the paddle store and physics engine."""
    tile_width: float = TILE_WIDTH
    tile_height: float = TILE_HEIGHT
    ball_velocity_x: float = BALL_VELOCITY_X
    ball_velocity_y: float = BALL_VELOCITY_Y
    paddle_size: float = PADDLE_SIZE
    paddle_speed: float = PADDLE_SPEED
    collision_tolerance: float = PADDLE_COLLISION_TOLERANCE
    min_players: int = MIN_PLAYERS
    score_flash_duration: int = SCORE_FLASH_DURATION
    fps: int = FPS

    @property
    def frame_time(self) -> float:
        return 1.0 / self.fps

    @property
    def center_y(self) -> float:
        return self.tile_height / 2

    def world_width(self, total_players: int) -> float:
        """Width of the whole playfield for the given player count."""
        return self.tile_width * total_players

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'GameConfig':
        return cls(
            tile_width=settings['tile_width'],
            tile_height=settings['tile_height'],
            ball_velocity_x=settings['ball_velocity_x'],
            ball_velocity_y=settings['ball_velocity_y'],
            paddle_size=settings['paddle_size'],
            paddle_speed=settings['paddle_speed'],
            collision_tolerance=settings['collision_tolerance'],
            min_players=settings['min_players'],
            score_flash_duration=settings['score_flash_duration'],
            fps=settings['fps'],
        )
