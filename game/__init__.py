"""Game logic module for Favicon Pong."""
from game.game_state import GameStateManager
from game.paddles import PaddleStore
from game.physics import Ball, PhysicsEngine, ScoreFlash, TeamScores
from game.simulation import SimulationContext
from game.slots import Connection, SlotRegistry
from game.teams import TeamAssigner
from game.ticker import FixedRateTicker

__all__ = [
    'GameStateManager', 'PaddleStore', 'Ball', 'PhysicsEngine', 'ScoreFlash', 'TeamScores',
    'SimulationContext', 'Connection', 'SlotRegistry', 'TeamAssigner', 'FixedRateTicker',
]
