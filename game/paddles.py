"""
Paddle Store

Per-slot paddle offsets. An offset belongs to the slot, not to whichever
connection currently sits in it. Edge slots (1 and N) have vertical paddles
moving up/down inside the tile height; middle slots have horizontal paddles
moving left/right inside the tile width.
"""
from typing import Dict, Optional, Tuple

from config.constants import (
    DIR_UP, DIR_DOWN, DIR_LEFT, DIR_RIGHT,
    VERTICAL_DIRECTIONS, HORIZONTAL_DIRECTIONS
)
from utils.helpers import clamp
from utils.settings import GameConfig

VALID_DIRECTIONS = frozenset(VERTICAL_DIRECTIONS + HORIZONTAL_DIRECTIONS)


def is_vertical_slot(slot: int, total_players: int) -> bool:
    """Edge players own vertical paddles once there is more than one player."""
    return total_players > 1 and (slot == 1 or slot == total_players)


def is_horizontal_slot(slot: int, total_players: int) -> bool:
    return 1 < slot < total_players


class PaddleStore:
    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self._offsets: Dict[int, float] = {}

    def __contains__(self, slot: int) -> bool:
        return slot in self._offsets

    def get(self, slot: int) -> Optional[float]:
        return self._offsets.get(slot)

    def set(self, slot: int, offset: float) -> None:
        self._offsets[slot] = offset

    def slots(self):
        return sorted(self._offsets)

    def ensure(self, slot: int) -> None:
        """Give a newly appearing slot a paddle at the vertical midpoint."""
        if slot not in self._offsets:
            self._offsets[slot] = self.config.center_y

    def discard(self, slot: int) -> None:
        self._offsets.pop(slot, None)

    def prune(self, total_players: int) -> None:
        """Drop every entry that is not one of the occupied slots 1..N."""
        for slot in [s for s in self._offsets if not 1 <= s <= total_players]:
            del self._offsets[slot]

    def legal_range(self, slot: int, total_players: int) -> Optional[Tuple[float, float]]:
        """(low, high) bounds for the slot's offset, or None when it cannot move."""
        cfg = self.config
        if is_vertical_slot(slot, total_players):
            return cfg.paddle_size, cfg.tile_height - cfg.paddle_size
        if is_horizontal_slot(slot, total_players):
            return cfg.paddle_size, cfg.tile_width - cfg.paddle_size
        return None

    def reclamp(self, total_players: int) -> None:
        """Pull every kept offset back inside its slot's range at the current N.

        A slot can turn from horizontal to vertical when N shrinks, so an
        offset that was legal along the tile width may overshoot the height.
        """
        for slot, offset in self._offsets.items():
            bounds = self.legal_range(slot, total_players)
            if bounds is not None:
                self._offsets[slot] = clamp(offset, *bounds)

    def move(self, slot: int, direction: str, total_players: int) -> None:
        """Move the paddle of ``slot`` one step in ``direction``.

        Directions that do not match the slot's orientation, and any input
        while the slot is the only player, are ignored.
        """
        if slot not in self._offsets or not 1 <= slot <= total_players:
            return
        bounds = self.legal_range(slot, total_players)
        if bounds is None:
            return
        step = self.config.paddle_speed
        current = self._offsets[slot]
        if is_vertical_slot(slot, total_players):
            if direction == DIR_UP:
                self._offsets[slot] = clamp(current - step, *bounds)
            elif direction == DIR_DOWN:
                self._offsets[slot] = clamp(current + step, *bounds)
        elif direction == DIR_LEFT:
            self._offsets[slot] = clamp(current - step, *bounds)
        elif direction == DIR_RIGHT:
            self._offsets[slot] = clamp(current + step, *bounds)

    def as_dict(self) -> Dict[str, float]:
        """Offsets keyed by slot number as a string, ready for JSON."""
        return {str(slot): self._offsets[slot] for slot in sorted(self._offsets)}
