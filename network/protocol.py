"""
Wire protocol for Favicon Pong.

One message object per WebSocket frame. Text frames carry JSON; binary
frames carry MessagePack. A client that talks MessagePack is answered in
MessagePack, everybody else gets JSON.
"""
import json
from typing import Any, Dict, Optional, Union

import msgpack

# Message types
MSG_ASSIGNED = 'assigned'
MSG_GAME_STATE = 'gameState'
MSG_STATUS = 'status'
MSG_PADDLE_MOVE = 'paddleMove'
MSG_GET_STATUS = 'getStatus'

Frame = Union[str, bytes]


class ProtocolError(ValueError):
    """Raised when an inbound frame is not a decodable message object."""


def encode_message(message: Dict[str, Any], binary: bool = False) -> Frame:
    if binary:
        return msgpack.packb(message, use_bin_type=True)
    return json.dumps(message, separators=(',', ':'))


def decode_message(data: Frame) -> Dict[str, Any]:
    """Decode one inbound frame into a message dict."""
    try:
        if isinstance(data, (bytes, bytearray, memoryview)):
            message = msgpack.unpackb(bytes(data), raw=False)
        else:
            message = json.loads(data)
    except (ValueError, TypeError, msgpack.exceptions.ExtraData,
            msgpack.exceptions.FormatError, msgpack.exceptions.StackError) as e:
        raise ProtocolError(f"undecodable frame: {e}") from e

    if not isinstance(message, dict):
        raise ProtocolError(f"expected an object, got {type(message).__name__}")
    return message


def assigned_message(connection, total_players: int) -> Dict[str, Any]:
    return {
        'type': MSG_ASSIGNED,
        'number': connection.slot,
        'totalPlayers': total_players,
        'team': connection.team,
    }


def status_message(connection, total_players: int) -> Dict[str, Any]:
    """Reply to getStatus."""
    return {
        'type': MSG_STATUS,
        'connected': connection.is_open,
        'number': connection.slot or None,
        'totalPlayers': total_players,
    }


def game_state_message(ball_x: float, ball_y: float, ball_vel_x: float, total_players: int,
                       paddle_positions: Dict[str, float], team_scores: Dict[str, int],
                       last_scoring_team: Optional[str]) -> Dict[str, Any]:
    """Full world snapshot sent to every open connection each tick."""
    return {
        'type': MSG_GAME_STATE,
        'ballX': ball_x,
        'ballY': ball_y,
        'ballVelX': ball_vel_x,
        'totalPlayers': total_players,
        'paddlePositions': paddle_positions,
        'teamScores': team_scores,
        'lastScoringTeam': last_scoring_team,
    }


class BroadcastFrames:
    """Encodes one snapshot at most once per wire format."""

    def __init__(self, message: Dict[str, Any]):
        self.message = message
        self._frames: Dict[bool, Frame] = {}

    def for_connection(self, connection) -> Frame:
        binary = bool(connection.binary)
        if binary not in self._frames:
            self._frames[binary] = encode_message(self.message, binary)
        return self._frames[binary]
