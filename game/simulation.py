"""
Simulation Context

The single owned object holding every piece of shared game state: team
assigner, slot registry, paddle store and physics engine. Connection
handlers and the tick loop only touch state through its methods, each of
which runs under one re-entrant lock. Methods return the messages to send
instead of sending them, so network I/O happens outside the lock. Callers
that deliver ``assigned`` notifications must serialise recompute and delivery
themselves (see GameServer.assign_lock).
"""
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from game.paddles import PaddleStore, VALID_DIRECTIONS
from game.physics import PhysicsEngine
from game.slots import Connection, SlotRegistry
from game.teams import TeamAssigner
from network.protocol import assigned_message, game_state_message, status_message
from utils.settings import GameConfig

Notification = Tuple[Connection, Dict[str, Any]]


class SimulationContext:
    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.logger = logging.getLogger('FaviconPong.simulation')
        self.lock = threading.RLock()
        self.teams = TeamAssigner()
        self.registry = SlotRegistry()
        self.paddles = PaddleStore(self.config)
        self.physics = PhysicsEngine(self.config)

    # Membership

    def connect(self, transport: Any = None,
                transport_open: Optional[Callable[[], bool]] = None) -> Tuple[Connection, List[Notification]]:
        """Register a new connection and renumber everybody."""
        with self.lock:
            connection = Connection(team=self.teams.next_team(), transport=transport,
                                    transport_open=transport_open)
            self.registry.add(connection)
            notifications = self.recompute()
            self.logger.info(f"Player joined: {connection!r} (Total: {self.registry.total_players})")
            return connection, notifications

    def disconnect(self, connection: Connection) -> List[Notification]:
        """Tear down a closed or errored connection. Safe to call twice."""
        with self.lock:
            connection.mark_closed()
            if connection not in self.registry:
                return []
            old_slot = connection.slot
            notifications = self.recompute()
            self.logger.info(f"Player left: slot {old_slot}, team {connection.team} "
                             f"(Remaining: {self.registry.total_players})")
            return notifications

    def recompute(self) -> List[Notification]:
        """Renumber slots and bring the paddle store in line with them.

        All cleanup goes through here: a dead connection loses its paddle
        entry and its registry record, and entries outside 1..N are pruned,
        so the paddle store never holds a slot nobody occupies.
        """
        with self.lock:
            for dead in self.registry.dead_connections():
                if dead.slot:
                    self.paddles.discard(dead.slot)
            notified = self.registry.recompute()
            total = self.registry.total_players
            self.paddles.prune(total)
            for slot in range(1, total + 1):
                self.paddles.ensure(slot)
            self.paddles.reclamp(total)
            return [(conn, assigned_message(conn, total)) for conn in notified]

    # Inbound messages

    def move_paddle(self, connection: Connection, direction: Any) -> bool:
        """Apply a paddleMove request. Returns False when it was ignored."""
        with self.lock:
            if connection.slot <= 0 or connection not in self.registry:
                return False
            if not isinstance(direction, str) or direction not in VALID_DIRECTIONS:
                return False
            self.paddles.move(connection.slot, direction, self.registry.total_players)
            return True

    def status(self, connection: Connection) -> Dict[str, Any]:
        with self.lock:
            return status_message(connection, self.registry.total_players)

    # Tick

    def team_for_slot(self, slot: int) -> Optional[str]:
        connection = self.registry.connection_for_slot(slot)
        return connection.team if connection is not None else None

    def has_dead_connections(self) -> bool:
        with self.lock:
            return self.registry.has_dead_connections()

    def reap_dead_connections(self) -> List[Notification]:
        """Recompute if any transport died without a disconnect event."""
        with self.lock:
            if not self.registry.has_dead_connections():
                return []
            return self.recompute()

    def tick(self) -> Tuple[Dict[str, Any], List[Connection]]:
        """Advance the world one tick.

        Returns the gameState snapshot and the open connections to
        broadcast it to.
        """
        with self.lock:
            total = self.registry.total_players
            scored = self.physics.step(self.paddles, total, self.team_for_slot)
            if scored:
                scores = self.physics.team_scores
                self.logger.info(f"Point for {scored} (red {scores['red']} - blue {scores['blue']})")

            ball = self.physics.ball
            snapshot = game_state_message(
                ball_x=ball.x,
                ball_y=ball.y,
                ball_vel_x=ball.vx,
                total_players=total,
                paddle_positions=self.paddles.as_dict(),
                team_scores=self.physics.team_scores.as_dict(),
                last_scoring_team=self.physics.score_flash.team,
            )
            return snapshot, self.registry.open_connections()
