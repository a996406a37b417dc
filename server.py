#!/usr/bin/env python3
"""
Favicon Pong game server.

Authoritative WebSocket server: every connected client owns one tile of a
horizontally tiled playfield and a paddle at its boundary. One handler
thread per connection feeds the simulation context; a fixed-rate ticker
advances the ball and broadcasts the full world state to everyone.
"""
import os
import json
import logging
import threading
from http import HTTPStatus
from typing import Any, Dict, Iterable, Optional

from websockets.exceptions import ConnectionClosed
from websockets.protocol import State
from websockets.sync.server import ServerConnection, serve

from game.simulation import Notification, SimulationContext
from game.slots import Connection
from game.ticker import FixedRateTicker
from network.protocol import (
    MSG_GET_STATUS, MSG_PADDLE_MOVE,
    BroadcastFrames, Frame, ProtocolError,
    decode_message, encode_message
)
from utils.helpers import utc_timestamp
from utils.settings import GameConfig, load_settings

HEALTH_PATH = '/healthz'


class GameServer:
    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 settings: Optional[Dict[str, Any]] = None, configure_logging: bool = True) -> None:
        # Setup logging
        if configure_logging:
            self.setup_logging()
        self.logger = logging.getLogger('FaviconPongServer')

        self.settings = settings if settings is not None else load_settings()
        self.host = host if host is not None else self.settings['host']
        self.port = port if port is not None else self.settings['port']

        # Game state
        self.config = GameConfig.from_settings(self.settings)
        self.context = SimulationContext(self.config)
        self.ticker = FixedRateTicker(self.config.frame_time, self.tick, name='game-loop')
        # Held from each recompute until its assigned messages are sent, so
        # clients see membership changes in the order they happened
        self.assign_lock = threading.Lock()

        self.running = False
        self._ws_server = None

    def setup_logging(self) -> None:
        """Configure logging for the server"""
        # Create logs directory if it doesn't exist
        log_dir = 'logs'
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # Create handlers
        file_handler = logging.FileHandler(os.path.join(log_dir, 'favicon-pong-server.log'))
        file_handler.setLevel(logging.DEBUG)

        error_handler = logging.FileHandler(os.path.join(log_dir, 'favicon-pong-server-errors.log'))
        error_handler.setLevel(logging.ERROR)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)

        # Create formatter
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)
        error_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        # Configure root logger
        logging.basicConfig(
            level=logging.DEBUG,
            handlers=[file_handler, error_handler, console_handler]
        )
        # Frame-level chatter from the transport is not useful at DEBUG
        logging.getLogger('websockets').setLevel(logging.INFO)

    def start(self) -> None:
        """Start the server and block until it is stopped"""
        self.running = True
        self.logger.info(f"Starting game server on {self.host}:{self.port}")
        self.logger.info(f"Tick rate: {self.config.fps} Hz, tile {self.config.tile_width}x{self.config.tile_height}")

        # The game loop runs whether or not anybody is connected
        self.ticker.start()

        with serve(self.handle_connection, self.host, self.port,
                   process_request=self.process_request) as ws_server:
            self._ws_server = ws_server
            self.logger.info(f"Health check available at http://{self.host}:{self.port}{HEALTH_PATH}")
            self.logger.info("Server is ready and waiting for connections")
            try:
                ws_server.serve_forever()
            except KeyboardInterrupt:
                self.logger.info("Received keyboard interrupt, shutting down...")
            finally:
                self.stop()

    def stop(self) -> None:
        """Stop the server"""
        if not self.running:
            return
        self.logger.info("Shutting down server...")
        self.running = False
        self.ticker.stop()
        if self._ws_server is not None:
            self._ws_server.shutdown()
            self._ws_server = None
        self.logger.info("Server stopped")

    # HTTP

    def process_request(self, connection: ServerConnection, request):
        """Answer the health check before the WebSocket handshake."""
        if request.path.split('?', 1)[0] != HEALTH_PATH:
            return None
        body = json.dumps({'status': 'ok', 'timestamp': utc_timestamp()})
        response = connection.respond(HTTPStatus.OK, body)
        del response.headers['Content-Type']
        response.headers['Content-Type'] = 'application/json'
        return response

    # Connection lifecycle

    def handle_connection(self, websocket: ServerConnection) -> None:
        """Run one client session from connect to disconnect"""
        connection = self.join(websocket)

        try:
            for data in websocket:
                self.handle_client_message(connection, data)
        except ConnectionClosed as e:
            self.logger.warning(f"Connection error for {connection!r}: {e}")
        finally:
            self.leave(connection)
            self.logger.info(f"Player disconnected: {connection!r}")

    def join(self, websocket: ServerConnection) -> Connection:
        """Register a transport and send everybody their new assignment"""
        with self.assign_lock:
            connection, notifications = self.context.connect(
                transport=websocket,
                transport_open=lambda: websocket.protocol.state is State.OPEN,
            )
            self.logger.info(f"New connection: {connection!r} from {websocket.remote_address}")
            self.deliver(notifications)
        return connection

    def leave(self, connection: Connection) -> None:
        with self.assign_lock:
            self.deliver(self.context.disconnect(connection))

    def handle_client_message(self, connection: Connection, data: Frame) -> None:
        """Handle one inbound frame from a client"""
        try:
            message = decode_message(data)
        except ProtocolError as e:
            self.logger.warning(f"Ignoring malformed message from {connection!r}: {e}")
            return

        if isinstance(data, (bytes, bytearray)):
            connection.binary = True

        message_type = message.get('type', '')
        if message_type == MSG_PADDLE_MOVE:
            direction = message.get('direction')
            if not self.context.move_paddle(connection, direction):
                self.logger.debug(f"Ignored paddleMove {direction!r} from {connection!r}")
        elif message_type == MSG_GET_STATUS:
            self.send_to_client(connection, self.context.status(connection))
        else:
            self.logger.debug(f"Unknown message type {message_type!r} from {connection!r}")

    # Outbound

    def send_to_client(self, connection: Connection, message: Dict[str, Any]) -> bool:
        """Send a message to a single client in its preferred encoding"""
        return self.send_frame(connection, encode_message(message, connection.binary))

    def send_frame(self, connection: Connection, frame: Frame) -> bool:
        """Send an encoded frame. A failed send marks the connection closed."""
        try:
            connection.transport.send(frame)
            return True
        except ConnectionClosed:
            connection.mark_closed()
        except Exception as e:
            self.logger.error(f"Error sending to {connection!r}: {e}")
            connection.mark_closed()
        return False

    def deliver(self, notifications: Iterable[Notification]) -> None:
        for connection, message in notifications:
            if connection.is_open:
                self.send_to_client(connection, message)

    def tick(self) -> None:
        """One game-loop iteration: simulate, then broadcast the snapshot"""
        if self.context.has_dead_connections():
            with self.assign_lock:
                self.deliver(self.context.reap_dead_connections())

        snapshot, recipients = self.context.tick()

        frames = BroadcastFrames(snapshot)
        for connection in recipients:
            self.send_frame(connection, frames.for_connection(connection))


def main():
    server = GameServer()
    logger = logging.getLogger('Main')

    try:
        server.start()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        server.stop()
    except Exception as e:
        logger.critical(f"Fatal server error: {e}", exc_info=True)
        server.stop()


if __name__ == "__main__":
    main()
