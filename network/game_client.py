"""GameClient - headless network client for Favicon Pong"""
import logging
import threading
import time
from typing import Optional, Dict, Any

from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI
from websockets.sync.client import connect

from game.game_state import GameStateManager
from network.protocol import (
    MSG_ASSIGNED, MSG_GAME_STATE, MSG_STATUS, MSG_PADDLE_MOVE, MSG_GET_STATUS,
    ProtocolError, decode_message, encode_message
)


class GameClient:
    """Handle network communication with the Favicon Pong game server"""

    def __init__(self, server_url: str = 'ws://localhost:8080', binary: bool = False):
        self.server_url = server_url
        self.binary = binary  # Talk MessagePack instead of JSON
        self.logger = logging.getLogger('FaviconPongClient')

        # Client state
        self.websocket = None
        self.connected = False
        self.running = False
        self.state = GameStateManager()
        self.last_status: Optional[Dict[str, Any]] = None
        self.last_update_time = time.time()
        self._receiver: Optional[threading.Thread] = None

    @property
    def number(self) -> Optional[int]:
        return self.state.number

    @property
    def team(self) -> Optional[str]:
        return self.state.team

    def connect(self, open_timeout: float = 5.0) -> bool:
        """Connect to the game server and start receiving in the background"""
        self.logger.info(f"Connecting to server at {self.server_url}...")
        try:
            self.websocket = connect(self.server_url, open_timeout=open_timeout)
        except (OSError, TimeoutError, InvalidHandshake, InvalidURI) as e:
            self.logger.error(f"Connection failed: {e}")
            return False

        self.connected = True
        self.running = True
        self._receiver = threading.Thread(target=self.receive_messages, daemon=True)
        self._receiver.start()
        return True

    def receive_messages(self) -> None:
        """Receive messages from the server until the connection ends"""
        try:
            for data in self.websocket:
                try:
                    self.handle_server_message(decode_message(data))
                except ProtocolError as e:
                    self.logger.warning(f"Received invalid message from server: {e}")
        except ConnectionClosed as e:
            if self.running:
                self.logger.warning(f"Connection closed: {e}")
        finally:
            self.connected = False

    def handle_server_message(self, message: Dict[str, Any]) -> None:
        """Handle messages from server"""
        message_type: str = message.get('type', '')

        # Update last received time for any message from server
        self.last_update_time = time.time()

        if message_type == MSG_GAME_STATE:
            self.state.update(message)
        elif message_type == MSG_ASSIGNED:
            self.state.apply_assignment(message)
            self.logger.info(f"Assigned slot {self.number} of {message.get('totalPlayers')} on team {self.team}")
        elif message_type == MSG_STATUS:
            self.last_status = message
        else:
            self.logger.debug(f"Unknown message type: {message_type}")

    def move_paddle(self, direction: str) -> None:
        """Ask the server to move our paddle one step"""
        self.send_to_server({'type': MSG_PADDLE_MOVE, 'direction': direction})

    def request_status(self) -> None:
        self.send_to_server({'type': MSG_GET_STATUS})

    def send_to_server(self, message: Dict[str, Any]) -> None:
        """Send message to server"""
        if not self.connected or self.websocket is None:
            return
        try:
            self.websocket.send(encode_message(message, self.binary))
        except ConnectionClosed:
            self.connected = False

    def disconnect(self) -> None:
        """Disconnect from server"""
        self.running = False
        if self.websocket is not None:
            self.websocket.close()
        if self._receiver is not None:
            self._receiver.join(timeout=2.0)
        self.connected = False
        self.logger.info("Disconnected from server")

    def check_connection_timeout(self, timeout: float = 5.0) -> bool:
        """True if the server has been silent for longer than timeout"""
        return self.connected and time.time() - self.last_update_time > timeout
