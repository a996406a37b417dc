"""
Slot Registry

Maps live connections to a dense sequence of slots 1..N. Slots are not stable
identities: every membership change recomputes the whole assignment from the
insertion order of the connections that still have an open transport.
"""
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

_connection_ids = itertools.count(1)


@dataclass(eq=False)
class Connection:
    """Server-side record for one transport session.

    ``team`` is fixed at creation. ``slot`` is 0 until the first recompute and
    changes whenever the membership does.
    """
    team: str
    transport: Any = None
    transport_open: Optional[Callable[[], bool]] = None
    slot: int = 0
    binary: bool = False
    closed: bool = False
    conn_id: int = field(default_factory=lambda: next(_connection_ids))

    @property
    def is_open(self) -> bool:
        if self.closed:
            return False
        if self.transport_open is not None:
            return bool(self.transport_open())
        return True

    def mark_closed(self) -> None:
        self.closed = True

    def __repr__(self) -> str:
        return f"Connection(id={self.conn_id}, slot={self.slot}, team={self.team})"


class SlotRegistry:
    """Ordered set of known connections plus their current slot numbers."""

    def __init__(self):
        # dicts keep insertion order, which is the slot order
        self._connections: Dict[int, Connection] = {}
        self._by_slot: Dict[int, Connection] = {}

    def add(self, connection: Connection) -> None:
        self._connections[connection.conn_id] = connection

    def remove(self, connection: Connection) -> bool:
        """Forget a connection. Returns False if it was already gone."""
        return self._connections.pop(connection.conn_id, None) is not None

    def __contains__(self, connection: Connection) -> bool:
        return connection.conn_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def open_connections(self) -> List[Connection]:
        return [c for c in self._connections.values() if c.is_open]

    def dead_connections(self) -> List[Connection]:
        return [c for c in self._connections.values() if not c.is_open]

    def has_dead_connections(self) -> bool:
        return any(not c.is_open for c in self._connections.values())

    @property
    def total_players(self) -> int:
        """N, the number of slots handed out by the last recompute."""
        return len(self._by_slot)

    def connection_for_slot(self, slot: int) -> Optional[Connection]:
        return self._by_slot.get(slot)

    def recompute(self) -> List[Connection]:
        """Drop dead connections and renumber the rest 1..N.

        Returns the connections, in slot order, that need an ``assigned``
        notification. N changes on every membership delta, so that is all
        of them.
        """
        for conn_id in [cid for cid, c in self._connections.items() if not c.is_open]:
            dead = self._connections.pop(conn_id)
            dead.slot = 0

        self._by_slot = {}
        for number, connection in enumerate(self._connections.values(), start=1):
            connection.slot = number
            self._by_slot[number] = connection
        return list(self._by_slot.values())
