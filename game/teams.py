"""Team assignment for new connections."""
from typing import Sequence

from config.constants import TEAMS


class TeamAssigner:
    """Hands out teams strictly alternating over the lifetime of the process.

    Disconnects never rewind the sequence, so the n-th connection ever made
    always gets ``teams[n % len(teams)]``.
    """

    def __init__(self, teams: Sequence[str] = TEAMS):
        self._teams = tuple(teams)
        self._assigned = 0

    def next_team(self) -> str:
        team = self._teams[self._assigned % len(self._teams)]
        self._assigned += 1
        return team

    @property
    def assigned_count(self) -> int:
        """Number of teams handed out so far."""
        return self._assigned
