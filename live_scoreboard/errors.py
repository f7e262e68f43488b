"""
Exceptions raised by the live scoreboard.
"""


class ScoreboardError(Exception):
    """Base class for scoreboard errors."""


class ContestNotFoundError(ScoreboardError, LookupError):
    """Raised when an operation requires an active contest that does not exist."""

    def __init__(
        self,
        home: str,
        away: str,
    ) -> None:
        self.home = home
        self.away = away
        super().__init__(f"No active contest {home} vs {away}")


class ProtocolError(ScoreboardError, ValueError):
    """Raised when a TCP command cannot be parsed."""
