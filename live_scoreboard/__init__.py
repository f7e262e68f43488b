"""
Live Scoreboard - ranked summary of in-progress contests.

This package provides:
- An in-memory scoreboard ranked by total score, then start order
- TCP socket server for start/update/finish commands
- Web interface and JSON API for viewing the ranked summary
- JSON file and environment variable configuration
"""

from .board import Scoreboard
from .config import ScoreboardConfig
from .contest import Contest
from .errors import ContestNotFoundError, ProtocolError, ScoreboardError
from .system import ScoreboardSystem
from .tcp_server import TCPServer
from .web_handlers import WebHandlers

__version__ = "1.0.0"
__author__ = "Live Scoreboard Contributors"

__all__ = [
    "Contest",
    "ContestNotFoundError",
    "ProtocolError",
    "Scoreboard",
    "ScoreboardConfig",
    "ScoreboardError",
    "ScoreboardSystem",
    "TCPServer",
    "WebHandlers",
]
