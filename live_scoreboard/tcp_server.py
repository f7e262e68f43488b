"""
TCP server for live scoreboard commands.
"""

import asyncio
import logging
from typing import Any, List

from .board import Scoreboard
from .errors import ProtocolError, ScoreboardError

logger = logging.getLogger(__name__)

COMMAND_FIELDS = {
    "start": 2,
    "update": 4,
    "finish": 2,
    "summary": 0,
}


class TCPServer:
    """Handles TCP socket connections and scoreboard commands."""

    def __init__(
        self,
        board: Scoreboard,
        config: Any,
    ) -> None:
        self.board = board
        self.config = config

        board_name = self.config.get("board_name")
        welcome_text = (
            f"Welcome to {board_name}! Send one command: "
            "start,home,away | update,home,away,home_score,away_score | "
            "finish,home,away | summary\n"
        )
        self.welcome_msg = welcome_text.encode("ascii", errors="replace")

    def get_summary_response(self) -> str:
        """
        Generate the ranked summary as text.

        @return: Formatted string containing the live contests
        """
        contests = self.board.summary()
        board_name = self.config.get("board_name")

        if not contests:
            return f"{board_name} Summary:\nNo live contests!\n"

        max_entries = self.config.get("ui", "max_summary_entries")
        response = f"{board_name} Summary:\n"
        response += "=" * 30 + "\n"

        for position, contest in enumerate(contests[:max_entries], start=1):
            response += (
                f"{position:2d}. {contest.home} {contest.home_score} - "
                f"{contest.away_score} {contest.away}\n"
            )

        if len(contests) > max_entries:
            response += f"... and {len(contests) - max_entries} more contests\n"

        return response

    def _parse_name(self, value: str) -> str:
        name = value.strip()
        max_length = self.config.get("protocol", "max_name_length")
        if not name:
            raise ProtocolError("Name cannot be empty")
        if len(name) > max_length:
            raise ProtocolError(f"Name too long (max {max_length} characters)")
        return name

    def _parse_score(self, value: str) -> int:
        try:
            score = int(value.strip())
        except ValueError:
            raise ProtocolError("Score must be a valid integer") from None
        if score < 0:
            raise ProtocolError("Score must be non-negative")
        return score

    def _split_command(self, message: str) -> List[str]:
        parts = message.split(",")
        command = parts[0].strip().lower()

        if command not in COMMAND_FIELDS:
            raise ProtocolError(f"Unknown command '{command}'")

        fields = parts[1:]
        expected = COMMAND_FIELDS[command]
        if len(fields) != expected:
            raise ProtocolError(
                f"Invalid message format. '{command}' expects {expected} fields"
            )
        return [command] + fields

    def process_message(
        self,
        message: str,
    ) -> str:
        """
        Parse one command, apply it to the board and build the response.

        @param message: Raw command text, e.g. "update,Home,Away,1,0"
        @return: Summary text on success, "Error: ..." line on rejection
        """
        try:
            command, *fields = self._split_command(message.strip("\x00").strip())

            if command == "start":
                self.board.start(self._parse_name(fields[0]), self._parse_name(fields[1]))
            elif command == "update":
                home = self._parse_name(fields[0])
                away = self._parse_name(fields[1])
                home_score = self._parse_score(fields[2])
                away_score = self._parse_score(fields[3])
                self.board.update(home, away, home_score, away_score)
            elif command == "finish":
                self.board.finish(self._parse_name(fields[0]), self._parse_name(fields[1]))

        except ScoreboardError as e:
            logger.warning("Rejected command %r: %s", message, e)
            return f"Error: {e}\n"

        return self.get_summary_response()

    async def handle_socket_client(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        """
        Handle individual TCP client connection (async).

        Sends the welcome line, reads a single command, replies and closes.

        @param reader: AsyncIO stream reader for client connection
        @param writer: AsyncIO stream writer for client connection
        """
        client_addr = writer.get_extra_info("peername")
        logger.info("Socket client connected: %s", client_addr)

        try:
            writer.write(self.welcome_msg)
            await writer.drain()

            max_bytes = self.config.get("protocol", "max_message_bytes")
            data = await reader.read(max_bytes)
            if not data:
                logger.info("No data received from %s", client_addr)
                return

            try:
                response = self.process_message(data.decode("ascii"))
            except UnicodeDecodeError:
                response = "Error: Invalid character encoding\n"

            writer.write(response.encode("ascii", errors="replace"))
            await writer.drain()

        except (ConnectionError, OSError) as e:
            logger.error("Error handling socket client %s: %s", client_addr, e)

        finally:
            try:
                writer.close()
                await writer.wait_closed()
            except (ConnectionError, OSError):
                pass
            logger.info("Socket client disconnected: %s", client_addr)

    async def start_tcp_server(
        self,
        host: str = "0.0.0.0",
        port: int = 8080,
    ) -> asyncio.AbstractServer:
        """
        Start the TCP socket server.

        @param host: Host address to bind the server to (default "0.0.0.0")
        @param port: Port number to listen on (default 8080)
        @return: TCP server instance
        """
        server = await asyncio.start_server(self.handle_socket_client, host, port)
        logger.info("Socket server running on %s:%s", host, port)

        return server
