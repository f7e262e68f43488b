"""
Main ScoreboardSystem class that orchestrates all components.
"""

import asyncio
import logging
from typing import Optional
from aiohttp import web, web_runner
import aiohttp_cors

from .board import Scoreboard
from .config import ScoreboardConfig
from .web_handlers import WebHandlers
from .tcp_server import TCPServer

logger = logging.getLogger(__name__)


class ScoreboardSystem:
    """Live scoreboard served over TCP and HTTP from one event loop."""

    def __init__(
        self,
        config: Optional[ScoreboardConfig] = None,
        board: Optional[Scoreboard] = None,
    ) -> None:
        self.config = config if config is not None else ScoreboardConfig()
        self.board = board if board is not None else Scoreboard()

        self.host = self.config.get("server", "host")
        self.port = self.config.get("server", "socket_port")
        self.web_port = self.config.get("server", "web_port")

        self.web_handlers = WebHandlers(self.board, self.config)
        self.tcp_server = TCPServer(self.board, self.config)

    def build_web_app(self) -> web.Application:
        """
        Build the aiohttp application with all routes and CORS configured.

        @return: Configured web application
        """
        app = web.Application()

        cors = aiohttp_cors.setup(
            app,
            defaults={
                "*": aiohttp_cors.ResourceOptions(
                    allow_credentials=True,
                    expose_headers="*",
                    allow_headers="*",
                    allow_methods="*",
                )
            },
        )

        app.router.add_get("/", self.web_handlers.web_index)
        app.router.add_get("/api/summary", self.web_handlers.web_api_summary)
        app.router.add_get(
            "/api/contests/{home}/{away}", self.web_handlers.web_api_contest
        )

        for route in list(app.router.routes()):
            cors.add(route)

        return app

    async def start_web_server(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> web_runner.AppRunner:
        """
        Start the web server.

        @param host: Host address to bind the server to (default uses configured host)
        @param port: Port number to use (default uses configured web_port)
        @return: AppRunner instance for the web server
        """
        if host is None:
            host = self.host
        if port is None:
            port = self.web_port

        app_runner = web_runner.AppRunner(self.build_web_app())
        await app_runner.setup()

        site = web_runner.TCPSite(app_runner, host, port)
        await site.start()

        logger.info("Web server running on http://%s:%s", host, port)
        return app_runner

    async def start_socket_server(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> asyncio.AbstractServer:
        """
        Start the TCP socket server.

        @param host: Host address to bind the server to (default uses configured host)
        @param port: Port number to use (default uses configured port)
        @return: TCP server instance
        """
        if host is None:
            host = self.host
        if port is None:
            port = self.port

        return await self.tcp_server.start_tcp_server(host, port)

    async def run_both_servers(self) -> None:
        """
        Run the enabled servers until cancelled.

        The TCP server runs when the tcp_enabled feature is on, the web
        server when web_enabled is on.
        """
        socket_server = None
        web_server_runner = None

        if self.config.is_feature_enabled("tcp_enabled"):
            socket_server = await self.start_socket_server()
        if self.config.is_feature_enabled("web_enabled"):
            web_server_runner = await self.start_web_server()

        if socket_server is None and web_server_runner is None:
            logger.warning("Both TCP and web servers are disabled, nothing to run")
            return

        print(f"\n{self.config.get('board_name')} Running!")
        if socket_server is not None:
            print(f"Socket Server: {self.host}:{self.port}")
        if web_server_runner is not None:
            print(f"Web Interface: http://{self.host}:{self.web_port}")
        print("\nPress Ctrl+C to stop...\n")

        try:
            if socket_server is not None:
                async with socket_server:
                    await socket_server.serve_forever()
            else:
                await asyncio.Event().wait()
        finally:
            logger.info("Shutting down servers...")
            if socket_server is not None:
                socket_server.close()
                await socket_server.wait_closed()
            if web_server_runner is not None:
                await web_server_runner.cleanup()
