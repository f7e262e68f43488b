"""
Web route handlers for the live scoreboard.
"""

from pathlib import Path
from typing import List, Dict, Any, Sequence
from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .board import Scoreboard
from .contest import Contest

TEMPLATES_PATH = Path(__file__).parent / "templates"


class WebHandlers:
    """Handles web routes and responses."""

    def __init__(
        self,
        board: Scoreboard,
        config: Any,
        templates_path: Path = TEMPLATES_PATH,
    ) -> None:
        self.board = board
        self.config = config

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            autoescape=select_autoescape(["html"]),
            auto_reload=False,
            cache_size=50,
        )

    def calculate_ranks_with_ties(
        self,
        contests: Sequence[Contest],
    ) -> List[Dict[str, Any]]:
        """
        Calculate display ranks accounting for ties (same total gets same rank).

        @param contests: Contests in board order
        @return: List of dictionaries with ranking information and tie indicators
        """
        ranked_data = []
        current_rank = 1
        previous_total = None

        for i, contest in enumerate(contests):
            total = contest.total

            if previous_total is not None and total != previous_total:
                current_rank = i + 1

            is_tied = (i > 0 and contests[i - 1].total == total) or (
                i < len(contests) - 1 and contests[i + 1].total == total
            )

            rank_class = {1: "gold", 2: "silver", 3: "bronze"}.get(current_rank, "")

            entry = contest.to_dict()
            entry.update(
                {
                    "rank": current_rank,
                    "rank_class": rank_class,
                    "total": total,
                    "is_tied": is_tied,
                }
            )
            ranked_data.append(entry)

            previous_total = total

        return ranked_data

    def _parse_limit(
        self,
        request: web.Request,
    ) -> int:
        """
        Read the optional ``limit`` query parameter.

        @param request: HTTP request object
        @return: Requested limit, capped at the configured maximum
        @raises web.HTTPBadRequest: If the limit is not a positive integer
        """
        max_entries = self.config.get("ui", "max_summary_entries")
        raw_limit = request.query.get("limit")
        if raw_limit is None:
            return max_entries

        try:
            limit = int(raw_limit)
        except ValueError:
            limit = 0
        if limit <= 0:
            raise web.HTTPBadRequest(
                text='{"error": "limit must be a positive integer"}',
                content_type="application/json",
            )
        return min(limit, max_entries)

    async def web_index(
        self,
        _: web.Request,
    ) -> web.Response:
        """
        Web interface main page.

        @param _: Unused request parameter
        @return: HTTP response with rendered scoreboard page
        """
        max_entries = self.config.get("ui", "max_summary_entries")
        contests = self.board.summary()
        ranked = self.calculate_ranks_with_ties(contests[:max_entries])

        template = self.jinja_env.get_template("index.html")
        html = template.render(
            title=self.config.get("board_name"),
            contests=ranked,
            hidden=max(len(contests) - max_entries, 0),
            config=self.config,
        )
        return web.Response(text=html, content_type="text/html")

    async def web_api_summary(
        self,
        request: web.Request,
    ) -> web.Response:
        """
        API endpoint for the ranked summary.

        @param request: HTTP request object with optional limit query parameter
        @return: JSON response containing the live contests in rank order
        """
        limit = self._parse_limit(request)
        ranked = self.calculate_ranks_with_ties(self.board.summary()[:limit])

        return web.json_response(
            {
                "board": self.config.get("board_name"),
                "contests": [
                    {
                        key: entry[key]
                        for key in (
                            "rank",
                            "home",
                            "away",
                            "home_score",
                            "away_score",
                            "total",
                            "is_tied",
                        )
                    }
                    for entry in ranked
                ],
            }
        )

    async def web_api_contest(
        self,
        request: web.Request,
    ) -> web.Response:
        """
        API endpoint for a single contest.

        @param request: HTTP request object containing home and away names
        @return: JSON response with the contest, or 404 if it is not live
        """
        home = request.match_info["home"]
        away = request.match_info["away"]
        contest = self.board.get(home, away)

        if contest is None:
            return web.json_response(
                {"error": f"No active contest {home} vs {away}"}, status=404
            )

        payload = contest.to_dict()
        payload["total"] = contest.total
        return web.json_response(payload)
