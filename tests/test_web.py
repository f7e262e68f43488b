"""Tests for web_handlers.py and the aiohttp app built by system.py."""

import pytest
from aiohttp import test_utils

from live_scoreboard.board import Scoreboard
from live_scoreboard.config import ScoreboardConfig
from live_scoreboard.contest import Contest
from live_scoreboard.system import ScoreboardSystem
from live_scoreboard.web_handlers import WebHandlers


@pytest.fixture
def config(monkeypatch):
    for name in ("BOARD_NAME", "MAX_SUMMARY_ENTRIES"):
        monkeypatch.delenv(name, raising=False)
    return ScoreboardConfig()


def client_for(system):
    return test_utils.TestClient(test_utils.TestServer(system.build_web_app()))


@pytest.fixture
def system(config):
    system = ScoreboardSystem(config)
    board = system.board
    board.start("A", "B")
    board.start("C", "D")
    board.start("E", "F")
    board.start("G", "H")
    board.update("C", "D", 2, 0)
    board.update("E", "F", 1, 1)
    board.update("G", "H", 0, 1)
    return system


class TestRanksWithTies:
    """Display ranks from a board-ordered list."""

    def test_tied_totals_share_rank(self, config):
        handlers = WebHandlers(Scoreboard(), config)
        contests = [
            Contest("C", "D", 2, 0),
            Contest("E", "F", 1, 1),
            Contest("G", "H", 0, 1),
            Contest("A", "B", 0, 0),
        ]

        ranked = handlers.calculate_ranks_with_ties(contests)

        assert [r["rank"] for r in ranked] == [1, 1, 3, 4]
        assert [r["is_tied"] for r in ranked] == [True, True, False, False]
        assert [r["rank_class"] for r in ranked] == ["gold", "gold", "bronze", ""]
        assert ranked[0]["total"] == 2

    def test_empty(self, config):
        assert WebHandlers(Scoreboard(), config).calculate_ranks_with_ties([]) == []


@pytest.mark.asyncio
async def test_api_summary(system):
    async with client_for(system) as client:
        resp = await client.get("/api/summary")
        assert resp.status == 200
        data = await resp.json()

    assert data["board"] == "Live Scoreboard"
    assert [(c["home"], c["rank"]) for c in data["contests"]] == [
        ("C", 1),
        ("E", 1),
        ("G", 3),
        ("A", 4),
    ]
    assert data["contests"][0] == {
        "rank": 1,
        "home": "C",
        "away": "D",
        "home_score": 2,
        "away_score": 0,
        "total": 2,
        "is_tied": True,
    }


@pytest.mark.asyncio
async def test_api_summary_limit(system):
    async with client_for(system) as client:
        resp = await client.get("/api/summary", params={"limit": "2"})
        data = await resp.json()
        bad = await client.get("/api/summary", params={"limit": "zero"})
        negative = await client.get("/api/summary", params={"limit": "-3"})

        assert [c["home"] for c in data["contests"]] == ["C", "E"]
        assert bad.status == 400
        assert negative.status == 400


@pytest.mark.asyncio
async def test_api_contest(system):
    async with client_for(system) as client:
        found = await client.get("/api/contests/E/F")
        missing = await client.get("/api/contests/F/E")

        assert found.status == 200
        assert await found.json() == {
            "home": "E",
            "away": "F",
            "home_score": 1,
            "away_score": 1,
            "total": 2,
        }
        assert missing.status == 404
        assert (await missing.json())["error"] == "No active contest F vs E"


@pytest.mark.asyncio
async def test_index_page(system):
    system.board.start("<script>", "Away")

    async with client_for(system) as client:
        resp = await client.get("/")
        html = await resp.text()

    assert resp.status == 200
    assert "<h1>Live Scoreboard</h1>" in html
    assert "2 - 0" in html
    assert "&lt;script&gt;" in html
    assert "<script>" not in html


@pytest.mark.asyncio
async def test_index_page_empty(config):
    system = ScoreboardSystem(config)
    async with client_for(system) as client:
        resp = await client.get("/")
        assert "No live contests!" in await resp.text()


@pytest.mark.asyncio
async def test_web_sees_tcp_changes(system):
    system.tcp_server.process_message("update,A,B,5,0")

    async with client_for(system) as client:
        resp = await client.get("/api/summary", params={"limit": "1"})
        data = await resp.json()

    assert data["contests"][0]["home"] == "A"
