"""
In-memory scoreboard of live contests.

Contests are held in two indexes that are always updated together:

- a rank index, sorted by (total score descending, start sequence ascending)
- a lookup index, keyed by the (home, away) identity

Neither index is exposed. Callers go through start/update/finish/summary.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from sortedcontainers import SortedKeyList

from .contest import Contest, RankedEntry
from .errors import ContestNotFoundError

logger = logging.getLogger(__name__)


class Scoreboard:
    """Ranked collection of live contests."""

    def __init__(self) -> None:
        self._counter = 0
        self._ranked: SortedKeyList = SortedKeyList(key=lambda entry: entry.rank_key)
        self._by_identity: Dict[Tuple[str, str], RankedEntry] = {}

    def __len__(self) -> int:
        return len(self._by_identity)

    def __contains__(self, identity: object) -> bool:
        if isinstance(identity, str):
            return False
        try:
            return tuple(identity) in self._by_identity
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Contest]:
        return iter(self.summary())

    def _insert(self, entry: RankedEntry) -> None:
        self._ranked.add(entry)
        self._by_identity[entry.contest.identity] = entry

    def _remove(self, entry: RankedEntry) -> None:
        self._ranked.remove(entry)
        del self._by_identity[entry.contest.identity]

    def start(
        self,
        home: str,
        away: str,
    ) -> Contest:
        """
        Start a new contest at 0-0.

        Starting an identity that is already live replaces it: the old
        contest is dropped and a fresh one takes a new sequence number.

        @param home: Home participant name
        @param away: Away participant name
        @return: The newly started contest
        """
        existing = self._by_identity.get((home, away))
        if existing is not None:
            logger.info("Restarting live contest %s vs %s", home, away)
            self._remove(existing)

        entry = RankedEntry(Contest(home, away), self._counter)
        self._counter += 1
        self._insert(entry)

        logger.debug("Started %s vs %s (sequence %d)", home, away, entry.sequence)
        return entry.contest

    def update(
        self,
        home: str,
        away: str,
        home_score: int,
        away_score: int,
    ) -> Contest:
        """
        Replace the scores of a live contest.

        The contest keeps the sequence number it was started with, so ties
        on total score still resolve by start order.

        @param home: Home participant name
        @param away: Away participant name
        @param home_score: New home score
        @param away_score: New away score
        @return: The updated contest
        @raises ContestNotFoundError: If no such contest is live
        """
        existing = self._by_identity.get((home, away))
        if existing is None:
            raise ContestNotFoundError(home, away)

        updated = RankedEntry(
            existing.contest.with_scores(home_score, away_score),
            existing.sequence,
        )
        # Build the new key before either index is touched.
        new_key = updated.rank_key
        self._remove(existing)
        self._insert(updated)

        logger.debug(
            "Updated %s vs %s to %d-%d, rank key %s",
            home,
            away,
            home_score,
            away_score,
            new_key,
        )
        return updated.contest

    def update_contest(self, contest: Contest) -> Contest:
        """Apply the scores carried by a contest value to the live contest with its identity."""
        return self.update(
            contest.home, contest.away, contest.home_score, contest.away_score
        )

    def finish(
        self,
        home: str,
        away: str,
    ) -> Optional[Contest]:
        """
        Remove a contest from the board.

        Finishing a contest that is not live is a no-op.

        @param home: Home participant name
        @param away: Away participant name
        @return: The finished contest, or None if it was not live
        """
        existing = self._by_identity.get((home, away))
        if existing is None:
            logger.debug("Finish ignored, %s vs %s is not live", home, away)
            return None

        self._remove(existing)
        logger.debug("Finished %s vs %s", home, away)
        return existing.contest

    def get(
        self,
        home: str,
        away: str,
    ) -> Optional[Contest]:
        entry = self._by_identity.get((home, away))
        return entry.contest if entry is not None else None

    def summary(self) -> List[Contest]:
        """
        Snapshot of the live contests in rank order.

        @return: New list, highest total first, ties by start order
        """
        return [entry.contest for entry in self._ranked]
