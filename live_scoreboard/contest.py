"""
Contest value and rank-index entry.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Contest:
    """
    A live contest between two participants.

    Equality and hashing use the (home, away) identity only. Scores take
    part in ranking, not in identity.
    """

    home: str
    away: str
    home_score: int = field(default=0, compare=False)
    away_score: int = field(default=0, compare=False)

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.home, self.away)

    @property
    def total(self) -> int:
        return self.home_score + self.away_score

    def with_scores(
        self,
        home_score: int,
        away_score: int,
    ) -> "Contest":
        """
        Return a copy of this contest carrying new scores.

        @param home_score: New home score
        @param away_score: New away score
        @return: Contest with the same identity and the given scores
        """
        return replace(self, home_score=home_score, away_score=away_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home": self.home,
            "away": self.away,
            "home_score": self.home_score,
            "away_score": self.away_score,
        }


@dataclass(frozen=True)
class RankedEntry:
    """A contest together with the sequence number assigned when it started."""

    contest: Contest
    sequence: int

    @property
    def rank_key(self) -> Tuple[int, int]:
        # Highest total first, then earliest start.
        return (-self.contest.total, self.sequence)
