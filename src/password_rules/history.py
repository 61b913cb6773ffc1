import hmac
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

__all__ = ("MatchResult", "HistoryMatcher", "SequenceHistoryMatcher")


class MatchResult(Enum):
    MATCH = "match"
    NO_MATCH = "no_match"
    NO_GENERATION = "no_generation"


@runtime_checkable
class HistoryMatcher(Protocol):
    def matches(self, password: str, generation: int) -> MatchResult:
        """
        Checks a password against historical values or hashes.

        Generation 0 means the current password, 1 means the previous, and so on.
        If no history is available at that depth, NO_GENERATION is the
        appropriate result.
        """
        ...


@dataclass(slots=True, frozen=True)
class SequenceHistoryMatcher:
    """
    Matches against an in-memory password history supplied by the caller,
    ordered newest first.
    """

    history: Sequence[str]

    def matches(self, password: str, generation: int) -> MatchResult:
        if generation < 0 or generation >= len(self.history):
            return MatchResult.NO_GENERATION

        if hmac.compare_digest(
            password.encode("utf-8"), self.history[generation].encode("utf-8")
        ):
            return MatchResult.MATCH
        return MatchResult.NO_MATCH
