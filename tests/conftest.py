import os

import pytest

from password_rules.history import MatchResult


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("PASSWORD_RULES_") or name in ("RULES", "POLICY"):
            monkeypatch.delenv(name)


class RecordingMatcher:
    """History matcher that reports MATCH at fixed generations and records calls."""

    def __init__(self, match_at=(), depth=None):
        self.match_at = set(match_at)
        self.depth = depth
        self.calls = []

    def matches(self, password, generation):
        self.calls.append(generation)
        if self.depth is not None and generation >= self.depth:
            return MatchResult.NO_GENERATION
        if generation in self.match_at:
            return MatchResult.MATCH
        return MatchResult.NO_MATCH


@pytest.fixture
def recording_matcher():
    return RecordingMatcher
