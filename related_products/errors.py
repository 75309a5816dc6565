"""Exception hierarchy for recommendation acquisition."""

from __future__ import annotations


class RecommendationsError(Exception):
    """Base class for every failure raised while loading recommendations."""


class ConfigurationError(RecommendationsError):
    """The widget is missing the identifiers required to build a request."""


class SourceFailure(RecommendationsError):
    """A single data source could not satisfy the request."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class RenderFailure(RecommendationsError):
    """Rendering a successful outcome into the widget failed."""


class TerminalFailure(RecommendationsError):
    """Every source was exhausted without producing recommendations."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
