"""
Storyboard error taxonomy.

A DegenerateOrdering (AI order too scrambled) is not an error: it is repaired
locally and surfaces only as OrderingReport.resequenced.
"""

from typing import Any, Iterable, Optional


class StoryboardError(Exception):
    """Base exception for storyboard generation failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class OracleUnavailable(StoryboardError):
    """The external AI call itself failed (network, auth, rate limit)."""
    pass


class MalformedResponse(StoryboardError, ValueError):
    """The oracle output did not parse or failed schema validation."""

    def __init__(self, message: str, errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class UnknownAssetReference(MalformedResponse):
    """A scene or room tag points at an asset that was not in the request."""

    def __init__(self, asset_ids: Iterable[str]):
        self.asset_ids = sorted(set(asset_ids))
        super().__init__(
            f"Oracle referenced unknown asset id(s): {self.asset_ids}",
            errors=[{"type": "unknown_asset", "asset_id": a} for a in self.asset_ids],
        )
