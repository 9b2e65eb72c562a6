"""
Storyboard Sequencing Engine

Turns an AI-proposed listing storyboard into a usable walkthrough:
  Room Taxonomy → Scene Ranker → Order Validator → Deterministic Resequencer
wrapped by the oracle request/response contract and the Cut-Length Policy.
"""

from .contract import finalize_storyboard, validate_oracle_response
from .cut_length import pick_range
from .errors import MalformedResponse, OracleUnavailable, StoryboardError, UnknownAssetReference
from .models import StoryboardOutcome, StoryboardRequest, StoryboardResult
from .ranker import count_inversions
from .resequencer import resequence
from .routes import storyboard_router
from .service import StoryboardService
from .taxonomy import canonical_priority
from .validator import needs_resequencing

__all__ = [
    "StoryboardService",
    "storyboard_router",
    "finalize_storyboard",
    "validate_oracle_response",
    "pick_range",
    "canonical_priority",
    "count_inversions",
    "needs_resequencing",
    "resequence",
    "StoryboardRequest",
    "StoryboardResult",
    "StoryboardOutcome",
    "StoryboardError",
    "OracleUnavailable",
    "MalformedResponse",
    "UnknownAssetReference",
]
