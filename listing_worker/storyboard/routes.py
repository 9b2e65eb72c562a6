"""
FastAPI routes for the storyboard sequencing engine.

Endpoints:
  POST /storyboard/validate     — Validate + reorder a raw oracle response
  GET  /storyboard/cut-length   — Scene range for a photo count
  GET  /storyboard/taxonomy     — Room vocabulary and walkthrough ranks
  POST /storyboard/priority     — Resolve free-text room labels
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from .cut_length import resolve_cut_length
from .errors import MalformedResponse
from .models import (
    CutLength,
    CutLengthResponse,
    PriorityLookup,
    PriorityLookupRequest,
    StoryboardOutcome,
    ValidateStoryboardRequest,
)
from .service import StoryboardService
from .taxonomy import (
    FALLBACK_PRIORITY,
    WALKTHROUGH_ORDER,
    best_motion_for_room,
    canonical_priority,
    canonical_room_type,
    normalize_room_label,
)

logger = logging.getLogger(__name__)

storyboard_router = APIRouter(prefix="/storyboard", tags=["storyboard"])

# Singleton service instance (no oracle: the web app calls the AI itself)
_service = StoryboardService()


@storyboard_router.post("/validate", response_model=StoryboardOutcome)
async def validate_storyboard(request: ValidateStoryboardRequest):
    """
    Validate an oracle response and return the final storyboard.

    Errors:
      - 422: Response is malformed or references unknown assets
    """
    try:
        return _service.revalidate(request.response, request.request)
    except MalformedResponse as e:
        logger.warning(f"Rejected storyboard: {e.message}")
        raise HTTPException(
            status_code=422,
            detail={"error": e.message, "errors": e.errors},
        )
    except Exception as e:
        logger.error(f"Storyboard validation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@storyboard_router.get("/cut-length", response_model=CutLengthResponse)
async def get_cut_length(
    photo_count: int = Query(..., ge=0),
    cut_length: Optional[CutLength] = None,
):
    """Scene-count range for a photo count; an explicit cut_length wins."""
    cut, scene_range = resolve_cut_length(photo_count, cut_length)
    return CutLengthResponse(
        photo_count=photo_count,
        cut_length=cut,
        explicit=cut_length is not None,
        scene_range=scene_range,
    )


@storyboard_router.get("/taxonomy")
async def get_taxonomy():
    """Room types in walkthrough order with their recommended motion."""
    return {
        "rooms": [
            {
                "room_type": room,
                "priority": priority,
                "motion_template": best_motion_for_room(room).value,
            }
            for room, priority in WALKTHROUGH_ORDER.items()
        ],
        "fallback_priority": FALLBACK_PRIORITY,
    }


@storyboard_router.post("/priority", response_model=list[PriorityLookup])
async def lookup_priority(request: PriorityLookupRequest):
    return [
        PriorityLookup(
            label=label,
            normalized=normalize_room_label(label),
            room_type=canonical_room_type(label),
            priority=canonical_priority(label),
        )
        for label in request.labels
    ]
