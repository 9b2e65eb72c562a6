"""
Storyboard Request/Response contract and post-processing pipeline.

  1. Parse the raw oracle output (dict or JSON text)
  2. Validate it against StoryboardResult + the request's asset ids
  3. Resolve each scene's room type from the room tags
  4. Count inversions over the as-returned order
  5. Resequence if the order is degenerate, otherwise just renumber

Structurally invalid output is rejected whole (MalformedResponse). Only the
ordering is ever repaired.
"""

import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from .errors import MalformedResponse, UnknownAssetReference
from .models import (
    OrderingReport,
    StoryboardOutcome,
    StoryboardRequest,
    StoryboardResult,
    StoryboardScene,
)
from .ranker import INVERSION_SLACK, rank_scenes
from .resequencer import renumber, resequence
from .taxonomy import UNKNOWN_ROOM
from .validator import RESEQUENCE_THRESHOLD, needs_resequencing

logger = logging.getLogger(__name__)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[-1]
    if text.endswith("```"):
        text = text.rsplit("```", 1)[0]
    return text.strip()


def parse_oracle_payload(raw: Any) -> dict:
    """Turn raw oracle output into a dict, or raise MalformedResponse."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedResponse(
                "AI response is not valid UTF-8",
                errors=[{"type": "utf8_invalid", "msg": str(e)}],
            ) from e

    if isinstance(raw, str):
        text = _strip_code_fence(raw)
        try:
            raw = json.loads(text)
        # ValueError covers JSONDecodeError and over-long integer literals;
        # RecursionError is raised on deeply nested arrays/objects
        except (ValueError, RecursionError) as e:
            raise MalformedResponse(
                f"Failed to parse AI response as JSON: {text[:200]}",
                errors=[{"type": "json_invalid", "msg": str(e)}],
            ) from e

    if not isinstance(raw, dict):
        raise MalformedResponse(
            f"AI response must be a JSON object, got {type(raw).__name__}"
        )
    return raw


def validate_oracle_response(raw: Any, request: StoryboardRequest) -> StoryboardResult:
    """
    Schema-check the oracle output for one request.

    Raises:
        MalformedResponse:     unparseable JSON or a schema violation.
        UnknownAssetReference: a tag or scene names an asset not in the request.
    """
    payload = parse_oracle_payload(raw)

    try:
        result = StoryboardResult.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        logger.error(f"Storyboard schema validation failed: {len(errors)} error(s)")
        raise MalformedResponse(
            f"AI response failed schema validation: {errors[0]['msg']}",
            errors=errors,
        ) from e

    known = request.asset_ids()
    unknown = [t.asset_id for t in result.room_tags if t.asset_id not in known]
    unknown += [s.asset_id for s in result.scenes if s.asset_id not in known]
    if unknown:
        raise UnknownAssetReference(unknown)

    return result


def resolve_room_types(result: StoryboardResult, request: StoryboardRequest) -> dict[str, str]:
    """
    asset_id → room type for every input asset.

    Oracle tags win (the last tag for an asset if it was tagged twice); an
    untagged asset keeps its previously assigned room type, else "unknown".
    """
    room_types = {a.id: a.room_type or UNKNOWN_ROOM for a in request.assets}
    for tag in result.room_tags:
        room_types[tag.asset_id] = tag.room_type
    return room_types


def _as_returned_order(scenes: list[StoryboardScene]) -> list[StoryboardScene]:
    # Deliberately the oracle's scene_order, not array position; position breaks ties
    return sorted(scenes, key=lambda s: s.scene_order)


def finalize_storyboard(
    raw: Any,
    request: StoryboardRequest,
    slack: Optional[int] = None,
    threshold: Optional[float] = None,
) -> StoryboardOutcome:
    """
    Validate an oracle response and guarantee a usable walkthrough order.

    The returned storyboard always has scene_order exactly 1..N. Neither
    `raw` nor `request` is modified.
    """
    slack = INVERSION_SLACK if slack is None else slack
    threshold = RESEQUENCE_THRESHOLD if threshold is None else threshold

    result = validate_oracle_response(raw, request)
    room_types = resolve_room_types(result, request)

    scenes = _as_returned_order(result.scenes)
    sequence = [room_types.get(s.asset_id, UNKNOWN_ROOM) for s in scenes]
    inversions, ratio = rank_scenes(sequence, slack=slack)
    pair_count = max(len(scenes) - 1, 0)

    logger.info(
        f"Walkthrough order check: {inversions} inversions out of {pair_count} pairs "
        f"(ratio: {ratio:.2f})"
    )

    resequenced = needs_resequencing(ratio, threshold=threshold)
    if resequenced:
        logger.info("Re-sorting scenes by canonical walkthrough order (AI ordering was poor)")
        scenes = resequence(scenes, room_types)
    else:
        scenes = renumber(scenes)

    in_range = request.scene_range.contains(len(scenes))
    if not in_range:
        logger.warning(
            f"Storyboard has {len(scenes)} scenes, requested "
            f"{request.scene_range.min}-{request.scene_range.max} ({request.cut_length.value} cut)"
        )

    storyboard = result.model_copy(update={"scenes": scenes})
    report = OrderingReport(
        inversions=inversions,
        pair_count=pair_count,
        inversion_ratio=ratio,
        resequenced=resequenced,
        scene_count=len(scenes),
        requested_range=request.scene_range,
        scene_count_in_range=in_range,
        room_sequence=[room_types.get(s.asset_id, UNKNOWN_ROOM) for s in scenes],
    )
    return StoryboardOutcome(storyboard=storyboard, report=report)
