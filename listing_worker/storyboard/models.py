"""
Pydantic models and enums for the storyboard sequencing engine.

The oracle output models (RoomTag, StoryboardScene, StoryboardResult) are the
schema boundary: nothing the AI returns is trusted until it parses into them.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# ── Enums ────────────────────────────────────────────────────────────────────

class MotionTemplate(str, Enum):
    PUSH_IN = "push_in"
    PAN_LEFT = "pan_left"
    PAN_RIGHT = "pan_right"
    TILT_UP = "tilt_up"
    TILT_DOWN = "tilt_down"


MOTION_TEMPLATE_LIST = [m.value for m in MotionTemplate]


class CutLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


# ── Cut Length ───────────────────────────────────────────────────────────────

class CutLengthRange(BaseModel):
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    def contains(self, count: int) -> bool:
        return self.min <= count <= self.max


# ── Request (input to the oracle) ────────────────────────────────────────────

class AssetInput(BaseModel):
    """One uploaded listing photo, as fetched by the caller."""
    id: str
    room_type: Optional[str] = None  # previously assigned tag, if any
    room_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    storage_url: Optional[str] = None


class StoryboardRequest(BaseModel):
    assets: list[AssetInput] = Field(..., min_length=1)
    style_pack_id: str = "modern-clean"
    cut_length: CutLength = CutLength.MEDIUM
    scene_range: CutLengthRange
    property_title: Optional[str] = None

    @field_validator("assets")
    @classmethod
    def _unique_asset_ids(cls, assets: list[AssetInput]) -> list[AssetInput]:
        seen: set[str] = set()
        for asset in assets:
            if asset.id in seen:
                raise ValueError(f"Duplicate asset id: {asset.id}")
            seen.add(asset.id)
        return assets

    def asset_ids(self) -> set[str]:
        return {a.id for a in self.assets}


# ── Oracle Output (validated) ────────────────────────────────────────────────

class RoomTag(BaseModel):
    asset_id: str = Field(..., strict=True)
    room_type: str = Field(..., strict=True)
    confidence: float = Field(..., ge=0.0, le=1.0, strict=True)
    description: str = Field(..., strict=True)


class StoryboardScene(BaseModel):
    asset_id: str = Field(..., strict=True)
    scene_order: int = Field(..., gt=0, strict=True)
    caption: str = Field(..., strict=True)
    motion_template: MotionTemplate
    target_duration_sec: float = Field(default=3, ge=2, le=10, strict=True)

    @field_validator("scene_order", mode="before")
    @classmethod
    def _integral_float_order(cls, value):
        # JSON numbers like 3.0 are whole; bools and strings still fail strict int
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class StoryboardResult(BaseModel):
    room_tags: list[RoomTag]
    scenes: list[StoryboardScene]
    narrative_arc: str = Field(..., strict=True)


# ── Ordering Report ──────────────────────────────────────────────────────────

class OrderingReport(BaseModel):
    """What the post-processing pass found and did. Observability only."""
    inversions: int = 0
    pair_count: int = 0
    inversion_ratio: float = 0.0
    resequenced: bool = False
    scene_count: int = 0
    requested_range: CutLengthRange
    scene_count_in_range: bool = True
    room_sequence: list[str] = Field(
        default_factory=list,
        description="Resolved room type of each scene, in final order",
    )


class StoryboardOutcome(BaseModel):
    storyboard: StoryboardResult
    report: OrderingReport


# ── API Models ───────────────────────────────────────────────────────────────

class ValidateStoryboardRequest(BaseModel):
    """Re-run validation on a raw oracle response (dict or JSON text)."""
    request: StoryboardRequest
    response: Any = Field(..., description="Raw oracle output, object or JSON string")


class CutLengthResponse(BaseModel):
    photo_count: int
    cut_length: CutLength
    explicit: bool
    scene_range: CutLengthRange


class PriorityLookupRequest(BaseModel):
    labels: list[str] = Field(default_factory=list)


class PriorityLookup(BaseModel):
    label: str
    normalized: str
    room_type: str
    priority: int
