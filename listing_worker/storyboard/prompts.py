"""
Oracle prompt text for storyboard generation.

Provider-neutral: produces the system/user text and the photo URLs. The
caller's oracle client decides how to send them.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .models import MOTION_TEMPLATE_LIST, StoryboardRequest
from .taxonomy import ROOM_MOTIONS, ROOM_TYPES

# Above this many photos, ask for low-detail images to stay within token limits
LOW_DETAIL_THRESHOLD = 20


class StoryboardPrompt(BaseModel):
    system: str
    user: str
    image_urls: list[tuple[str, str]] = Field(
        default_factory=list, description="(asset_id, storage_url) in upload order"
    )
    image_detail: str = "auto"


STORYBOARD_SYSTEM_PROMPT = """You are a professional real estate videographer creating a cinematic property tour video. You analyze listing photos and create storyboards that feel like a natural walkthrough, exactly as you would guide a buyer through the home in person.

Respond with ONLY a JSON object matching this schema, no markdown:
{{
  "room_tags": [{{ "asset_id": "id", "room_type": "string", "confidence": 0.0-1.0, "description": "string" }}],
  "scenes": [{{ "asset_id": "id", "scene_order": 1, "caption": "string", "motion_template": "{motions}", "target_duration_sec": 3 }}],
  "narrative_arc": "string describing the video flow"
}}

Room types, in walkthrough order (use these exact snake_case values):
{rooms}

Rules:
- Tag EVERY photo with the most accurate room_type from the list above
- Order scenes exactly as the list above: start outside, enter through the front door, living spaces, kitchen, primary suite then primary bath, secondary bedrooms then bathrooms, utility spaces, end outside
- Create {min_scenes} to {max_scenes} scenes for a "{cut}" cut
- target_duration_sec must be between 2 and 10
- Do not repeat the same motion more than 2 times in a row
- Recommended motions: {motion_hints}
- Write short, elegant captions suitable for video overlays (e.g. "Chef's Kitchen with Quartz Island")
- Style pack: "{style}"
- Use the exact asset IDs provided, never invent new IDs
"""


def _asset_lines(request: StoryboardRequest) -> str:
    lines = []
    for i, asset in enumerate(request.assets, start=1):
        line = f'Photo {i}: ID="{asset.id}"'
        if asset.room_type:
            line += f" | Previously tagged: {asset.room_type}"
        lines.append(line)
    return "\n".join(lines)


def build_system_prompt(request: StoryboardRequest) -> str:
    motion_hints = ", ".join(f"{room}={motion.value}" for room, motion in ROOM_MOTIONS.items())
    return STORYBOARD_SYSTEM_PROMPT.format(
        motions="|".join(MOTION_TEMPLATE_LIST),
        rooms="\n".join(f"{i}. {room}" for i, room in enumerate(ROOM_TYPES, start=1)),
        min_scenes=request.scene_range.min,
        max_scenes=request.scene_range.max,
        cut=request.cut_length.value,
        motion_hints=motion_hints,
        style=request.style_pack_id,
    )


def build_user_prompt(request: StoryboardRequest, title: Optional[str] = None) -> str:
    title = title if title is not None else request.property_title
    listing = f' "{title}"' if title else ""
    return (
        f"Create a storyboard for this property listing{listing}.\n\n"
        f"I am providing {len(request.assets)} listing photos. "
        f"Use these exact asset IDs in your response:\n"
        f"{_asset_lines(request)}\n\n"
        f"Generate {request.scene_range.min}-{request.scene_range.max} scenes. "
        f"The walkthrough order is the MOST IMPORTANT aspect of this storyboard."
    )


def build_storyboard_prompt(request: StoryboardRequest) -> StoryboardPrompt:
    return StoryboardPrompt(
        system=build_system_prompt(request),
        user=build_user_prompt(request),
        image_urls=[(a.id, a.storage_url) for a in request.assets if a.storage_url],
        image_detail="low" if len(request.assets) > LOW_DETAIL_THRESHOLD else "auto",
    )
