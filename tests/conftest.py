import pytest

from listing_worker import metrics
from listing_worker.storyboard.cut_length import CUT_LENGTH_RANGES
from listing_worker.storyboard.models import AssetInput, CutLength, StoryboardRequest

SCRAMBLED_ROOMS = [
    "kitchen", "backyard", "entry", "primary_bathroom",
    "exterior", "living_room", "primary_suite",
]
WALKTHROUGH_ROOMS = [
    "exterior", "entry", "living_room", "kitchen",
    "primary_suite", "primary_bathroom", "backyard",
]


def make_request(asset_count, cut=CutLength.SHORT, **kwargs) -> StoryboardRequest:
    return StoryboardRequest(
        assets=[AssetInput(id=f"a{i}") for i in range(1, asset_count + 1)],
        cut_length=cut,
        scene_range=CUT_LENGTH_RANGES[cut],
        **kwargs,
    )


def make_response(rooms, motion="push_in", duration=3) -> dict:
    """Oracle payload tagging asset a{i} with rooms[i-1], scenes in list order."""
    return {
        "room_tags": [
            {
                "asset_id": f"a{i}",
                "room_type": room,
                "confidence": 0.9,
                "description": f"Photo of the {room}",
            }
            for i, room in enumerate(rooms, start=1)
        ],
        "scenes": [
            {
                "asset_id": f"a{i}",
                "scene_order": i,
                "caption": room.replace("_", " ").title(),
                "motion_template": motion,
                "target_duration_sec": duration,
            }
            for i, room in enumerate(rooms, start=1)
        ],
        "narrative_arc": "Curb appeal, then inside, then the backyard.",
    }


@pytest.fixture(autouse=True)
def clean_metrics():
    metrics.reset()
    yield
    metrics.reset()
