"""
Room Taxonomy — canonical walkthrough order for listing videos.

Lower rank = earlier in the tour: outside → inside → bedrooms → utility → outside.
Free-text room labels are normalized and fuzzy-matched onto the table; anything
unrecognized gets FALLBACK_PRIORITY and sorts last.
"""

import re
from types import MappingProxyType

from .models import MotionTemplate

# ── Walkthrough Order ────────────────────────────────────────────────────────

WALKTHROUGH_ORDER = MappingProxyType({
    "aerial": 1,
    "exterior": 2,
    "front": 3,
    "entry": 4,
    "foyer": 5,
    "hallway": 6,
    "living_room": 7,
    "great_room": 8,
    "family_room": 9,
    "dining_room": 10,
    "kitchen": 11,
    "primary_suite": 12,
    "primary_bedroom": 13,
    "primary_bathroom": 14,
    "bedroom": 15,
    "bathroom": 16,
    "office": 17,
    "study": 18,
    "bonus_room": 19,
    "laundry": 20,
    "laundry_room": 21,
    "utility": 22,
    "mudroom": 23,
    "basement": 24,
    "garage": 25,
    "patio": 26,
    "deck": 27,
    "backyard": 28,
    "pool": 29,
    "garden": 30,
})

UNKNOWN_ROOM = "unknown"
FALLBACK_PRIORITY = 50  # must stay above every rank in WALKTHROUGH_ORDER

ROOM_TYPES = tuple(WALKTHROUGH_ORDER.keys())

_WHITESPACE = re.compile(r"\s+")

# ── Motion recommendations ───────────────────────────────────────────────────

ROOM_MOTIONS = MappingProxyType({
    "aerial": MotionTemplate.PAN_LEFT,
    "exterior": MotionTemplate.PAN_LEFT,
    "front": MotionTemplate.PAN_RIGHT,
    "entry": MotionTemplate.PUSH_IN,
    "foyer": MotionTemplate.PUSH_IN,
    "hallway": MotionTemplate.PUSH_IN,
    "living_room": MotionTemplate.PAN_LEFT,
    "great_room": MotionTemplate.PAN_RIGHT,
    "family_room": MotionTemplate.PAN_LEFT,
    "dining_room": MotionTemplate.PAN_RIGHT,
    "kitchen": MotionTemplate.PAN_RIGHT,
    "primary_suite": MotionTemplate.PUSH_IN,
    "primary_bedroom": MotionTemplate.PUSH_IN,
    "primary_bathroom": MotionTemplate.TILT_UP,
    "bedroom": MotionTemplate.PUSH_IN,
    "bathroom": MotionTemplate.TILT_UP,
    "office": MotionTemplate.PAN_RIGHT,
    "study": MotionTemplate.PAN_LEFT,
    "bonus_room": MotionTemplate.PAN_LEFT,
    "garage": MotionTemplate.PAN_LEFT,
    "patio": MotionTemplate.PAN_LEFT,
    "deck": MotionTemplate.PAN_RIGHT,
    "backyard": MotionTemplate.PAN_LEFT,
    "pool": MotionTemplate.TILT_DOWN,
    "garden": MotionTemplate.TILT_DOWN,
})


def normalize_room_label(label) -> str:
    """Lowercase, trim, collapse whitespace and join words with underscores."""
    if label is None:
        return ""
    text = _WHITESPACE.sub(" ", str(label).lower()).strip()
    return text.replace(" ", "_")


def canonical_room_type(label) -> str:
    """
    Resolve a free-text room label to a WALKTHROUGH_ORDER key.

    Exact match first, then the first table entry where either string contains
    the other ("Primary Suite View" → primary_suite, "pool" → pool).
    Returns UNKNOWN_ROOM when nothing matches. Never raises.
    """
    key = normalize_room_label(label)
    if not key:
        return UNKNOWN_ROOM
    if key in WALKTHROUGH_ORDER:
        return key

    for room in WALKTHROUGH_ORDER:
        if room in key or key in room:
            return room

    return UNKNOWN_ROOM


def canonical_priority(label) -> int:
    """Walkthrough rank for a room label; FALLBACK_PRIORITY if unrecognized."""
    room = canonical_room_type(label)
    return WALKTHROUGH_ORDER.get(room, FALLBACK_PRIORITY)


def best_motion_for_room(label) -> MotionTemplate:
    """Recommended camera motion for a room label (push_in if none fits)."""
    return ROOM_MOTIONS.get(canonical_room_type(label), MotionTemplate.PUSH_IN)
