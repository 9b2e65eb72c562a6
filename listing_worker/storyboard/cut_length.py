"""
Cut-Length Policy — photo count → target scene-count range.

Users may pick short/medium/long explicitly; otherwise the cut is chosen
from how many photos were uploaded.
"""

import logging
from typing import Optional, Tuple, Union

from .models import CutLength, CutLengthRange

logger = logging.getLogger(__name__)

# ── Config ───────────────────────────────────────────────────────────────────

CUT_LENGTH_RANGES = {
    CutLength.SHORT: CutLengthRange(min=10, max=14),
    CutLength.MEDIUM: CutLengthRange(min=15, max=20),
    CutLength.LONG: CutLengthRange(min=21, max=30),
}

SHORT_MAX_PHOTOS = 14
MEDIUM_MAX_PHOTOS = 20

# Upload bounds enforced by the product, not by this policy
MIN_PHOTOS = 10
MAX_PHOTOS = 30


def auto_cut_length(photo_count: int) -> CutLength:
    if photo_count <= SHORT_MAX_PHOTOS:
        return CutLength.SHORT
    if photo_count <= MEDIUM_MAX_PHOTOS:
        return CutLength.MEDIUM
    return CutLength.LONG


def resolve_cut_length(
    photo_count: int,
    explicit_choice: Optional[Union[CutLength, str]] = None,
) -> Tuple[CutLength, CutLengthRange]:
    """
    Pick the cut label and its scene range.

    An explicit choice always wins over the photo count. An explicit label
    that is not short/medium/long falls back to medium.
    """
    if explicit_choice is None:
        cut = auto_cut_length(photo_count)
    else:
        try:
            cut = CutLength(explicit_choice)
        except ValueError:
            logger.warning(f"Unknown cut length '{explicit_choice}', using medium")
            cut = CutLength.MEDIUM

    return cut, CUT_LENGTH_RANGES[cut]


def pick_range(
    photo_count: int,
    explicit_choice: Optional[Union[CutLength, str]] = None,
) -> CutLengthRange:
    """Target {min, max} scene count for a storyboard."""
    return resolve_cut_length(photo_count, explicit_choice)[1]
