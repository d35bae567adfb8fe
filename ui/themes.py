# ui/themes.py

import math
from typing import Tuple

from shared.models import MOOD_STEPS

Rgb = Tuple[int, int, int]


def _from_hex(value: str) -> Rgb:
    content = value.lstrip("#")
    return (int(content[0:2], 16), int(content[2:4], 16), int(content[4:6], 16))


MOOD_COLORS = {
    "manic": _from_hex("#83290B"),
    "mild_manic": _from_hex("#F38B68"),
    "regular": _from_hex("#E09515"),
    "mild_depressed": _from_hex("#AB9AC1"),
    "depressed": _from_hex("#463659"),
}

# (upper breakpoint, from color, to color); the first segment starts at 0
MOOD_SEGMENTS = [
    (6, MOOD_COLORS["manic"], MOOD_COLORS["mild_manic"]),
    (7, MOOD_COLORS["mild_manic"], MOOD_COLORS["regular"]),
    (8, MOOD_COLORS["regular"], MOOD_COLORS["mild_depressed"]),
    (MOOD_STEPS, MOOD_COLORS["mild_depressed"], MOOD_COLORS["depressed"]),
]


def _lerp(start: float, end: float, alpha: float) -> float:
    return start + (end - start) * alpha


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def color_for(step: int) -> Rgb:
    """Color of a mood step on the 15-point scale, manic (0) to depressed."""
    if not 0 <= step < MOOD_STEPS:
        raise ValueError(f"mood step {step} is outside 0..{MOOD_STEPS - 1}")

    low = 0
    for high, start, end in MOOD_SEGMENTS:
        if step >= high:
            low = high
            continue
        alpha = (step - low) / (high - low)
        return (
            _round_half_up(_lerp(start[0], end[0], alpha)),
            _round_half_up(_lerp(start[1], end[1], alpha)),
            _round_half_up(_lerp(start[2], end[2], alpha)),
        )
    raise AssertionError("unreachable: segments cover every valid step")
