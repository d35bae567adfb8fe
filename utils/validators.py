import re
from typing import Optional

from shared.models import MOOD_STEPS

ANXIETY_MIN = 0
ANXIETY_MAX = 3

# optional sign, ASCII decimal digits
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class ValidationError(ValueError):
    """User input for a day field was rejected."""


def parse_int(raw: str) -> Optional[int]:
    """Plain decimal integer, or None when the text is anything else."""
    value = raw.strip()
    if not INTEGER_RE.fullmatch(value):
        return None
    try:
        return int(value)
    except ValueError:
        # past the interpreter's digit limit
        return None


def parse_anxiety(raw: str) -> Optional[int]:
    value = raw.strip()
    if value == "":
        return None
    score = parse_int(value)
    if score is None or not ANXIETY_MIN <= score <= ANXIETY_MAX:
        raise ValidationError(f"'{value}' is not between {ANXIETY_MIN} and {ANXIETY_MAX}")
    return score


def parse_hours_slept(raw: str) -> Optional[int]:
    value = raw.strip()
    if value == "":
        return None
    hours = parse_int(value)
    if hours is None:
        raise ValidationError(f"'{value}' is not a valid number")
    return hours


def parse_comment(raw: str) -> Optional[str]:
    value = raw.strip()
    return value or None


def is_valid_step(step: int) -> bool:
    return 0 <= step < MOOD_STEPS
