#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MoodGrid - View State
Calendar pointer, focus navigation and the URL query codec

The view is immutable: every navigation step returns a new ViewState and
the caller decides whether the change is visible (see needs_render).
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, TypeVar, Union
from urllib.parse import parse_qs, urlencode

from models.enums import ViewShift
from utils import datetime_utils
from utils.datetime_utils import add_days, days_in_month, normalize_month
from utils.validators import parse_int

logger = logging.getLogger(__name__)

FOCUS_TODAY = "today"

D = TypeVar("D")

QueryParams = Union[str, Mapping[str, str]]


def _single_values(query: QueryParams) -> Dict[str, str]:
    if isinstance(query, str):
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}
    return dict(query)


def _int_param(params: Mapping[str, str], key: str) -> Optional[int]:
    raw = params.get(key)
    if not raw:
        return None
    return parse_int(raw)


def _valid_year(year: int) -> bool:
    return date.min.year <= year <= date.max.year


@dataclass(frozen=True)
class ViewState:
    """Displayed month (via the pointer date) plus an optional focused day."""

    current: date
    focus: Optional[int] = None
    today: Optional[date] = None

    def __post_init__(self):
        if self.focus is not None and self.focus < 1:
            raise ValueError(f"focus must be a day of the month, got {self.focus}")

    @property
    def year(self) -> int:
        return self.current.year

    @property
    def month(self) -> int:
        """Zero-based month index."""
        return self.current.month - 1

    def real_today(self) -> date:
        return self.today or datetime_utils.today()

    # ===== URL CODEC =====

    @classmethod
    def from_query(cls, query: QueryParams, today: Optional[date] = None) -> "ViewState":
        """
        Decode `year`, `month` (1-based) and `focus` (int or "today").

        Missing or unparseable parameters fall back to today's date and no
        focus. A focused view puts its pointer on the focused day so that
        focus navigation steps from there.
        """
        params = _single_values(query)
        now = today or datetime_utils.today()

        if params.get("focus") == FOCUS_TODAY:
            focus = now.day
        else:
            focus = _int_param(params, "focus")
            if focus is not None and focus < 1:
                logger.debug("ignoring focus=%s, not a day of the month", focus)
                focus = None

        year, month = now.year, now.month - 1
        year_param = _int_param(params, "year")
        if year_param is not None and _valid_year(year_param):
            year = year_param
        month_param = _int_param(params, "month")
        if month_param is not None:
            rolled_year, rolled_month = normalize_month(year, month_param - 1)
            if _valid_year(rolled_year):
                year, month = rolled_year, rolled_month

        day = focus if focus is not None else now.day
        day = min(day, days_in_month(year, month))
        return cls(current=date(year, month + 1, day), focus=focus, today=today)

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        now = self.real_today()
        diff_year = self.year != now.year
        if diff_year:
            params["year"] = str(self.year)
        if diff_year or self.month != now.month - 1:
            params["month"] = str(self.month + 1)
        if self.focus is not None:
            params["focus"] = str(self.focus)
        return params

    def to_query(self) -> str:
        return urlencode(self.to_params())

    # ===== NAVIGATION =====

    def shifted(self, shift: ViewShift) -> "ViewState":
        shift = ViewShift(shift)

        if shift.is_focus:
            if self.focus is None:
                return self
            delta = -1 if shift is ViewShift.FOCUS_BACK else 1
            try:
                moved = add_days(self.current, delta)
            except OverflowError:
                return self
            return replace(self, current=moved, focus=moved.day)

        delta = -1 if shift is ViewShift.MONTH_BACK else 1
        year, month = normalize_month(self.year, self.month + delta)
        if not _valid_year(year):
            return self
        now = self.real_today()
        # returning to the current month lands on today
        day = now.day if (year, month) == (now.year, now.month - 1) else 1
        return replace(self, current=date(year, month + 1, day), focus=None)

    def needs_render(self, other: "ViewState") -> bool:
        return (self.year, self.month, self.focus) != (other.year, other.month, other.focus)

    def filter_days(self, days: Sequence[D]) -> List[D]:
        if self.focus is None:
            return list(days)
        return [day for day in days if day.date == self.focus]
