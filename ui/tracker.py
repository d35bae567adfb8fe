#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MoodGrid - Day Grid
Editing of a month's days and the navigation controller around it

Every accepted edit sends the entire month back to the server; rejected
or cancelled edits change nothing and send nothing.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from models.enums import ViewShift
from shared.models import MOOD_STEPS, Day, ExportResponse
from ui.prompts import Prompter
from ui.themes import Rgb, color_for
from ui.view import ViewState
from utils.validators import (
    ValidationError,
    is_valid_step,
    parse_anxiety,
    parse_comment,
    parse_hours_slept,
)

logger = logging.getLogger(__name__)


class DayClient(Protocol):
    async def import_days(self, year: int, month: int) -> List[Day]:
        ...

    async def export_days(self, year: int, month: int, days: List[Day]) -> ExportResponse:
        ...


@dataclass
class CheckCell:
    step: int
    color: Rgb
    checked: bool


@dataclass
class DayRow:
    date: int
    cells: List[CheckCell]
    anxiety: str
    hours_slept: str
    comment: str


def _text(value) -> str:
    return "" if value is None else str(value)


class DayGrid:
    """Days of one month, as loaded for a particular view."""

    def __init__(self, view: ViewState, days: List[Day], client: DayClient, prompter: Prompter):
        self.view = view
        self.days = days
        self.client = client
        self.prompter = prompter

    @property
    def visible_days(self) -> List[Day]:
        return self.view.filter_days(self.days)

    def day(self, date: int) -> Day:
        for day in self.days:
            if day.date == date:
                return day
        raise LookupError(f"day {date} is not part of {self.view.year}-{self.view.month + 1:02d}")

    def rows(self) -> List[DayRow]:
        return [
            DayRow(
                date=day.date,
                cells=[CheckCell(step, color_for(step), step in day.checks) for step in range(MOOD_STEPS)],
                anxiety=_text(day.anxiety),
                hours_slept=_text(day.hours_slept),
                comment=_text(day.comment),
            )
            for day in self.visible_days
        ]

    async def export(self) -> ExportResponse:
        return await self.client.export_days(self.view.year, self.view.month, self.days)

    # ===== FIELD EDITS =====

    async def toggle_check(self, date: int, step: int) -> bool:
        """Flip one mood step; returns whether it is checked afterwards."""
        if not is_valid_step(step):
            raise ValueError(f"mood step {step} is outside 0..{MOOD_STEPS - 1}")
        day = self.day(date)
        if step in day.checks:
            day.checks = [checked for checked in day.checks if checked != step]
        else:
            day.checks = day.checks + [step]
        await self.export()
        return step in day.checks

    async def edit_anxiety(self, date: int) -> bool:
        return await self._edit_field(date, "anxiety", "Anxiety?:", parse_anxiety)

    async def edit_hours_slept(self, date: int) -> bool:
        return await self._edit_field(date, "hours_slept", "Sleep?:", parse_hours_slept)

    async def edit_comment(self, date: int) -> bool:
        day = self.day(date)
        if day.comment and not self.prompter.confirm(f"Edit the comment of day {date}?"):
            return False
        return await self._edit_field(date, "comment", "Comment?:", parse_comment)

    async def _edit_field(self, date: int, field: str, message: str, parse: Callable) -> bool:
        day = self.day(date)
        current = getattr(day, field)
        raw = self.prompter.prompt(message, None if current is None else str(current))
        if raw is None:
            return False

        try:
            value = parse(raw)
        except ValidationError as e:
            self.prompter.alert(str(e))
            return False

        setattr(day, field, value)
        await self.export()
        return True


class Tracker:
    """
    Owns the current view and its grid.

    Navigation replaces the view; the grid is reloaded (and the URL
    rewritten through `on_navigate`) only when the month or focus changed.
    """

    def __init__(
        self,
        view: ViewState,
        client: DayClient,
        prompter: Prompter,
        on_navigate: Optional[Callable[[str], None]] = None,
    ):
        self.view = view
        self.client = client
        self.prompter = prompter
        self.on_navigate = on_navigate
        self.grid: Optional[DayGrid] = None
        self._generation = 0

    @property
    def url_query(self) -> str:
        return self.view.to_query()

    async def load(self) -> Optional[DayGrid]:
        self._generation += 1
        generation = self._generation
        view = self.view

        days = await self.client.import_days(view.year, view.month)
        if generation != self._generation:
            logger.debug(f"Dropping stale import for {view.year}-{view.month + 1:02d}")
            return self.grid

        self.grid = DayGrid(view, days, self.client, self.prompter)
        if self.on_navigate is not None:
            self.on_navigate(view.to_query())
        return self.grid

    async def shift(self, shift: ViewShift) -> bool:
        """Apply a navigation step; returns whether the grid was reloaded."""
        before = self.view
        self.view = before.shifted(shift)
        if not before.needs_render(self.view):
            return False
        await self.load()
        return True
