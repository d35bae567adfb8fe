# database/manager.py

import asyncio
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from shared.models import Day
from utils.datetime_utils import month_key

logger = logging.getLogger(__name__)

DATA_DIR = Path("db_data")


# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Base error for the day store"""
    pass


class DatabaseCorruptionError(DatabaseError):
    """A stored month could not be read back"""
    pass


# ===== STORES =====

class DayStore(ABC):
    """Month records keyed by (year, zero-based month)."""

    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def get(self, year: int, month: int) -> Optional[List[Day]]:
        """Stored days for the month, or None when nothing was saved yet."""

    @abstractmethod
    async def set(self, year: int, month: int, days: List[Day]) -> None:
        """Replace the whole stored month."""


class FileDayStore(DayStore):
    """One JSON file per month, named `YYYY-MM.json` with a 1-based month."""

    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)
        self._locks: Dict[str, asyncio.Lock] = {}

    async def initialize(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"📂 Day store ready at {self.data_dir}")

    def path_for(self, year: int, month: int) -> Path:
        return self.data_dir / f"{month_key(year, month)}.json"

    def _lock(self, key: str) -> asyncio.Lock:
        # one writer per month; different months proceed independently
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    async def get(self, year: int, month: int) -> Optional[List[Day]]:
        key = month_key(year, month)
        async with self._lock(key):
            return await asyncio.to_thread(self._load_days, self.path_for(year, month))

    async def set(self, year: int, month: int, days: List[Day]) -> None:
        key = month_key(year, month)
        payload = [day.to_wire() for day in days]
        async with self._lock(key):
            await asyncio.to_thread(self._save_json, self.path_for(year, month), payload)
        logger.debug(f"Saved {len(days)} days to {key}")

    def _load_days(self, file_path: Path) -> Optional[List[Day]]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            raise DatabaseCorruptionError(f"{file_path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise DatabaseCorruptionError(f"{file_path} does not hold a list of days")
        try:
            return [Day.model_validate(item) for item in data]
        except ModelValidationError as e:
            raise DatabaseCorruptionError(f"{file_path} holds an invalid day: {e}") from e

    def _save_json(self, file_path: Path, data: List[dict]) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = file_path.with_name(file_path.name + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, file_path)
