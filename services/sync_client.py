# services/sync_client.py

"""
Client for the import/export API.

Every call is a JSON POST; transport problems (connection failures,
timeouts, error statuses, malformed bodies) surface as TransportError.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
from pydantic import ValidationError as ModelValidationError

from shared.models import (
    Day,
    ExportRequest,
    ExportResponse,
    ImportRequest,
    ImportResponse,
    check_month_record,
)
from utils.decorators import retry_on_exception

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:8000/api"


class TransportError(Exception):
    """An import or export request could not be completed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SyncClient:
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 10.0,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "SyncClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    @retry_on_exception(retries=3, delay=0.5, exceptions=(aiohttp.ClientConnectionError, asyncio.TimeoutError))
    async def _send(self, path: str, payload: Dict[str, Any]) -> Tuple[int, str]:
        session = self._get_session()
        async with session.post(f"{self.api_url}/{path}", json=payload) as response:
            return response.status, await response.text()

    async def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        try:
            status, body = await self._send(path, payload)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{path} request to {self.api_url} failed: {e!r}") from e

        if status >= 400:
            raise TransportError(f"{path} returned HTTP {status}: {body[:200]}", status=status)
        try:
            return json.loads(body)
        except ValueError as e:
            raise TransportError(f"{path} returned a malformed body") from e

    async def import_days(self, year: int, month: int) -> List[Day]:
        request = ImportRequest(year=year, month=month)
        data = await self._post("import", request.model_dump())
        try:
            days = ImportResponse.model_validate(data).days
            check_month_record(year, month, days)
        except (ModelValidationError, ValueError) as e:
            raise TransportError(f"import returned an invalid month: {e}") from e
        logger.debug(f"Imported {len(days)} days for {year}-{month + 1:02d}")
        return days

    async def export_days(self, year: int, month: int, days: List[Day]) -> ExportResponse:
        request = ExportRequest(year=year, month=month, days=days)
        data = await self._post("export", request.model_dump(by_alias=True))
        try:
            return ExportResponse.model_validate(data)
        except ModelValidationError as e:
            raise TransportError(f"export returned an invalid acknowledgment: {e}") from e
