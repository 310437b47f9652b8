"""Supabase Data Service - table reads/upserts and edge function calls.

Features:
- PostgREST table access (select with ordering, upsert on conflict)
- Edge function invocation
- Service-role authentication
- No external SDK required (uses httpx)

Required env vars:
  SUPABASE_URL - Project URL (e.g., https://abcd.supabase.co)
  SUPABASE_SERVICE_ROLE_KEY - Service role key
"""

import copy
import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.exceptions import DataServiceError

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
FUNCTIONS_PATH = "/functions/v1"


class DataService:
    """Remote data service client using PostgREST + httpx."""

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.SUPABASE_URL
        self.api_key = api_key or settings.SUPABASE_SERVICE_ROLE_KEY
        self.timeout = timeout if timeout is not None else settings.SUPABASE_TIMEOUT
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if the data service credentials are present."""
        return bool(self.url) and bool(self.api_key)

    def get_status(self) -> Dict[str, Any]:
        """Get data service configuration status."""
        if not self.is_configured:
            return {
                "connected": False,
                "configured": False,
                "provider": "supabase",
                "message": "Supabase not configured. Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY.",
            }
        return {
            "connected": True,
            "configured": True,
            "provider": "supabase",
            "message": "Supabase data service configured",
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        target: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and decode the JSON body, raising DataServiceError on failure."""
        if not self.is_configured:
            raise DataServiceError("Supabase credentials not configured", target=target)

        request_headers = self._headers()
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(
                base_url=self.url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    headers=request_headers,
                )
        except httpx.HTTPError as e:
            raise DataServiceError(f"{type(e).__name__}: {e}", target=target) from e

        if resp.status_code >= 400:
            message = resp.text[:200]
            try:
                body = resp.json()
                if isinstance(body, dict):
                    message = body.get("message") or body.get("error") or message
            except ValueError:
                pass
            raise DataServiceError(message, target=target, status_code=resp.status_code)

        if not resp.content:
            return None
        return resp.json()

    async def select(
        self,
        table: str,
        columns: str = "*",
        order: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        Read rows from a table.

        Args:
            table: Table name
            columns: Comma separated column list
            order: Optional column to order by
            ascending: Sort direction for `order`

        Returns:
            List of row dicts
        """
        params = {"select": columns.replace(" ", "")}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"

        rows = await self._request("GET", f"{REST_PATH}/{table}", target=table, params=params)
        logger.debug(f"Selected {len(rows or [])} rows from {table}")
        return rows or []

    async def upsert(
        self,
        table: str,
        record: Dict[str, Any],
        on_conflict: str,
    ) -> List[Dict[str, Any]]:
        """
        Insert a row, or overwrite the existing row whose `on_conflict` column matches.

        Returns:
            The stored representation of the row(s)
        """
        rows = await self._request(
            "POST",
            f"{REST_PATH}/{table}",
            target=table,
            params={"on_conflict": on_conflict},
            json=record,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        return rows or []

    async def invoke_function(self, name: str, method: str = "GET") -> Any:
        """Invoke an edge function and return its decoded JSON body."""
        return await self._request(method, f"{FUNCTIONS_PATH}/{name}", target=name)


class MockDataService(DataService):
    """In-memory data service for testing and development."""

    def __init__(
        self,
        tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        functions: Optional[Dict[str, Any]] = None,
    ):
        self.url = "mock://supabase"
        self.api_key = "mock-key"
        self.timeout = 0
        self._transport = None
        self.tables: Dict[str, List[Dict[str, Any]]] = tables if tables is not None else {}
        self.functions: Dict[str, Any] = functions if functions is not None else {}
        self.failing: set[str] = set()
        self.calls: List[tuple] = []

    @property
    def is_configured(self) -> bool:
        """Mock service is always configured."""
        return True

    def get_status(self) -> Dict[str, Any]:
        return {
            "connected": True,
            "configured": True,
            "provider": "mock",
            "message": "Mock data service (in-memory, nothing persisted remotely)",
        }

    def fail(self, target: str) -> None:
        """Make every call addressed to `target` raise DataServiceError."""
        self.failing.add(target)

    def _check(self, target: str) -> None:
        if target in self.failing:
            raise DataServiceError(f"Mock failure for {target}", target=target, status_code=500)

    async def select(
        self,
        table: str,
        columns: str = "*",
        order: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        self.calls.append(("select", table))
        self._check(table)
        rows = [copy.deepcopy(row) for row in self.tables.get(table, [])]
        if order:
            rows.sort(key=lambda row: row.get(order) or "", reverse=not ascending)
        if columns.strip() != "*":
            wanted = [c.strip() for c in columns.split(",")]
            rows = [{c: row.get(c) for c in wanted} for row in rows]
        return rows

    async def upsert(
        self,
        table: str,
        record: Dict[str, Any],
        on_conflict: str,
    ) -> List[Dict[str, Any]]:
        self.calls.append(("upsert", table))
        self._check(table)
        rows = self.tables.setdefault(table, [])
        stored = copy.deepcopy(record)
        for i, row in enumerate(rows):
            if row.get(on_conflict) == record.get(on_conflict):
                rows[i] = {**row, **stored}
                return [copy.deepcopy(rows[i])]
        rows.append(stored)
        logger.info(f"Mock upsert into {table}: {on_conflict}={record.get(on_conflict)}")
        return [copy.deepcopy(stored)]

    async def invoke_function(self, name: str, method: str = "GET") -> Any:
        self.calls.append(("invoke", name))
        self._check(name)
        result = self.functions.get(name)
        if callable(result):
            result = result()
        return copy.deepcopy(result)
