# admin_console/services/supabase_client.py
"""
Backend gateway.

The console never talks to Postgres directly: every read, update and
procedure call goes through the Supabase REST layer (PostgREST) with the
service-role key. This module is the only place that knows the client's
builder API; the rest of the code calls the four operations below.
"""
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from admin_console.config import settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Backend call failed. `message` is the backend's own text when it sent one."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


def _apply_filters(query, eq: Optional[Dict[str, Any]], gte: Optional[Dict[str, Any]]):
    for column, value in (eq or {}).items():
        query = query.eq(column, value)
    for column, value in (gte or {}).items():
        query = query.gte(column, value)
    return query


class SupabaseGateway:
    def __init__(self, client: Client):
        self.client = client

    def _execute(self, what: str, builder):
        try:
            return builder.execute()
        except APIError as e:
            logger.error("[GATEWAY] %s failed: %s (code=%s)", what, e.message, e.code)
            raise GatewayError(e.message or "backend request failed", e.code) from e
        except httpx.HTTPError as e:
            logger.error("[GATEWAY] %s failed: %r", what, e)
            raise GatewayError(str(e) or "backend unreachable") from e

    # list rows
    def select(
        self,
        table: str,
        columns: str = "*",
        *,
        eq: Optional[Dict[str, Any]] = None,
        gte: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Rows of `table`. Embedded relations are requested through `columns`
        the PostgREST way, e.g. ``*,profiles!fk_name(display_name,email)``.
        """
        query = _apply_filters(self.client.table(table).select(columns), eq, gte)
        if order:
            query = query.order(order, desc=desc)
        if limit is not None:
            query = query.limit(limit)
        response = self._execute(f"select {table}", query)
        return response.data if response.data else []

    # exact count, no rows (head)
    def count(
        self,
        table: str,
        *,
        eq: Optional[Dict[str, Any]] = None,
        gte: Optional[Dict[str, Any]] = None,
    ) -> int:
        query = self.client.table(table).select("id", count="exact", head=True)
        query = _apply_filters(query, eq, gte)
        response = self._execute(f"count {table}", query)
        return response.count or 0

    # update by primary key
    def update(self, table: str, patch: Dict[str, Any], *, id: str) -> List[Dict[str, Any]]:
        query = self.client.table(table).update(patch).eq("id", id)
        response = self._execute(f"update {table}", query)
        return response.data if response.data else []

    def rpc(self, name: str, params: Dict[str, Any]) -> Any:
        response = self._execute(f"rpc {name}", self.client.rpc(name, params))
        return response.data


@lru_cache
def get_supabase_gateway() -> SupabaseGateway:
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in .env")
    client: Client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    return SupabaseGateway(client)
