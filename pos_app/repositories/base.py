# pos_app/repositories/base.py
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from pos_app.core.errors import StoreError
from pos_app.core.supabase_client import supabase_admin


class SupabaseRepository:
    """
    Shared plumbing for repositories backed by Supabase (PostgREST).

    - The client is resolved lazily so importing a router never opens
      a connection.
    - Every store failure leaves here as StoreError; services never
      see postgrest/httpx exceptions.
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = supabase_admin()
        return self._client

    def _execute(self, query: Any, action: str):
        try:
            return query.execute()
        except APIError as exc:
            raise StoreError(f"{action} failed: {exc.message}") from exc
        except httpx.HTTPError as exc:
            raise StoreError(f"{action} failed: {exc}") from exc
