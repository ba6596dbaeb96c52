# pos_app/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from pos_app.core.config import get_settings


@lru_cache
def supabase_public() -> Client:
    """
    Create a Supabase client with the anon/public key.

    Use cases:
      - sign-in / sign-up passthrough to Supabase Auth

    Note: This client still respects RLS.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Use cases:
      - reading/writing products, transactions, transaction_items
      - uploading product images to Storage

    The auth gate is enforced by the API layer before any of these
    calls are made.

    Raises:
        RuntimeError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
