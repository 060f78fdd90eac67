"""
Supabase database client
"""
from typing import Optional

from supabase import create_client, Client
from loguru import logger

from app.config import get_settings


# Singleton client
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Shared Supabase client instance (singleton).
    """
    global _supabase_client
    if _supabase_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY environment variables must be set")
        _supabase_client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )
        logger.info("Supabase client initialized")
    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the cached client (settings changed, tests)"""
    global _supabase_client
    _supabase_client = None
