"""Supabase connection"""
from functools import lru_cache
from supabase import create_client, Client
from formfiler.config import get_settings
from formfiler.services.storage import SupabaseStorage


@lru_cache()
def get_supabase_admin() -> Client:
    """
    Get the service role Supabase client

    The service role key bypasses RLS, which the filer needs to create
    folders and move uploads anywhere in the bucket.

    Returns:
        Supabase client built once per process
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key
    )


def get_storage():
    """Storage client for the configured bucket (FastAPI dependency)"""
    return SupabaseStorage(get_supabase_admin(), get_settings().storage_bucket)
