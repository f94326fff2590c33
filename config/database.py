from functools import lru_cache

from supabase import create_client, Client
from .settings import settings


@lru_cache()
def get_supabase_client() -> Client:
    """Supabase 클라이언트를 반환합니다. (첫 호출 시 생성)"""
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_SERVICE_KEY
    )
