from typing import Any, Dict, Iterable, List, Optional
import logging

from supabase import Client

from src.common.search import contains_pattern

logger = logging.getLogger(__name__)

USER_TABLE = "user"
PUBLIC_COLUMNS = "id, social_id, social_type, nickname, email, profile_image, created_at"


class UsersRepository:
    """user 테이블 접근"""

    def __init__(self, client: Client):
        self.supabase = client

    async def find_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        try:
            response = self.supabase.table(USER_TABLE).select(PUBLIC_COLUMNS).eq("id", user_id).limit(1).execute()
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"❌ ID로 사용자 조회 오류: {e}")
            raise

    async def find_by_social_id(self, social_id: str, social_type: str) -> Optional[Dict[str, Any]]:
        try:
            response = (
                self.supabase
                .table(USER_TABLE)
                .select("*")
                .eq("social_id", social_id)
                .eq("social_type", social_type)
                .limit(1)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"❌ 소셜 ID로 사용자 조회 오류: {e}")
            raise

    async def find_by_ids(self, user_ids: Iterable[int]) -> Dict[int, Dict[str, Any]]:
        """사용자 ID들로 id -> 사용자 매핑 조회"""
        ids = list(set(user_ids))
        if not ids:
            return {}
        try:
            response = self.supabase.table(USER_TABLE).select(PUBLIC_COLUMNS).in_("id", ids).execute()
            return {user["id"]: user for user in response.data or []}
        except Exception as e:
            logger.error(f"❌ 사용자 목록 조회 오류: {e}")
            raise

    async def search_by_nickname(self, keyword: str, exclude_user_id: int) -> List[Dict[str, Any]]:
        try:
            response = (
                self.supabase
                .table(USER_TABLE)
                .select(PUBLIC_COLUMNS)
                .ilike("nickname", contains_pattern(keyword))
                .neq("id", exclude_user_id)
                .order("id")
                .execute()
            )
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 닉네임 검색 오류: {e}")
            raise

    async def create(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.supabase.table(USER_TABLE).insert(user_data).execute()
            if not response.data:
                raise Exception("사용자 생성 실패: response.data is empty")
            logger.info(f"🆕 새 사용자 생성: {response.data[0]['id']}")
            return response.data[0]
        except Exception as e:
            logger.error(f"❌ 사용자 생성 오류: {e}")
            raise

    async def update_profile(self, user_id: int, nickname: Optional[str] = None,
                             email: Optional[str] = None, profile_image: Optional[str] = None) -> None:
        update_data: Dict[str, Any] = {}
        if nickname is not None:
            update_data["nickname"] = nickname
        if email is not None:
            update_data["email"] = email
        if profile_image is not None:
            update_data["profile_image"] = profile_image
        if not update_data:
            return
        try:
            self.supabase.table(USER_TABLE).update(update_data).eq("id", user_id).execute()
        except Exception as e:
            logger.error(f"❌ 사용자 정보 업데이트 오류: {e}")
            raise

    async def get_refresh_token(self, user_id: int) -> Optional[str]:
        try:
            response = self.supabase.table(USER_TABLE).select("refresh_token").eq("id", user_id).limit(1).execute()
            return response.data[0].get("refresh_token") if response.data else None
        except Exception as e:
            logger.error(f"❌ 리프레시 토큰 조회 오류: {e}")
            raise

    async def update_refresh_token(self, user_id: int, refresh_token: Optional[str]) -> None:
        """리프레시 토큰 저장 (None이면 삭제)"""
        try:
            self.supabase.table(USER_TABLE).update({"refresh_token": refresh_token}).eq("id", user_id).execute()
        except Exception as e:
            logger.error(f"❌ 리프레시 토큰 업데이트 오류: {e}")
            raise
