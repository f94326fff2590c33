from typing import Any, Dict, Iterable, List, Optional
import logging

from supabase import Client

logger = logging.getLogger(__name__)

REACTION_TABLE = "reaction"


class ReactionsRepository:
    """reaction 테이블 접근"""

    def __init__(self, client: Client):
        self.supabase = client

    async def find(self, diary_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        try:
            response = (
                self.supabase
                .table(REACTION_TABLE)
                .select("*")
                .eq("diary_id", diary_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"❌ 리액션 조회 오류: {e}")
            raise

    async def find_by_diary(self, diary_id: int) -> List[Dict[str, Any]]:
        try:
            response = (
                self.supabase
                .table(REACTION_TABLE)
                .select("*")
                .eq("diary_id", diary_id)
                .order("id")
                .execute()
            )
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 리액션 목록 조회 오류: {e}")
            raise

    async def count_by_diary_ids(self, diary_ids: Iterable[int]) -> Dict[int, int]:
        """일기 ID -> 리액션 수"""
        ids = list(set(diary_ids))
        if not ids:
            return {}
        try:
            response = self.supabase.table(REACTION_TABLE).select("diary_id").in_("diary_id", ids).execute()
        except Exception as e:
            logger.error(f"❌ 리액션 수 조회 오류: {e}")
            raise

        counts: Dict[int, int] = {}
        for row in response.data or []:
            counts[row["diary_id"]] = counts.get(row["diary_id"], 0) + 1
        return counts

    async def create(self, diary_id: int, user_id: int, reaction: str) -> Dict[str, Any]:
        try:
            response = self.supabase.table(REACTION_TABLE).insert({
                "diary_id": diary_id,
                "user_id": user_id,
                "reaction": reaction,
            }).execute()
            if not response.data:
                raise Exception("리액션 저장 실패: response.data is empty")
            return response.data[0]
        except Exception as e:
            logger.error(f"❌ 리액션 저장 오류: {e}")
            raise

    async def update(self, reaction_id: int, reaction: str) -> None:
        try:
            self.supabase.table(REACTION_TABLE).update({"reaction": reaction}).eq("id", reaction_id).execute()
        except Exception as e:
            logger.error(f"❌ 리액션 수정 오류: {e}")
            raise

    async def delete(self, reaction_id: int) -> None:
        try:
            self.supabase.table(REACTION_TABLE).delete().eq("id", reaction_id).execute()
        except Exception as e:
            logger.error(f"❌ 리액션 삭제 오류: {e}")
            raise

    async def delete_by_diary(self, diary_id: int) -> None:
        try:
            self.supabase.table(REACTION_TABLE).delete().eq("diary_id", diary_id).execute()
        except Exception as e:
            logger.error(f"❌ 일기 리액션 일괄 삭제 오류: {e}")
            raise
