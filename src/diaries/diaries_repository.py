from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging

from supabase import Client

from src.common.pagination import DEFAULT_PAGE_SIZE, apply_cursor
from src.common.search import contains_pattern
from .diaries_models import DiaryStatus
from .diaries_time import DateRange

logger = logging.getLogger(__name__)

DIARY_TABLE = "diary"


class DiariesRepository:
    """diary 테이블 접근. 삭제된(deleted_at 이 있는) 일기는 조회하지 않는다."""

    def __init__(self, client: Client):
        self.supabase = client

    def _alive(self, columns: str = "*"):
        return self.supabase.table(DIARY_TABLE).select(columns).is_("deleted_at", "null")

    async def create(self, diary_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.supabase.table(DIARY_TABLE).insert(diary_data).execute()
            if not response.data:
                raise Exception("일기 저장 실패: response.data is empty")
            return response.data[0]
        except Exception as e:
            logger.error(f"❌ 일기 저장 오류: {e}")
            raise

    async def remove(self, diary_id: int) -> None:
        """저장 실패 시 되돌리기용 실제 삭제"""
        try:
            self.supabase.table(DIARY_TABLE).delete().eq("id", diary_id).execute()
        except Exception as e:
            logger.error(f"❌ 일기 삭제(롤백) 오류: {e}")
            raise

    async def find_by_id(self, diary_id: int) -> Optional[Dict[str, Any]]:
        try:
            response = self._alive().eq("id", diary_id).limit(1).execute()
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"❌ 일기 조회 오류: {e}")
            raise

    async def update(self, diary_id: int, changes: Dict[str, Any]) -> None:
        if not changes:
            return
        try:
            self.supabase.table(DIARY_TABLE).update(changes).eq("id", diary_id).execute()
        except Exception as e:
            logger.error(f"❌ 일기 수정 오류: {e}")
            raise

    async def soft_delete(self, diary_id: int) -> None:
        await self.update(diary_id, {"deleted_at": datetime.now(timezone.utc).isoformat()})

    async def restore(self, diary_id: int) -> None:
        try:
            self.supabase.table(DIARY_TABLE).update({"deleted_at": None}).eq("id", diary_id).execute()
        except Exception as e:
            logger.error(f"❌ 일기 복구 오류: {e}")
            raise

    async def find_by_author_with_paging(
        self,
        author_id: int,
        statuses: List[str],
        last_index: Optional[int] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        """작성자의 일기를 id 내림차순 커서 페이지로 조회"""
        try:
            query = self._alive().eq("author_id", author_id).in_("status", statuses)
            response = apply_cursor(query, last_index, page_size).execute()
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 작성자 일기 페이지 조회 오류: {e}")
            raise

    async def find_by_author_in_range(
        self,
        author_id: int,
        statuses: List[str],
        date_range: DateRange,
        columns: str = "*",
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        """created_at 이 [start, end) 구간에 있는 작성자의 일기"""
        try:
            response = (
                self._alive(columns)
                .eq("author_id", author_id)
                .in_("status", statuses)
                .gte("created_at", date_range.start.isoformat())
                .lt("created_at", date_range.end.isoformat())
                .order("created_at", desc=descending)
                .order("id", desc=descending)
                .execute()
            )
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 기간별 일기 조회 오류: {e}")
            raise

    async def find_public_by_authors(
        self,
        author_ids: Iterable[int],
        last_index: Optional[int] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        """여러 작성자의 공개 일기 (친구 피드)"""
        ids = list(set(author_ids))
        if not ids:
            return []
        try:
            query = self._alive().in_("author_id", ids).eq("status", DiaryStatus.PUBLIC.value)
            response = apply_cursor(query, last_index, page_size).execute()
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 친구 일기 조회 오류: {e}")
            raise

    async def search_by_title(
        self,
        author_id: int,
        keyword: str,
        last_index: Optional[int] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._alive().eq("author_id", author_id).ilike("title", contains_pattern(keyword))
            response = apply_cursor(query, last_index, page_size).execute()
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 일기 제목 검색 오류: {e}")
            raise

    async def find_by_ids_with_paging(
        self,
        author_id: int,
        diary_ids: Iterable[int],
        last_index: Optional[int] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        ids = list(set(diary_ids))
        if not ids:
            return []
        try:
            query = self._alive().eq("author_id", author_id).in_("id", ids)
            response = apply_cursor(query, last_index, page_size).execute()
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 일기 목록 조회 오류: {e}")
            raise
