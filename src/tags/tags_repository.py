from typing import Any, Dict, Iterable, List, Optional
import logging

from supabase import Client

logger = logging.getLogger(__name__)

TAG_TABLE = "tag"
DIARY_TAG_TABLE = "diary_tag"


class TagsRepository:
    """tag / diary_tag 테이블 접근"""

    def __init__(self, client: Client):
        self.supabase = client

    async def find_by_names(self, names: Iterable[str]) -> List[Dict[str, Any]]:
        names = list(names)
        if not names:
            return []
        try:
            response = self.supabase.table(TAG_TABLE).select("*").in_("name", names).execute()
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 태그 조회 오류: {e}")
            raise

    async def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        tags = await self.find_by_names([name])
        return tags[0] if tags else None

    async def create_many(self, names: Iterable[str]) -> List[Dict[str, Any]]:
        rows = [{"name": name} for name in names]
        if not rows:
            return []
        try:
            response = self.supabase.table(TAG_TABLE).insert(rows).execute()
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 태그 생성 오류: {e}")
            raise

    async def attach(self, diary_id: int, tag_ids: Iterable[int]) -> None:
        rows = [{"diary_id": diary_id, "tag_id": tag_id} for tag_id in tag_ids]
        if not rows:
            return
        try:
            self.supabase.table(DIARY_TAG_TABLE).insert(rows).execute()
        except Exception as e:
            logger.error(f"❌ 일기 태그 연결 오류: {e}")
            raise

    async def detach(self, diary_id: int, tag_ids: Iterable[int]) -> None:
        """일기에서 지정한 태그 연결만 해제"""
        ids = list(tag_ids)
        if not ids:
            return
        try:
            self.supabase.table(DIARY_TAG_TABLE).delete().eq("diary_id", diary_id).in_("tag_id", ids).execute()
        except Exception as e:
            logger.error(f"❌ 일기 태그 해제 오류: {e}")
            raise

    async def detach_all(self, diary_id: int) -> None:
        try:
            self.supabase.table(DIARY_TAG_TABLE).delete().eq("diary_id", diary_id).execute()
        except Exception as e:
            logger.error(f"❌ 일기 태그 해제 오류: {e}")
            raise

    async def find_tag_ids(self, diary_id: int) -> List[int]:
        return [link["tag_id"] for link in await self._links([diary_id])]

    async def find_names_by_diary_ids(self, diary_ids: Iterable[int]) -> Dict[int, List[str]]:
        """일기 ID -> 태그 이름 목록"""
        links = await self._links(diary_ids)
        if not links:
            return {}
        try:
            tag_ids = list({link["tag_id"] for link in links})
            response = self.supabase.table(TAG_TABLE).select("id, name").in_("id", tag_ids).execute()
        except Exception as e:
            logger.error(f"❌ 태그 이름 조회 오류: {e}")
            raise

        names = {tag["id"]: tag["name"] for tag in response.data or []}
        result: Dict[int, List[str]] = {}
        for link in links:
            if link["tag_id"] in names:
                result.setdefault(link["diary_id"], []).append(names[link["tag_id"]])
        return result

    async def find_diary_ids_by_tag(self, tag_id: int) -> List[int]:
        try:
            response = self.supabase.table(DIARY_TAG_TABLE).select("diary_id").eq("tag_id", tag_id).execute()
            return [link["diary_id"] for link in response.data or []]
        except Exception as e:
            logger.error(f"❌ 태그별 일기 조회 오류: {e}")
            raise

    async def _links(self, diary_ids: Iterable[int]) -> List[Dict[str, Any]]:
        ids = list(set(diary_ids))
        if not ids:
            return []
        try:
            response = (
                self.supabase
                .table(DIARY_TAG_TABLE)
                .select("diary_id, tag_id")
                .in_("diary_id", ids)
                .order("tag_id")
                .execute()
            )
            return response.data or []
        except Exception as e:
            logger.error(f"❌ 일기 태그 조회 오류: {e}")
            raise
