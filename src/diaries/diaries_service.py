from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends
from supabase import Client

from config.database import get_supabase_client
from config.settings import settings
from src.common.exceptions import NotFoundError
from src.friends.friends_repository import FriendsRepository
from src.friends.friends_service import FriendsService
from src.reactions.reactions_repository import ReactionsRepository
from src.tags.tags_repository import TagsRepository
from src.tags.tags_service import TagsService
from src.users.users_repository import UsersRepository
from .diaries_models import (
    AccessMode,
    CreateDiaryRequest,
    DateRangeQuery,
    ReadUserDiariesQuery,
    UpdateDiaryRequest,
)
from .diaries_policy import check_diary_access, merge_diary_update, visible_statuses
from .diaries_repository import DiariesRepository
from .diaries_time import resolve_bucket_range, resolve_stats_range, service_tz

logger = logging.getLogger(__name__)


class DiariesService:

    def __init__(
        self,
        diaries: DiariesRepository,
        tags: TagsService,
        reactions: ReactionsRepository,
        users: UsersRepository,
        friends: FriendsService,
        page_size: int = settings.DIARY_PAGE_SIZE,
    ):
        self.diaries = diaries
        self.tags = tags
        self.reactions = reactions
        self.users = users
        self.friends = friends
        self.page_size = page_size

    # ------------------------------------
    # 작성 / 조회 / 수정 / 삭제
    # ------------------------------------
    async def save_diary(self, user_id: int, request: CreateDiaryRequest) -> Dict[str, Any]:
        """일기와 태그 연결을 함께 저장. 태그 연결에 실패하면 일기도 지운다."""
        tags = await self.tags.map_tag_names(request.tagNames)
        diary = await self.diaries.create({
            "author_id": user_id,
            "title": request.title,
            "content": request.content,
            "thumbnail": request.thumbnail,
            "emotion": request.emotion,
            "mood": request.mood.value if request.mood else None,
            "status": request.status.value,
            "summary": request.summary,
        })
        try:
            await self.tags.repository.attach(diary["id"], [tag["id"] for tag in tags])
        except Exception:
            logger.warning(f"⚠️ 태그 연결 실패, 일기 저장 취소: {diary['id']}")
            await self.diaries.remove(diary["id"])
            raise

        logger.info(f"📝 일기 저장: user={user_id}, diary={diary['id']}")
        return diary

    async def find_diary(self, user_id: int, diary_id: int, mode: AccessMode) -> Dict[str, Any]:
        diary = await self.diaries.find_by_id(diary_id)
        return check_diary_access(diary, user_id, mode)

    async def get_diary_detail(self, user_id: int, diary_id: int) -> Dict[str, Any]:
        diary = await self.find_diary(user_id, diary_id, AccessMode.READ)
        author = await self.users.find_by_id(diary["author_id"])
        tag_names = await self.tags.repository.find_names_by_diary_ids([diary_id])
        reaction_counts = await self.reactions.count_by_diary_ids([diary_id])

        return {
            "diaryId": diary["id"],
            "userId": diary["author_id"],
            "authorName": author.get("nickname") if author else None,
            "profileImage": author.get("profile_image") if author else None,
            "title": diary["title"],
            "content": diary["content"],
            "thumbnail": diary.get("thumbnail"),
            "emotion": diary["emotion"],
            "mood": diary.get("mood"),
            "status": diary["status"],
            "summary": diary.get("summary"),
            "tags": tag_names.get(diary_id, []),
            "reactionCount": reaction_counts.get(diary_id, 0),
            "createdAt": diary.get("created_at"),
        }

    async def update_diary(self, user_id: int, diary_id: int, request: UpdateDiaryRequest) -> None:
        """
        보낸 필드만 수정하고 tagNames를 보낸 경우에만 태그를 교체한다.
        중간에 실패하면 원래 값과 태그로 되돌린다.
        """
        existing = await self.find_diary(user_id, diary_id, AccessMode.WRITE)
        changes = merge_diary_update(request)
        previous = {column: existing.get(column) for column in changes}

        replace_tags = "tagNames" in request.model_fields_set and request.tagNames is not None
        previous_tag_ids = await self.tags.repository.find_tag_ids(diary_id) if replace_tags else []

        await self.diaries.update(diary_id, changes)
        if not replace_tags:
            return

        try:
            tags = await self.tags.map_tag_names(request.tagNames)
        except Exception:
            await self.diaries.update(diary_id, previous)
            raise

        # 새 연결을 먼저 추가하고 빠진 연결만 지운다
        new_tag_ids = [tag["id"] for tag in tags]
        added = [tag_id for tag_id in new_tag_ids if tag_id not in previous_tag_ids]
        removed = [tag_id for tag_id in previous_tag_ids if tag_id not in new_tag_ids]
        attached = False
        try:
            await self.tags.repository.attach(diary_id, added)
            attached = True
            await self.tags.repository.detach(diary_id, removed)
        except Exception:
            logger.warning(f"⚠️ 태그 교체 실패, 일기 수정 취소: {diary_id}")
            await self.diaries.update(diary_id, previous)
            if attached:
                await self.tags.repository.detach(diary_id, added)
            raise

    async def delete_diary(self, user_id: int, diary_id: int) -> None:
        """soft delete 후 태그 연결과 리액션을 정리"""
        await self.find_diary(user_id, diary_id, AccessMode.WRITE)
        tag_ids = await self.tags.repository.find_tag_ids(diary_id)

        await self.diaries.soft_delete(diary_id)
        detached = False
        try:
            await self.tags.repository.detach_all(diary_id)
            detached = True
            await self.reactions.delete_by_diary(diary_id)
        except Exception:
            logger.warning(f"⚠️ 일기 삭제 정리 실패, 삭제 취소: {diary_id}")
            await self.diaries.restore(diary_id)
            if detached:
                await self.tags.repository.attach(diary_id, tag_ids)
            raise

    # ------------------------------------
    # 목록 조회
    # ------------------------------------
    async def select_diaries(self, requester_id: int, target_user_id: int,
                             query: ReadUserDiariesQuery) -> Dict[str, Any]:
        """
        사용자 일기 목록
        - Day: lastIndex 기준 커서 페이지
        - Week/Month: startDate ~ endDate 기간 전체
        """
        date_range = resolve_bucket_range(query.type, query.startDate, query.endDate)
        target = await self._get_user(target_user_id)
        statuses = visible_statuses(target_user_id, requester_id)

        if date_range is None:
            rows = await self.diaries.find_by_author_with_paging(
                target_user_id, statuses, query.lastIndex, self.page_size
            )
        else:
            rows = await self.diaries.find_by_author_in_range(target_user_id, statuses, date_range)

        return {
            "nickname": target.get("nickname"),
            "diaryList": await self._to_list_items(rows),
        }

    async def find_friend_feed(self, user_id: int, last_index: Optional[int]) -> Dict[str, Any]:
        """친구들의 공개 일기 피드"""
        friend_ids = await self.friends.get_friend_ids(user_id)
        rows = await self.diaries.find_public_by_authors(friend_ids, last_index, self.page_size)
        return {"diaryList": await self._to_list_items(rows, with_author=True)}

    async def search_by_keyword(self, user_id: int, keyword: str, last_index: Optional[int]) -> Dict[str, Any]:
        """내 일기 중 제목에 검색어가 포함된 일기"""
        rows = await self.diaries.search_by_title(user_id, keyword.strip(), last_index, self.page_size)
        return {"diaryList": await self._to_list_items(rows)}

    async def find_by_tag(self, user_id: int, tag_name: str, last_index: Optional[int]) -> Dict[str, Any]:
        """내 일기 중 특정 태그가 달린 일기"""
        tag = await self.tags.repository.find_by_name(tag_name.strip())
        if not tag:
            return {"diaryList": []}

        diary_ids = await self.tags.repository.find_diary_ids_by_tag(tag["id"])
        rows = await self.diaries.find_by_ids_with_paging(user_id, diary_ids, last_index, self.page_size)
        return {"diaryList": await self._to_list_items(rows)}

    # ------------------------------------
    # 통계
    # ------------------------------------
    async def get_emotion_stats(self, requester_id: int, target_user_id: int,
                                query: DateRangeQuery) -> Dict[str, Any]:
        """기간 내 감정별 일기 수 (기간이 없으면 최근 한 달)"""
        date_range = resolve_stats_range(query.startDate, query.endDate)
        rows = await self.diaries.find_by_author_in_range(
            target_user_id,
            visible_statuses(target_user_id, requester_id),
            date_range,
            columns="id, emotion, created_at",
        )
        counts = Counter(row["emotion"] for row in rows if row.get("emotion"))
        return {
            "emotions": [
                {"emotion": emotion, "count": count}
                for emotion, count in counts.most_common()
            ]
        }

    async def get_year_mood(self, requester_id: int, target_user_id: int,
                            query: DateRangeQuery) -> Dict[str, Any]:
        """기간 내 일기의 날짜별 기분 (오래된 순, 기간이 없으면 최근 한 달)"""
        date_range = resolve_stats_range(query.startDate, query.endDate)
        rows = await self.diaries.find_by_author_in_range(
            target_user_id,
            visible_statuses(target_user_id, requester_id),
            date_range,
            columns="id, mood, created_at",
            descending=False,
        )
        return {
            "yearMood": [
                {"date": _local_date(row["created_at"]), "mood": row["mood"]}
                for row in rows if row.get("mood")
            ]
        }

    # ------------------------------------
    # 내부 유틸
    # ------------------------------------
    async def _get_user(self, user_id: int) -> Dict[str, Any]:
        user = await self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("존재하지 않는 사용자입니다.")
        return user

    async def _to_list_items(self, rows: List[Dict[str, Any]], with_author: bool = False) -> List[Dict[str, Any]]:
        diary_ids = [row["id"] for row in rows]
        tag_names = await self.tags.repository.find_names_by_diary_ids(diary_ids)
        reaction_counts = await self.reactions.count_by_diary_ids(diary_ids)
        authors = await self.users.find_by_ids(row["author_id"] for row in rows) if with_author else {}

        items = []
        for row in rows:
            item = {
                "diaryId": row["id"],
                "authorId": row["author_id"],
                "title": row["title"],
                "content": row["content"],
                "thumbnail": row.get("thumbnail"),
                "emotion": row["emotion"],
                "mood": row.get("mood"),
                "status": row["status"],
                "tags": tag_names.get(row["id"], []),
                "reactionCount": reaction_counts.get(row["id"], 0),
                "createdAt": row.get("created_at"),
            }
            if with_author:
                author = authors.get(row["author_id"], {})
                item["nickname"] = author.get("nickname")
                item["profileImage"] = author.get("profile_image")
            items.append(item)
        return items


def _local_date(created_at: Any) -> str:
    moment = created_at if isinstance(created_at, datetime) else datetime.fromisoformat(str(created_at))
    if moment.tzinfo is not None:
        moment = moment.astimezone(service_tz())
    return moment.date().isoformat()


def get_diaries_service(client: Client = Depends(get_supabase_client)) -> DiariesService:
    users = UsersRepository(client)
    return DiariesService(
        diaries=DiariesRepository(client),
        tags=TagsService(TagsRepository(client)),
        reactions=ReactionsRepository(client),
        users=users,
        friends=FriendsService(FriendsRepository(client), users),
    )
