from typing import Any, Dict, List

from fastapi import Depends
from supabase import Client

from config.database import get_supabase_client
from src.common.exceptions import ConflictError, NotFoundError
from src.diaries.diaries_models import AccessMode
from src.diaries.diaries_policy import check_diary_access
from src.diaries.diaries_repository import DiariesRepository
from src.users.users_repository import UsersRepository
from .reactions_repository import ReactionsRepository

ALREADY_REACTED = "이미 리액션을 남긴 일기입니다."
NO_REACTION = "리액션 기록이 없습니다."


class ReactionsService:
    """일기 리액션. 읽을 수 있는 일기에만 남길 수 있다."""

    def __init__(self, repository: ReactionsRepository, diaries: DiariesRepository, users: UsersRepository):
        self.repository = repository
        self.diaries = diaries
        self.users = users

    async def _readable_diary(self, user_id: int, diary_id: int) -> Dict[str, Any]:
        return check_diary_access(await self.diaries.find_by_id(diary_id), user_id, AccessMode.READ)

    async def save_reaction(self, user_id: int, diary_id: int, reaction: str) -> Dict[str, Any]:
        await self._readable_diary(user_id, diary_id)
        if await self.repository.find(diary_id, user_id):
            raise ConflictError(ALREADY_REACTED)
        return await self.repository.create(diary_id, user_id, reaction)

    async def get_reactions(self, user_id: int, diary_id: int) -> List[Dict[str, Any]]:
        await self._readable_diary(user_id, diary_id)
        reactions = await self.repository.find_by_diary(diary_id)
        users = await self.users.find_by_ids(reaction["user_id"] for reaction in reactions)

        return [
            {
                "userId": reaction["user_id"],
                "nickname": users.get(reaction["user_id"], {}).get("nickname"),
                "profileImage": users.get(reaction["user_id"], {}).get("profile_image"),
                "reaction": reaction["reaction"],
            }
            for reaction in reactions
        ]

    async def update_reaction(self, user_id: int, diary_id: int, reaction: str) -> None:
        await self._readable_diary(user_id, diary_id)
        existing = await self.repository.find(diary_id, user_id)
        if not existing:
            raise NotFoundError(NO_REACTION)
        await self.repository.update(existing["id"], reaction)

    async def delete_reaction(self, user_id: int, diary_id: int) -> None:
        await self._readable_diary(user_id, diary_id)
        existing = await self.repository.find(diary_id, user_id)
        if not existing:
            raise NotFoundError(NO_REACTION)
        await self.repository.delete(existing["id"])


def get_reactions_service(client: Client = Depends(get_supabase_client)) -> ReactionsService:
    return ReactionsService(ReactionsRepository(client), DiariesRepository(client), UsersRepository(client))
