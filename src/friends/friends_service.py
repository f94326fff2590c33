from typing import Any, Dict, List
import logging

from fastapi import Depends
from supabase import Client

from config.database import get_supabase_client
from src.common.exceptions import AuthorizationError, ConflictError, NotFoundError
from src.users.users_models import to_user_response
from src.users.users_repository import UsersRepository
from .friends_models import FriendStatus
from .friends_repository import FriendsRepository

logger = logging.getLogger(__name__)

CANNOT_REQUEST_SELF = "나에게 친구신청 보낼 수 없습니다."
CANNOT_MANAGE_SELF = "나와는 친구신청 관리를 할 수 없습니다."
ALREADY_REQUESTED = "이미 친구신청을 하셨습니다."
ALREADY_RECEIVED = "상대의 친구신청을 확인해주세요."
ALREADY_FRIEND = "이미 친구인 사용자입니다."
CHECK_RECEIVED_REQUEST = "상대의 친구신청을 확인하세요."
NO_REQUEST = "해당 사용자 사이의 친구신청 기록이 없습니다."
NO_RELATION = "존재하지 않는 관계입니다."
USER_NOT_FOUND = "존재하지 않는 사용자입니다."


class FriendsService:
    """
    친구 관계 상태 전이
    NONE -> PENDING(sender -> receiver) -> COMPLETE
    PENDING -> NONE (신청 취소 / 거절), COMPLETE -> NONE (친구 삭제)
    """

    def __init__(self, repository: FriendsRepository, users: UsersRepository):
        self.repository = repository
        self.users = users

    async def send_request(self, user_id: int, receiver_id: int) -> Dict[str, Any]:
        """친구 신청"""
        if user_id == receiver_id:
            raise ConflictError(CANNOT_REQUEST_SELF)
        if not await self.users.find_by_id(receiver_id):
            raise NotFoundError(USER_NOT_FOUND)

        relation = await self.repository.find_relation_between(user_id, receiver_id)
        if relation:
            if relation["status"] == FriendStatus.COMPLETE.value:
                raise ConflictError(ALREADY_FRIEND)
            if relation["sender_id"] == user_id:
                raise ConflictError(ALREADY_REQUESTED)
            raise ConflictError(ALREADY_RECEIVED)

        logger.info(f"✉️ 친구 신청: from={user_id}, to={receiver_id}")
        return await self.repository.create(user_id, receiver_id)

    async def cancel_request(self, user_id: int, receiver_id: int) -> None:
        """내가 보낸 친구 신청 취소"""
        if user_id == receiver_id:
            raise ConflictError(CANNOT_MANAGE_SELF)

        relation = await self.repository.find_relation(user_id, receiver_id, FriendStatus.PENDING)
        if not relation:
            if await self.repository.find_relation(receiver_id, user_id, FriendStatus.PENDING):
                raise ConflictError(CHECK_RECEIVED_REQUEST)
            raise ConflictError(NO_REQUEST)

        await self.repository.delete(relation["id"])

    async def allow_request(self, user_id: int, sender_id: int) -> None:
        """받은 친구 신청 수락"""
        relation = await self._received_request(user_id, sender_id)
        await self.repository.update_status(relation["id"], FriendStatus.COMPLETE)
        logger.info(f"🤝 친구 신청 수락: {sender_id} -> {user_id}")

    async def reject_request(self, user_id: int, sender_id: int) -> None:
        """받은 친구 신청 거절"""
        relation = await self._received_request(user_id, sender_id)
        await self.repository.delete(relation["id"])

    async def delete_friend(self, user_id: int, friend_id: int) -> None:
        """친구 삭제 (방향 무관)"""
        if user_id == friend_id:
            raise ConflictError(CANNOT_MANAGE_SELF)

        relation = await self.repository.find_relation_between(user_id, friend_id, FriendStatus.COMPLETE)
        if not relation:
            raise ConflictError(NO_RELATION)
        await self.repository.delete(relation["id"])

    async def get_friends(self, user_id: int) -> List[Dict[str, Any]]:
        """친구 목록 (누가 신청했는지와 무관)"""
        relations = await self.repository.find_relations_of(user_id, FriendStatus.COMPLETE)
        return await self._counterparts(user_id, relations)

    async def get_friend_ids(self, user_id: int) -> List[int]:
        relations = await self.repository.find_relations_of(user_id, FriendStatus.COMPLETE)
        return [_counterpart_id(user_id, relation) for relation in relations]

    async def get_strangers(self, requester_id: int, user_id: int) -> List[Dict[str, Any]]:
        """진행 중인 친구 신청 목록 (보낸 신청 + 받은 신청). 본인 것만 볼 수 있다."""
        if requester_id != user_id:
            raise AuthorizationError()

        relations = await self.repository.find_relations_of(user_id, FriendStatus.PENDING)
        users = await self.users.find_by_ids(_counterpart_id(user_id, relation) for relation in relations)

        strangers = []
        for relation in relations:
            other = users.get(_counterpart_id(user_id, relation))
            if other:
                stranger = to_user_response(other)
                stranger["isSender"] = relation["sender_id"] == user_id
                strangers.append(stranger)
        return strangers

    async def search_friends(self, user_id: int, nickname: str) -> List[Dict[str, Any]]:
        """닉네임에 검색어가 포함된 친구"""
        keyword = nickname.strip().lower()
        friends = await self.get_friends(user_id)
        return [friend for friend in friends if keyword in (friend["nickname"] or "").lower()]

    async def get_relation_status(self, user_id: int, other_ids: List[int]) -> Dict[int, str]:
        """다른 사용자들과의 관계 상태 ("none" | "pending" | "complete")"""
        statuses = {other_id: "none" for other_id in other_ids}
        for status in (FriendStatus.PENDING, FriendStatus.COMPLETE):
            for relation in await self.repository.find_relations_of(user_id, status):
                other_id = _counterpart_id(user_id, relation)
                if other_id in statuses:
                    statuses[other_id] = status.value
        return statuses

    async def _received_request(self, user_id: int, sender_id: int) -> Dict[str, Any]:
        if user_id == sender_id:
            raise ConflictError(CANNOT_MANAGE_SELF)

        relation = await self.repository.find_relation(sender_id, user_id, FriendStatus.PENDING)
        if not relation:
            raise ConflictError(NO_REQUEST)
        return relation

    async def _counterparts(self, user_id: int, relations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        other_ids = [_counterpart_id(user_id, relation) for relation in relations]
        users = await self.users.find_by_ids(other_ids)
        return [to_user_response(users[other_id]) for other_id in other_ids if other_id in users]


def _counterpart_id(user_id: int, relation: Dict[str, Any]) -> int:
    return relation["receiver_id"] if relation["sender_id"] == user_id else relation["sender_id"]


def get_friends_service(client: Client = Depends(get_supabase_client)) -> FriendsService:
    return FriendsService(FriendsRepository(client), UsersRepository(client))
