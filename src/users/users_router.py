from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from src.auth.auth_service import get_current_user, get_users_repository
from src.common.exceptions import NotFoundError
from src.friends.friends_service import FriendsService, get_friends_service
from .users_models import UserResponse, UserSearchResponse, to_user_response
from .users_repository import UsersRepository

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserResponse, summary="내 정보 조회")
async def get_me(current_user: Dict[str, Any] = Depends(get_current_user)):
    return to_user_response(current_user)


@router.get("/search/{nickname}", response_model=List[UserSearchResponse], summary="사용자 검색")
async def search_users(
    nickname: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    users: UsersRepository = Depends(get_users_repository),
    friends: FriendsService = Depends(get_friends_service),
):
    """닉네임에 검색어가 포함된 사용자와 나와의 친구 관계를 함께 반환합니다."""
    found = await users.search_by_nickname(nickname.strip(), current_user["id"])
    relations = await friends.get_relation_status(current_user["id"], [user["id"] for user in found])
    return [
        {**to_user_response(user), "relation": relations[user["id"]]}
        for user in found
    ]


@router.get("/{user_id}", response_model=UserResponse, summary="사용자 정보 조회")
async def get_user(
    user_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    users: UsersRepository = Depends(get_users_repository),
):
    user = await users.find_by_id(user_id)
    if not user:
        raise NotFoundError("존재하지 않는 사용자입니다.")
    return to_user_response(user)
