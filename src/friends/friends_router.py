from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.auth.auth_service import get_current_user
from .friends_models import FriendListResponse, FriendResponse, MessageResponse, StrangerListResponse
from .friends_service import FriendsService, get_friends_service

router = APIRouter(prefix="/friends", tags=["Friends"])


@router.get("/request/{user_id}", response_model=StrangerListResponse, summary="친구신청 목록 조회")
async def get_friend_requests(
    user_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    """보낸 친구신청과 받은 친구신청을 함께 조회합니다."""
    strangers = await service.get_strangers(current_user["id"], user_id)
    return {"strangers": strangers}


@router.post("/request/{user_id}", status_code=201, response_model=MessageResponse, summary="친구 신청")
async def send_friend_request(
    user_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    await service.send_request(current_user["id"], user_id)
    return {"message": "친구신청이 완료되었습니다."}


@router.delete("/request/{receiver_id}", response_model=MessageResponse, summary="친구신청 취소")
async def cancel_friend_request(
    receiver_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    await service.cancel_request(current_user["id"], receiver_id)
    return {"message": "친구신청이 취소되었습니다."}


@router.post("/allow/{sender_id}", status_code=201, response_model=MessageResponse, summary="친구신청 수락")
async def allow_friend_request(
    sender_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    await service.allow_request(current_user["id"], sender_id)
    return {"message": "친구신청을 수락했습니다."}


@router.delete("/allow/{sender_id}", response_model=MessageResponse, summary="친구신청 거절")
async def reject_friend_request(
    sender_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    await service.reject_request(current_user["id"], sender_id)
    return {"message": "친구신청을 거절했습니다."}


@router.get("/search/{nickname}", response_model=list[FriendResponse], summary="친구 검색")
async def search_friends(
    nickname: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    """친구 목록에서 닉네임에 검색어가 포함된 친구를 조회합니다."""
    return await service.search_friends(current_user["id"], nickname)


@router.get("/{user_id}", response_model=FriendListResponse, summary="친구 목록 조회")
async def get_friends(
    user_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    friends = await service.get_friends(user_id)
    return {"friends": friends}


@router.delete("/{friend_id}", response_model=MessageResponse, summary="친구 삭제")
async def delete_friend(
    friend_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: FriendsService = Depends(get_friends_service),
):
    await service.delete_friend(current_user["id"], friend_id)
    return JSONResponse(status_code=200, content={"message": "친구가 삭제되었습니다."})
