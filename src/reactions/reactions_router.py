from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from src.auth.auth_service import get_current_user
from src.common.validation import validate_model
from .reactions_models import MessageResponse, ReactionListResponse, ReactionRequest
from .reactions_service import ReactionsService, get_reactions_service

router = APIRouter(prefix="/reactions", tags=["Reaction API"])


@router.post("/{diary_id}", status_code=201, response_model=MessageResponse, summary="리액션 저장")
async def save_reaction(
    diary_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: ReactionsService = Depends(get_reactions_service),
):
    reaction_request = validate_model(ReactionRequest, payload)
    await service.save_reaction(current_user["id"], diary_id, reaction_request.reaction)
    return {"message": "리액션이 저장되었습니다."}


@router.get("/{diary_id}", response_model=ReactionListResponse, summary="리액션 목록 조회")
async def read_reactions(
    diary_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: ReactionsService = Depends(get_reactions_service),
):
    reactions = await service.get_reactions(current_user["id"], diary_id)
    return {"reactionList": reactions}


@router.patch("/{diary_id}", response_model=MessageResponse, summary="리액션 수정")
async def update_reaction(
    diary_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: ReactionsService = Depends(get_reactions_service),
):
    reaction_request = validate_model(ReactionRequest, payload)
    await service.update_reaction(current_user["id"], diary_id, reaction_request.reaction)
    return {"message": "리액션이 수정되었습니다."}


@router.delete("/{diary_id}", response_model=MessageResponse, summary="리액션 삭제")
async def delete_reaction(
    diary_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: ReactionsService = Depends(get_reactions_service),
):
    await service.delete_reaction(current_user["id"], diary_id)
    return {"message": "리액션이 삭제되었습니다."}
