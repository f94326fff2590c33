from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request

from src.auth.auth_service import get_current_user
from src.common.validation import validate_model
from .diaries_models import (
    CreateDiaryRequest,
    CursorQuery,
    DateRangeQuery,
    DiaryDetailResponse,
    EmotionStatsResponse,
    MessageResponse,
    ReadUserDiariesQuery,
    UpdateDiaryRequest,
)
from .diaries_service import DiariesService, get_diaries_service

router = APIRouter(prefix="/diaries", tags=["Diary API"])


@router.post("", status_code=201, summary="일기 저장")
async def create_diary(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    create_request = validate_model(CreateDiaryRequest, payload)
    diary = await service.save_diary(current_user["id"], create_request)
    return {"message": "일기가 저장되었습니다.", "diaryId": diary["id"]}


@router.get("/friends", summary="친구 일기 피드 조회")
async def read_friend_diaries(
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    """친구들의 공개 일기를 lastIndex 기준으로 최신순 조회합니다."""
    query = validate_model(CursorQuery, request.query_params)
    return await service.find_friend_feed(current_user["id"], query.lastIndex)


@router.get("/users/{user_id}", summary="사용자 일기 목록 조회")
async def read_user_diaries(
    user_id: int,
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    """
    type=Day 이면 lastIndex 기준 페이지,
    type=Week/Month 이면 startDate ~ endDate(YYYY-MM-DD) 기간의 일기를 조회합니다.
    """
    query = validate_model(ReadUserDiariesQuery, request.query_params)
    return await service.select_diaries(current_user["id"], user_id, query)


@router.get("/emotions/{user_id}", response_model=EmotionStatsResponse, summary="감정 통계 조회")
async def read_emotion_stats(
    user_id: int,
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    query = validate_model(DateRangeQuery, request.query_params)
    return await service.get_emotion_stats(current_user["id"], user_id, query)


@router.get("/mood/{user_id}", summary="기분 통계 조회")
async def read_year_mood(
    user_id: int,
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    query = validate_model(DateRangeQuery, request.query_params)
    return await service.get_year_mood(current_user["id"], user_id, query)


@router.get("/search/v1/{keyword}", summary="일기 제목 검색")
async def search_diaries(
    keyword: str,
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    query = validate_model(CursorQuery, request.query_params)
    return await service.search_by_keyword(current_user["id"], keyword, query.lastIndex)


@router.get("/tags/{tag_name}", summary="태그별 일기 조회")
async def read_diaries_by_tag(
    tag_name: str,
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    query = validate_model(CursorQuery, request.query_params)
    return await service.find_by_tag(current_user["id"], tag_name, query.lastIndex)


@router.get("/{diary_id}", response_model=DiaryDetailResponse, summary="일기 조회")
async def read_diary(
    diary_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    return await service.get_diary_detail(current_user["id"], diary_id)


@router.patch("/{diary_id}", response_model=MessageResponse, summary="일기 수정")
async def update_diary(
    diary_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    update_request = validate_model(UpdateDiaryRequest, payload)
    await service.update_diary(current_user["id"], diary_id, update_request)
    return {"message": "일기가 수정되었습니다."}


@router.delete("/{diary_id}", response_model=MessageResponse, summary="일기 삭제")
async def delete_diary(
    diary_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: DiariesService = Depends(get_diaries_service),
):
    await service.delete_diary(current_user["id"], diary_id)
    return {"message": "일기가 삭제되었습니다."}
