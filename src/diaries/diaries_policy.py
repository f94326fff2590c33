from typing import Any, Dict, List, Optional

from src.common.exceptions import AuthorizationError, NotFoundError
from .diaries_models import AccessMode, DiaryStatus, UpdateDiaryRequest

DIARY_NOT_FOUND = "존재하지 않는 일기입니다."

# 작성자만 바꿀 수 있는 필드 (diary 테이블 컬럼 이름)
UPDATABLE_FIELDS = {
    "title": "title",
    "content": "content",
    "thumbnail": "thumbnail",
    "emotion": "emotion",
    "status": "status",
    "mood": "mood",
    "summary": "summary",
}


def check_diary_access(diary: Optional[Dict[str, Any]], requester_id: int, mode: AccessMode) -> Dict[str, Any]:
    """
    일기 접근 권한 확인
    - 일기가 없거나 삭제된 경우 권한 확인 전에 NotFoundError
    - 쓰기는 작성자만
    - 읽기는 공개 일기면 누구나, 비공개 일기면 작성자만
    """
    if not diary or diary.get("deleted_at"):
        raise NotFoundError(DIARY_NOT_FOUND)

    is_author = diary["author_id"] == requester_id
    if mode == AccessMode.WRITE and not is_author:
        raise AuthorizationError()
    if mode == AccessMode.READ and diary["status"] == DiaryStatus.PRIVATE.value and not is_author:
        raise AuthorizationError()
    return diary


def visible_statuses(target_user_id: int, requester_id: int) -> List[str]:
    """목록 조회 시 볼 수 있는 공개 범위. 본인은 전부, 다른 사용자는 공개 일기만."""
    if target_user_id == requester_id:
        return [DiaryStatus.PUBLIC.value, DiaryStatus.PRIVATE.value]
    return [DiaryStatus.PUBLIC.value]


def merge_diary_update(update: UpdateDiaryRequest) -> Dict[str, Any]:
    """
    요청에 실제로 포함된 필드만 골라 컬럼 값으로 변환
    빈 문자열처럼 falsy 한 값도 그대로 반영한다. null은 무시.
    """
    changes: Dict[str, Any] = {}
    for field in update.model_fields_set:
        column = UPDATABLE_FIELDS.get(field)
        value = getattr(update, field)
        if column is None or value is None:
            continue
        changes[column] = value.value if hasattr(value, "value") else value
    return changes
