from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from config.settings import settings
from src.common.exceptions import AuthenticationError

ACCESS = "access"
REFRESH = "refresh"


def _encode(user_id: int, token_type: str, expires_in: timedelta) -> str:
    payload = {
        "id": user_id,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def issue_access_token(user_id: int) -> str:
    """JWT 액세스 토큰 생성"""
    return _encode(user_id, ACCESS, timedelta(hours=settings.JWT_EXPIRE_HOURS))


def issue_refresh_token(user_id: int) -> str:
    """JWT 리프레시 토큰 생성"""
    return _encode(user_id, REFRESH, timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS))


def verify_token(token: Optional[str], verify_exp: bool = True, token_type: str = ACCESS) -> int:
    """
    토큰을 검증하고 사용자 ID를 반환
    - verify_exp=False 이면 만료는 무시하고 서명만 확인 (토큰 재발급용)
    """
    if not token:
        raise AuthenticationError("인증 토큰이 필요합니다.")
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": verify_exp},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("만료된 토큰입니다.")
    except jwt.InvalidTokenError:
        raise AuthenticationError("유효하지 않은 토큰입니다.")

    user_id = payload.get("id")
    if user_id is None or payload.get("type") != token_type:
        raise AuthenticationError("유효하지 않은 토큰입니다.")
    return int(user_id)
