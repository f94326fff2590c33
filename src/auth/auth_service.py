from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from fastapi import Depends, Request
from supabase import Client

from config.database import get_supabase_client
from config.settings import settings
from src.common.exceptions import AuthenticationError
from src.users.users_repository import UsersRepository
from .auth_models import OAuthLoginRequest
from .auth_naver import NaverOAuthClient, get_naver_client
from .auth_token import REFRESH, issue_access_token, issue_refresh_token, verify_token

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user_id: int
    access_token: str


class AuthService:

    def __init__(self, users: UsersRepository, naver: NaverOAuthClient):
        self.users = users
        self.naver = naver

    async def login(self, login_request: OAuthLoginRequest) -> LoginResult:
        """Naver 로그인 검증 후 사용자 조회/생성 및 토큰 발급"""
        profile = await self.naver.authenticate(login_request.authorizationCode, login_request.state)
        social_type = login_request.socialType.value

        user = await self.users.find_by_social_id(profile.id, social_type)
        if not user:
            user = await self.users.create({
                "social_id": profile.id,
                "social_type": social_type,
                "nickname": profile.nickname,
                "email": profile.email,
                "profile_image": profile.profile_image,
            })
        else:
            logger.info(f"👤 기존 사용자 로그인: {user['id']}")
            await self.users.update_profile(
                user["id"],
                nickname=profile.nickname or None,
                email=profile.email,
                profile_image=profile.profile_image,
            )

        refresh_token = issue_refresh_token(user["id"])
        await self.users.update_refresh_token(user["id"], refresh_token)

        return LoginResult(user_id=user["id"], access_token=issue_access_token(user["id"]))

    async def refresh_access_token(self, expired_token: Optional[str]) -> str:
        """
        만료된 액세스 토큰을 새로 발급
        - 서명만 검증하고 payload의 사용자 ID로 저장된 리프레시 토큰을 확인
        """
        user_id = verify_token(expired_token, verify_exp=False)

        refresh_token = await self.users.get_refresh_token(user_id)
        if not refresh_token:
            raise AuthenticationError("리프레시 토큰이 없습니다. 다시 로그인해주세요.")

        try:
            refresh_user_id = verify_token(refresh_token, token_type=REFRESH)
        except AuthenticationError:
            await self.users.update_refresh_token(user_id, None)
            raise AuthenticationError("리프레시 토큰이 만료되었습니다. 다시 로그인해주세요.")

        if refresh_user_id != user_id:
            raise AuthenticationError("유효하지 않은 토큰입니다.")

        return issue_access_token(user_id)

    async def logout(self, token: Optional[str]) -> None:
        """리프레시 토큰 삭제. 토큰이 없거나 잘못되어도 로그아웃은 진행한다."""
        if not token:
            return
        try:
            user_id = verify_token(token, verify_exp=False)
        except AuthenticationError:
            return
        await self.users.update_refresh_token(user_id, None)


def get_users_repository(client: Client = Depends(get_supabase_client)) -> UsersRepository:
    return UsersRepository(client)


def get_auth_service(
    users: UsersRepository = Depends(get_users_repository),
    naver: NaverOAuthClient = Depends(get_naver_client),
) -> AuthService:
    return AuthService(users, naver)


def extract_token(request: Request) -> Optional[str]:
    """쿠키(utk) 또는 Authorization: Bearer 헤더에서 토큰 추출"""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return None


async def get_current_user(
    request: Request,
    users: UsersRepository = Depends(get_users_repository),
) -> Dict[str, Any]:
    """JWT 토큰으로 현재 사용자 정보 조회"""
    user_id = verify_token(extract_token(request))
    user = await users.find_by_id(user_id)
    if not user:
        raise AuthenticationError("사용자를 찾을 수 없습니다.")
    return user
