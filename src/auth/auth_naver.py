import logging

import httpx

from config.settings import settings
from src.common.exceptions import AuthenticationError
from .auth_models import NaverProfile

logger = logging.getLogger(__name__)

NAVER_TOKEN_URL = "https://nid.naver.com/oauth2.0/token"
NAVER_PROFILE_URL = "https://openapi.naver.com/v1/nid/me"


class NaverOAuthClient:
    """Naver OAuth 인가 코드 -> 액세스 토큰 -> 회원 프로필"""

    def __init__(self, timeout: float = 15):
        self.timeout = timeout

    async def fetch_access_token(self, code: str, state: str) -> str:
        params = {
            "grant_type": "authorization_code",
            "client_id": settings.NAVER_CLIENT_ID,
            "client_secret": settings.NAVER_CLIENT_SECRET,
            "code": code,
            "state": state,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(NAVER_TOKEN_URL, params=params)
        if response.status_code != 200:
            logger.warning(f"❌ Naver 토큰 요청 실패 ({response.status_code}): {response.text}")
            raise AuthenticationError("Naver 인증에 실패했습니다.")

        token_json = response.json()
        access_token = token_json.get("access_token")
        if not access_token:
            logger.warning(f"❌ Naver 토큰 오류 응답: {token_json.get('error_description')}")
            raise AuthenticationError("Naver 인증에 실패했습니다.")
        return access_token

    async def fetch_profile(self, access_token: str) -> NaverProfile:
        headers = {"Authorization": f"Bearer {access_token}"}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(NAVER_PROFILE_URL, headers=headers)
        if response.status_code != 200:
            logger.warning(f"❌ Naver 프로필 요청 실패 ({response.status_code})")
            raise AuthenticationError("Naver 회원 정보를 가져올 수 없습니다.")

        body = response.json()
        if body.get("resultcode") != "00" or not body.get("response"):
            raise AuthenticationError("Naver 회원 정보를 가져올 수 없습니다.")
        return NaverProfile(**body["response"])

    async def authenticate(self, code: str, state: str) -> NaverProfile:
        access_token = await self.fetch_access_token(code, state)
        return await self.fetch_profile(access_token)


def get_naver_client() -> NaverOAuthClient:
    return NaverOAuthClient()
