from typing import Optional

from pydantic import BaseModel, Field

from src.users.users_models import SocialType


class OAuthLoginRequest(BaseModel):
    socialType: SocialType = SocialType.NAVER
    authorizationCode: str = Field(min_length=1)
    state: str = Field(min_length=1)


class OAuthLoginResponse(BaseModel):
    id: int


class NaverProfile(BaseModel):
    """Naver 회원 프로필 (/v1/nid/me 의 response 필드)"""
    id: str
    nickname: str = ""
    email: Optional[str] = None
    profile_image: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
