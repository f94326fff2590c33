from enum import Enum
from typing import Optional
from datetime import datetime

from pydantic import BaseModel


class SocialType(str, Enum):
    NAVER = "naver"


class UserResponse(BaseModel):
    userId: int
    nickname: Optional[str] = None
    email: Optional[str] = None
    profileImage: Optional[str] = None
    createdAt: Optional[datetime] = None


class UserSearchResponse(BaseModel):
    userId: int
    nickname: Optional[str] = None
    email: Optional[str] = None
    profileImage: Optional[str] = None
    relation: str  # "none", "pending", "complete"


def to_user_response(user: dict) -> dict:
    return {
        "userId": user["id"],
        "nickname": user.get("nickname"),
        "email": user.get("email"),
        "profileImage": user.get("profile_image"),
        "createdAt": user.get("created_at"),
    }
