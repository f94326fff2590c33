from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class FriendStatus(str, Enum):
    PENDING = "pending"
    COMPLETE = "complete"


class FriendResponse(BaseModel):
    userId: int
    nickname: Optional[str] = None
    email: Optional[str] = None
    profileImage: Optional[str] = None


class StrangerResponse(FriendResponse):
    isSender: bool  # 내가 보낸 신청이면 True


class FriendListResponse(BaseModel):
    friends: List[FriendResponse]


class StrangerListResponse(BaseModel):
    strangers: List[StrangerResponse]


class MessageResponse(BaseModel):
    message: str
