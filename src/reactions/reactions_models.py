from typing import List, Optional

from pydantic import BaseModel, Field


class ReactionRequest(BaseModel):
    reaction: str = Field(min_length=1)


class ReactionResponse(BaseModel):
    userId: int
    nickname: Optional[str] = None
    profileImage: Optional[str] = None
    reaction: str


class ReactionListResponse(BaseModel):
    reactionList: List[ReactionResponse]


class MessageResponse(BaseModel):
    message: str
