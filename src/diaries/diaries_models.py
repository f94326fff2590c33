from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DiaryStatus(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"


class MoodDegree(str, Enum):
    SO_BAD = "sobad"
    BAD = "bad"
    SO_SO = "soso"
    GOOD = "good"
    SO_GOOD = "sogood"


class TimeUnit(str, Enum):
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"


class AccessMode(str, Enum):
    READ = "read"
    WRITE = "write"


# 요청 모델
class CreateDiaryRequest(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    thumbnail: Optional[str] = None
    emotion: str = Field(min_length=1)
    tagNames: List[str] = Field(default_factory=list)
    status: DiaryStatus
    mood: Optional[MoodDegree] = None
    summary: Optional[str] = None


class UpdateDiaryRequest(BaseModel):
    """보낸 필드만 수정한다. thumbnail/summary는 빈 문자열로 비울 수 있다."""
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    thumbnail: Optional[str] = None
    emotion: Optional[str] = Field(None, min_length=1)
    tagNames: Optional[List[str]] = None
    status: Optional[DiaryStatus] = None
    mood: Optional[MoodDegree] = None
    summary: Optional[str] = None


class ReadUserDiariesQuery(BaseModel):
    type: TimeUnit
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    lastIndex: Optional[int] = None


class DateRangeQuery(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class CursorQuery(BaseModel):
    lastIndex: Optional[int] = None


# 응답 모델
class DiaryDetailResponse(BaseModel):
    diaryId: int
    userId: int
    authorName: Optional[str] = None
    profileImage: Optional[str] = None
    title: str
    content: str
    thumbnail: Optional[str] = None
    emotion: str
    mood: Optional[str] = None
    status: str
    summary: Optional[str] = None
    tags: List[str]
    reactionCount: int
    createdAt: Optional[str] = None


class EmotionCount(BaseModel):
    emotion: str
    count: int


class EmotionStatsResponse(BaseModel):
    emotions: List[EmotionCount]


class MessageResponse(BaseModel):
    message: str
