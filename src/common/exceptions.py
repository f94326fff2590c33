from typing import List, Union

Message = Union[str, List[str]]


class DiaryAppError(Exception):
    """애플리케이션 공통 예외. status_code와 사용자에게 보여줄 메시지를 가진다."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: Message):
        super().__init__(message if isinstance(message, str) else ", ".join(message))
        self.message = message

    def to_body(self) -> dict:
        return {
            "statusCode": self.status_code,
            "message": self.message,
            "error": self.error,
        }


class ValidationError(DiaryAppError):
    """요청 값이 없거나 형식이 잘못된 경우"""

    status_code = 400
    error = "Bad Request"

    def __init__(self, messages: Message):
        if isinstance(messages, str):
            messages = [messages]
        super().__init__(messages)


class AuthenticationError(DiaryAppError):
    status_code = 401
    error = "Unauthorized"


class AuthorizationError(DiaryAppError):
    status_code = 403
    error = "Forbidden"

    def __init__(self, message: Message = "권한이 없는 사용자입니다."):
        super().__init__(message)


class NotFoundError(DiaryAppError):
    # 존재하지 않는 엔티티도 400으로 응답한다
    status_code = 400
    error = "Bad Request"


class ConflictError(DiaryAppError):
    status_code = 400
    error = "Bad Request"
