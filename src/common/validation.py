from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

EMPTY_VALUES = (None, "")


def _enum_of(annotation: Any) -> Optional[Type[Enum]]:
    """Optional[Enum] 같은 어노테이션에서 Enum 클래스를 꺼낸다."""
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return annotation
    if get_origin(annotation) is Union:
        for arg in get_args(annotation):
            found = _enum_of(arg)
            if found:
                return found
    return None


def _enum_message(field: str, enum_cls: Type[Enum]) -> str:
    values = ", ".join(str(member.value) for member in enum_cls)
    return f"{field} must be one of the following values: {values}"


def format_errors(model_cls: Type[BaseModel], exc: PydanticValidationError) -> List[str]:
    """pydantic 오류를 'title should not be empty' 형식의 메시지 목록으로 변환"""
    messages: List[str] = []

    def add(message: str):
        if message not in messages:
            messages.append(message)

    for error in exc.errors():
        loc = error.get("loc") or ("value",)
        field = str(loc[0])
        error_type = error.get("type", "")
        field_info = model_cls.model_fields.get(field)
        enum_cls = _enum_of(field_info.annotation) if field_info else None

        if error_type == "missing":
            if enum_cls:
                add(_enum_message(field, enum_cls))
            add(f"{field} should not be empty")
        elif error_type == "string_too_short":
            add(f"{field} should not be empty")
        elif error_type == "enum" and enum_cls:
            add(_enum_message(field, enum_cls))
            if error.get("input") in EMPTY_VALUES:
                add(f"{field} should not be empty")
        elif error_type == "string_type":
            if len(loc) > 1:
                add(f"each value in {field} must be a string")
            elif error.get("input") is None:
                add(f"{field} should not be empty")
            else:
                add(f"{field} must be a string")
        elif error_type == "list_type":
            add(f"{field} must be an array")
        elif error_type.startswith("date"):
            add(f"{field} must be a valid ISO 8601 date string (YYYY-MM-DD)")
        elif error_type.startswith("int"):
            add(f"{field} must be an integer number")
        else:
            add(f"{field} {error.get('msg', 'is invalid')}")

    return messages


def validate_model(model_cls: Type[ModelT], data: Optional[Mapping[str, Any]]) -> ModelT:
    """요청 데이터를 검증하고 실패하면 ValidationError(메시지 목록)를 던진다."""
    payload: Dict[str, Any] = dict(data or {})
    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(format_errors(model_cls, exc))
