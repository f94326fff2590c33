from typing import Any, Dict, Iterable, List

from .tags_repository import TagsRepository


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """공백 제거, 빈 값/중복 제거 (입력 순서 유지)"""
    result: List[str] = []
    for name in names or []:
        name = name.strip()
        if name and name not in result:
            result.append(name)
    return result


class TagsService:

    def __init__(self, repository: TagsRepository):
        self.repository = repository

    async def map_tag_names(self, names: Iterable[str]) -> List[Dict[str, Any]]:
        """태그 이름을 태그로 변환. 없는 태그는 새로 만든다."""
        names = normalize_tag_names(names)
        if not names:
            return []

        existing = {tag["name"]: tag for tag in await self.repository.find_by_names(names)}
        missing = [name for name in names if name not in existing]
        for tag in await self.repository.create_many(missing):
            existing[tag["name"]] = tag

        return [existing[name] for name in names if name in existing]
