from typing import Any, Dict, Iterable, List, Optional

DEFAULT_PAGE_SIZE = 5


def page(items: Iterable[Dict[str, Any]], last_index: Optional[int] = None,
         page_size: int = DEFAULT_PAGE_SIZE, key: str = "id") -> List[Dict[str, Any]]:
    """
    id 내림차순으로 정렬된 목록에서 다음 페이지를 자른다
    - last_index가 없으면 가장 최신(가장 큰 id)부터
    - 있으면 id < last_index 인 항목만
    - 최대 page_size 개, 해당 항목이 없으면 빈 목록
    """
    result: List[Dict[str, Any]] = []
    if page_size <= 0:
        return result
    for item in items:
        if last_index is not None and item[key] >= last_index:
            continue
        result.append(item)
        if len(result) == page_size:
            break
    return result


def apply_cursor(query, last_index: Optional[int] = None, page_size: int = DEFAULT_PAGE_SIZE, key: str = "id"):
    """page()와 같은 조건을 PostgREST 쿼리에 적용 (id < last_index, id 내림차순, 최대 page_size 개)"""
    if last_index is not None:
        query = query.lt(key, last_index)
    return query.order(key, desc=True).limit(max(page_size, 0))

