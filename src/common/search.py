def contains_pattern(keyword: str) -> str:
    """검색어를 포함하는 LIKE 패턴. 검색어 안의 %, _ 는 문자 그대로 찾는다."""
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
