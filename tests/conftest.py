import pytest
from fastapi.testclient import TestClient

from config.database import get_supabase_client
from config.settings import settings
from main import app
from src.auth.auth_token import issue_access_token
from tests.fake_supabase import FakeSupabase


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase_client] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(nickname: str = "user", **fields):
        row = {
            "social_id": f"naver-{nickname}",
            "social_type": "naver",
            "nickname": nickname,
            "email": f"{nickname}@example.com",
            "profile_image": None,
            "refresh_token": None,
        }
        row.update(fields)
        return db.seed("user", **row)
    return _make_user


@pytest.fixture
def login(client):
    """utk 쿠키에 해당 사용자의 액세스 토큰을 넣는다"""
    def _login(user):
        client.cookies.set(settings.AUTH_COOKIE_NAME, issue_access_token(user["id"]))
        return client
    return _login


@pytest.fixture
def make_diary(db):
    def _make_diary(author, title: str = "제목", **fields):
        row = {
            "author_id": author["id"],
            "title": title,
            "content": "내용",
            "thumbnail": None,
            "emotion": "happy",
            "mood": "good",
            "status": "public",
            "summary": None,
            "deleted_at": None,
        }
        row.update(fields)
        return db.seed("diary", **row)
    return _make_diary


@pytest.fixture
def failing_client(db):
    """저장소 오류를 500 응답으로 돌려받는 클라이언트"""
    app.dependency_overrides[get_supabase_client] = lambda: db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
