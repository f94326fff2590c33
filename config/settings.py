from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # 추가 환경변수 무시
    )

    # 서버 설정
    PORT: int = 8000
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = "INFO"

    # JWT 설정
    JWT_SECRET: str = "PLEASE_SET_JWT_SECRET_IN_ENV_FILE"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_HOURS: int = 1
    JWT_REFRESH_EXPIRE_DAYS: int = 14
    AUTH_COOKIE_NAME: str = "utk"

    # Naver OAuth 설정
    NAVER_CLIENT_ID: str = "PLEASE_SET_NAVER_CLIENT_ID_IN_ENV_FILE"
    NAVER_CLIENT_SECRET: str = "PLEASE_SET_NAVER_CLIENT_SECRET_IN_ENV_FILE"

    # Supabase 설정
    SUPABASE_URL: str = "PLEASE_SET_SUPABASE_URL_IN_ENV_FILE"
    SUPABASE_SERVICE_KEY: str = "PLEASE_SET_SUPABASE_SERVICE_KEY_IN_ENV_FILE"

    # CORS 설정
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",  # Vite 개발 서버
        "http://localhost:3000",  # 로컬 테스트용
    ]
    CORS_CREDENTIALS: bool = True

    # 서비스 설정
    SERVICE_URL: str = "http://localhost:5173"
    TIMEZONE: str = "Asia/Seoul"
    DIARY_PAGE_SIZE: int = 5

settings = Settings()
