from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config.settings import settings
from src.common.exceptions import DiaryAppError, ValidationError
from src.auth.auth_router import router as auth_router
from src.users.users_router import router as users_router
from src.diaries.diaries_router import router as diaries_router
from src.reactions.reactions_router import router as reactions_router
from src.friends.friends_router import router as friends_router
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# httpx (Supabase, Naver 통신) 로그 숨기기
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# uvicorn 접속 로그 숨기기
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

# FastAPI 애플리케이션 생성
app = FastAPI(
    title="Social Diary Backend API",
    version="1.0.0",
    description="일기 공유 서비스 백엔드 API",
    docs_url="/api-docs",
    redoc_url="/redoc"
)

# CORS 미들웨어 설정 (쿠키 인증을 위해 credentials 허용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# 라우터 등록
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(diaries_router)
app.include_router(reactions_router)
app.include_router(friends_router)


@app.exception_handler(DiaryAppError)
async def diary_app_error_handler(request: Request, exc: DiaryAppError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """경로 파라미터 등 FastAPI 단계의 검증 오류도 400 메시지 목록으로 응답"""
    messages = []
    for error in exc.errors():
        field = str(error.get("loc", ("value",))[-1])
        if error.get("type", "").startswith("int"):
            messages.append(f"{field} must be an integer number")
        else:
            messages.append(f"{field} {error.get('msg', 'is invalid')}")
    return JSONResponse(status_code=400, content=ValidationError(messages).to_body())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(exc)
    return JSONResponse(
        status_code=500,
        content={"statusCode": 500, "message": "Internal server error", "error": "Internal Server Error"},
    )


@app.get("/")
async def root():
    return {"message": "Social Diary Backend API v1.0.0"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True
    )
