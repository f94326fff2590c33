from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from config.settings import settings
from src.common.validation import validate_model
from .auth_models import MessageResponse, OAuthLoginRequest, OAuthLoginResponse
from .auth_service import AuthService, extract_token, get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(settings.AUTH_COOKIE_NAME, token, httponly=True)


@router.post("/login", response_model=OAuthLoginResponse, summary="OAuth 로그인 검증 및 토큰 발급")
async def oauth_login(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: AuthService = Depends(get_auth_service),
):
    """Naver 인가 코드로 로그인하고 utk 쿠키에 액세스 토큰을 담아 반환합니다."""
    login_request = validate_model(OAuthLoginRequest, payload)
    result = await service.login(login_request)

    response = JSONResponse(content={"id": result.user_id})
    _set_token_cookie(response, result.access_token)
    return response


@router.get("/refresh_token", summary="access token 갱신")
async def refresh_access_token(request: Request, service: AuthService = Depends(get_auth_service)):
    """만료된 utk 쿠키를 저장된 리프레시 토큰으로 재발급하고 서비스로 리다이렉트합니다."""
    new_token = await service.refresh_access_token(extract_token(request))

    response = RedirectResponse(url=settings.SERVICE_URL, status_code=302)
    _set_token_cookie(response, new_token)
    return response


@router.post("/logout", response_model=MessageResponse, summary="로그아웃")
async def logout(request: Request, service: AuthService = Depends(get_auth_service)):
    await service.logout(extract_token(request))

    response = JSONResponse(content={"message": "정상적으로 로그아웃되었습니다."})
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return response
