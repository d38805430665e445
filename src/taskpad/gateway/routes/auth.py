"""账户路由（无需认证）

POST /auth/register: 注册，返回 201 {user, token}；重复邮箱 409
POST /auth/login: 登录，返回 200 {user, token}；凭证错误 401
"""

from fastapi import APIRouter, Depends
from taskpad.core.models import Credentials, Registration

from ..deps import get_auth_service
from ..services.auth_service import AuthService

router = APIRouter()


@router.post("/auth/register", status_code=201)
async def register(
    body: Registration,
    service: AuthService = Depends(get_auth_service),
):
    user, token = await service.register(body)
    return {"user": user.to_public(), "token": token}


@router.post("/auth/login")
async def login(
    body: Credentials,
    service: AuthService = Depends(get_auth_service),
):
    user, token = await service.login(body)
    return {"user": user.to_public(), "token": token}
