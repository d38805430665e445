"""个人资料路由 -- 全部需要认证

GET /profile: 当前用户资料
PUT /profile: 更新 name/bio/avatar
PUT /profile/password: 修改密码
"""

from fastapi import APIRouter, Depends
from taskpad.core.models import PasswordChange, ProfileUpdate

from ..deps import get_profile_service
from ..middleware.auth_gate import require_caller
from ..services.profile_service import ProfileService

router = APIRouter(dependencies=[Depends(require_caller)])


@router.get("/profile")
async def get_profile(
    caller_id: str = Depends(require_caller),
    service: ProfileService = Depends(get_profile_service),
):
    user = await service.get_profile(caller_id)
    return {"user": user.to_public()}


@router.put("/profile")
async def update_profile(
    body: ProfileUpdate,
    caller_id: str = Depends(require_caller),
    service: ProfileService = Depends(get_profile_service),
):
    """更新可展示字段，email/userId 会被忽略"""
    user = await service.update_profile(caller_id, body)
    return {"user": user.to_public()}


@router.put("/profile/password")
async def update_password(
    body: PasswordChange,
    caller_id: str = Depends(require_caller),
    service: ProfileService = Depends(get_profile_service),
):
    """修改密码

    - 旧密码错误返回 401
    - 新密码少于 6 位返回 400
    """
    await service.update_password(caller_id, body)
    return {"updated": True}
