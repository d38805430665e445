"""任务路由 -- 全部需要认证

GET    /tasks: 调用者的任务列表，支持 status/priority 筛选
GET    /tasks/stats: 按状态统计
GET    /tasks/{task_id}: 任务详情
POST   /tasks: 创建任务
PUT    /tasks/{task_id}: 部分更新
DELETE /tasks/{task_id}: 删除

不存在与不属于调用者的任务统一返回 404。
"""

from fastapi import APIRouter, Depends, Query
from taskpad.core.models import TaskCreate, TaskUpdate

from ..deps import get_task_service
from ..middleware.auth_gate import require_caller
from ..services.task_service import TaskService

router = APIRouter(dependencies=[Depends(require_caller)])


@router.get("/tasks")
async def list_tasks(
    status: str | None = Query(default=None, description="按状态筛选"),
    priority: str | None = Query(default=None, description="按优先级筛选"),
    caller_id: str = Depends(require_caller),
    service: TaskService = Depends(get_task_service),
):
    """查询任务列表，按创建时间倒序"""
    tasks = await service.list_tasks(
        caller_id, {"status": status, "priority": priority}
    )
    return {"tasks": [t.to_public() for t in tasks]}


@router.get("/tasks/stats")
async def task_stats(
    caller_id: str = Depends(require_caller),
    service: TaskService = Depends(get_task_service),
):
    """按状态统计任务数量"""
    stats = await service.task_stats(caller_id)
    return {"stats": stats.to_public()}


@router.get("/tasks/{task_id}")
async def get_task(
    task_id: str,
    caller_id: str = Depends(require_caller),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(caller_id, task_id)
    return {"task": task.to_public()}


@router.post("/tasks", status_code=201)
async def create_task(
    body: TaskCreate,
    caller_id: str = Depends(require_caller),
    service: TaskService = Depends(get_task_service),
):
    """创建任务，owner 为当前调用者"""
    task = await service.create_task(caller_id, body)
    return {"task": task.to_public()}


@router.put("/tasks/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate,
    caller_id: str = Depends(require_caller),
    service: TaskService = Depends(get_task_service),
):
    """部分更新任务，只应用请求体中出现的字段"""
    task = await service.update_task(caller_id, task_id, body)
    return {"task": task.to_public()}


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: str,
    caller_id: str = Depends(require_caller),
    service: TaskService = Depends(get_task_service),
):
    await service.delete_task(caller_id, task_id)
    return {"taskId": task_id, "deleted": True}
