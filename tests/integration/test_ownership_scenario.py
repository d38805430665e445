"""端到端场景：两个用户、一个任务，验证所有权隔离

注册 -> 创建任务 -> 按状态筛选 -> 他人删除失败 -> 所有者仍可见
"""

from httpx import AsyncClient


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestOwnershipScenario:
    async def test_two_users_one_task(self, client: AsyncClient):
        resp = await client.post(
            "/auth/register",
            json={"email": "a@x.com", "password": "secret1", "name": "A"},
        )
        assert resp.status_code == 201
        token_a = resp.json()["token"]
        user_a = resp.json()["user"]

        resp = await client.post(
            "/auth/register",
            json={"email": "b@x.com", "password": "secret1", "name": "B"},
        )
        token_b = resp.json()["token"]

        resp = await client.post(
            "/tasks", json={"title": "Buy milk"}, headers=_auth(token_a)
        )
        assert resp.status_code == 201
        task = resp.json()["task"]
        assert task["ownerId"] == user_a["userId"]
        assert task["status"] == "pending"
        assert task["priority"] == "medium"

        resp = await client.get(
            "/tasks", params={"status": "pending"}, headers=_auth(token_a)
        )
        assert [t["taskId"] for t in resp.json()["tasks"]] == [task["taskId"]]

        resp = await client.delete(f"/tasks/{task['taskId']}", headers=_auth(token_b))
        assert resp.status_code == 404

        resp = await client.get("/tasks", headers=_auth(token_a))
        assert [t["title"] for t in resp.json()["tasks"]] == ["Buy milk"]

    async def test_login_token_equivalent_to_register_token(self, client: AsyncClient):
        resp = await client.post(
            "/auth/register",
            json={"email": "c@x.com", "password": "secret1", "name": "C"},
        )
        register_token = resp.json()["token"]
        created = await client.post(
            "/tasks", json={"title": "from register"}, headers=_auth(register_token)
        )

        resp = await client.post(
            "/auth/login", json={"email": "c@x.com", "password": "secret1"}
        )
        login_token = resp.json()["token"]
        resp = await client.get(
            f"/tasks/{created.json()['task']['taskId']}", headers=_auth(login_token)
        )
        assert resp.status_code == 200
