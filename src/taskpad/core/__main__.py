"""CLI 入口模块 -- python -m taskpad.core <command>

支持的命令：
  init-db  在配置的路径上创建数据库表和索引
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskpad.core <command>")
        print("命令:")
        print("  init-db  初始化数据库表和索引")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库（已存在的表保持不变）"""
    from .store import create_store_group
    from .store.sqlite_init import verify_wal_mode

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        wal = await verify_wal_mode(store_group.conn)
        print(f"初始化完成（WAL: {'on' if wal else 'off'}）")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
