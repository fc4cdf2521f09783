# scripts/init_db.py
import asyncio

from dealflow.config import Settings
from dealflow.db import build_engine, create_tables


async def main() -> None:
    engine = build_engine(Settings())
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()
    print("OK: created all tables (idempotent).")


if __name__ == "__main__":
    asyncio.run(main())
