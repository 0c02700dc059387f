import sys, pathlib, asyncio
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from sqlalchemy import func, select, text

from storefront.core.config import settings
from storefront.core.db import build_engine, build_session_factory
from storefront.models import StoreSettingsRecord


async def main():
    engine = build_engine(settings)
    async with build_session_factory(engine)() as s:
        one = await s.execute(text("SELECT 1"))
        print("db-ping:", one.scalar())

        # More than one row means legacy duplicates; reads use the earliest.
        rows = await s.scalar(select(func.count()).select_from(StoreSettingsRecord))
        print("store_settings rows:", rows)
    await engine.dispose()

asyncio.run(main())
