"""Create the storefront tables on the configured database."""

import sys, pathlib, asyncio
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from storefront.core.config import settings
from storefront.core.db import build_engine
from storefront.models import Base


async def main():
    engine = build_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print("tables:", ", ".join(sorted(Base.metadata.tables)))
    finally:
        await engine.dispose()

asyncio.run(main())
