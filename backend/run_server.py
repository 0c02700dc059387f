# run_server.py
import uvicorn

from storefront.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "storefront.main:app",
        host="127.0.0.1",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENV == "dev",
    )
