import os

import uvicorn

from cookie_session.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="cookie_session_demo")
    port = int(os.getenv("PORT", 8022))
    logger.info(f"Serving session demo on port {port}")

    uvicorn.run(
        "cookie_session.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_config=None,
    )
