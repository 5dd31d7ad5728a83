import logging

import uvicorn

from schoolforms.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)

if __name__ == "__main__":
    uvicorn.run("schoolforms.main:app", log_level=settings.LOG_LEVEL.lower())
