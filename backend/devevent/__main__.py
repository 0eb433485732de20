"""
Run the API with uvicorn: `python -m devevent` or the `devevent` script.
"""

import uvicorn

from devevent.core.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "devevent.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
