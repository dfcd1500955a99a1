# main.py

from uvicorn import run

from app.configs import settings
from app.main import app

__all__ = ["app"]


def main() -> None:
    run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
