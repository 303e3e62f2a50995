"""Run the API with uvicorn: ``python -m greetings_api``.

Host and port are read from ``HOST``/``PORT`` (defaults ``0.0.0.0:3000``).
"""
import uvicorn

from greetings_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "greetings_api.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
