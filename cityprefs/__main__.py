"""Run the cityprefs server with uvicorn: ``python -m cityprefs``."""

import uvicorn

from cityprefs.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "cityprefs.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
