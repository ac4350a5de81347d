"""Entry point for running the application as a module."""

import uvicorn

from pinboard.config import settings


def main() -> None:
    """Run the application server."""
    uvicorn.run(
        "pinboard.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
