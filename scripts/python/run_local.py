"""Script to run the API locally with auto-reload."""

import uvicorn

from foodies.core.config import get_settings


def main() -> None:
    """Run the server in local configuration."""
    settings = get_settings()
    uvicorn.run(
        "foodies.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=True,
    )


if __name__ == "__main__":
    main()
