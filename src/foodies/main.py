"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn foodies.main:app --reload

    # Or directly
    python -m foodies.main
"""

from foodies.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from foodies.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "foodies.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
