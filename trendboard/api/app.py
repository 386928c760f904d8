"""FastAPI application serving scraped trending data."""

from fastapi import FastAPI

from trendboard.api.routes import router
from trendboard.utils.config import get_settings
from trendboard.utils.logging_config import setup_logging


def create_app() -> FastAPI:
    """Build the API application."""
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Scraped GitHub Trending repositories",
        version="0.1.0",
        debug=settings.DEBUG,
    )
    app.include_router(router)
    return app


app = create_app()
