"""FastAPI entrypoint for the budget ledger backend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import categories, entries, health, recipes, summary
from .config import load_settings
from .infra.logging import configure_logging


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and register routers."""

    settings = load_settings()
    configure_logging(settings.logging.level, settings.logging.format)
    application = FastAPI(title="Budget Ledger API", version="0.1.0")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.api.allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (
        health.router,
        entries.router,
        summary.router,
        categories.router,
        recipes.router,
    ):
        application.include_router(router)
    return application


app = create_app()
