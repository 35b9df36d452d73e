"""
Main Application Entry Point.

This module builds the FastAPI application, configures middleware (CORS),
registers exception handlers and includes all API routers. The lifespan owns
every long-lived object: the preferences file, the proxy HTTP clients and the
entitlement listener task.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snapsolve.billing.credits import CreditStore
from snapsolve.billing.entitlements import EntitlementManager, LocalStoreBackend
from snapsolve.clients.search import SearchClient
from snapsolve.clients.vision import VisionClient
from snapsolve.core.database.session import async_session_maker, init_db
from snapsolve.core.logging_config import get_logger, setup_logging
from snapsolve.settings.languages import LanguageSettings
from snapsolve.settings.preferences import PreferencesStore

from .api.v1 import billing, capture, credits, formatting, health, history, languages, projects, search, solve, usage
from .core import constant
from .core.config import Settings, settings
from .exception_handlers import setup_exception_handlers

logger = get_logger(__name__)


def build_lifespan(config: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifespan events.

        Startup opens the preferences store, creates the proxy clients, loads
        products and entitlements and starts the transaction listener.
        Shutdown tears them down in reverse order.
        """
        setup_logging()
        logger.info("Starting up SnapSolve Server...")

        try:
            await init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Database initialization failed: {e}", exc_info=True)
        app.state.session_maker = async_session_maker

        preferences = PreferencesStore(config.credits.preferences_path)
        app.state.preferences = preferences
        app.state.credits = CreditStore(preferences, config.credits.initial_credits)
        app.state.languages = LanguageSettings(preferences)

        vision = config.vision
        app.state.vision_client = VisionClient(
            vision.base_url,
            timeout=vision.timeout,
            max_prompt_length=vision.max_prompt_length,
            max_image_base64_size=vision.max_image_base64_size,
            jpeg_quality=vision.jpeg_quality,
        )
        app.state.search_client = SearchClient(vision.base_url, timeout=vision.timeout)

        plans = config.plans
        backend = LocalStoreBackend.from_plan_prices(
            plans.weekly_price, plans.yearly_price, purchases_enabled=plans.local_store_enabled
        )
        if not plans.local_store_enabled:
            logger.warning("No purchase platform configured: purchases are disabled")
        entitlements = EntitlementManager(backend)
        await entitlements.fetch_products()
        await entitlements.check_premium_status()
        entitlements.start_listener()
        app.state.entitlements = entitlements

        yield

        logger.info("Shutting down SnapSolve Server...")
        await entitlements.stop_listener()
        await app.state.search_client.aclose()
        await app.state.vision_client.aclose()
        preferences.close()

    return lifespan


def create_app(config: Settings = settings) -> FastAPI:
    app = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
        SnapSolve Server API

        Camera math solving through a remote vision model, web search with history,
        and photo projects exported as PDF.
        """,
        version=constant.VERSION,
        openapi_url=f"{constant.API_V1_STR}/openapi.json",
        docs_url=f"{constant.API_V1_STR}/docs",
        redoc_url=f"{constant.API_V1_STR}/redoc",
        lifespan=build_lifespan(config),
    )

    cors = config.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    setup_exception_handlers(app)

    api = constant.API_V1_STR
    app.include_router(health.router, tags=["health"])
    app.include_router(solve.router, prefix=f"{api}/solve", tags=["solve"])
    app.include_router(search.router, prefix=f"{api}/search", tags=["search"])
    app.include_router(history.router, prefix=f"{api}/history", tags=["history"])
    app.include_router(projects.router, prefix=f"{api}/projects", tags=["projects"])
    app.include_router(usage.router, prefix=f"{api}/usage", tags=["usage"])
    app.include_router(credits.router, prefix=f"{api}/credits", tags=["credits"])
    app.include_router(billing.router, prefix=f"{api}/billing", tags=["billing"])
    app.include_router(formatting.router, prefix=f"{api}/format", tags=["formatting"])
    app.include_router(languages.router, prefix=f"{api}/languages", tags=["languages"])
    app.include_router(capture.router, prefix=f"{api}/capture", tags=["capture"])
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("snapsolve.server.main:app", host=settings.server_host, port=settings.server_port)
