"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

# Configure logging FIRST, before any other imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# Reduce noise from third-party libraries (must be set before importing them)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from app import __version__
from app.api import router
from app.clients import BinanceRestClient
from app.config import get_settings
from app.notifiers import create_notifier
from app.services import SignalBot
from core.errors import ConnectivityError

logger = logging.getLogger(__name__)

APP_NAME = "Crypto Scalping Bot"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    config = settings.strategy_config()

    provider = BinanceRestClient(
        base_url=settings.binance_base_url,
        timeout=settings.http_timeout,
    )
    notifier = create_notifier(settings)

    logger.info(f"Starting {APP_NAME} v{__version__}")
    logger.info(f"Notifier: {notifier.name}")

    # Connectivity is checked but not required; start() checks again
    try:
        await provider.ping()
        logger.info("Exchange connection verified")
    except ConnectivityError as e:
        logger.warning(f"Exchange not reachable at startup: {e}")

    bot = SignalBot(
        config=config,
        provider=provider,
        notifier=notifier,
        candle_margin=settings.candle_margin,
    )
    app.state.bot = bot

    yield

    # Shutdown
    logger.info("Shutting down...")
    app.state.bot = None
    await bot.close()
    await notifier.close()
    await provider.close()
    logger.info("Shutdown complete")


# Create FastAPI app with orjson for faster JSON serialization
app = FastAPI(
    title=APP_NAME,
    description="Moving-average crossover signal bot",
    version=__version__,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include REST routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": APP_NAME,
        "version": __version__,
        "docs": "/docs",
        "api": "/api",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def main():
    """Run the application."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
