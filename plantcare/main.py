# Plant Care Assistant API
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from plantcare import __version__
from plantcare.config import CORS_ORIGINS, LOG_LEVEL, OPENROUTER_API_KEY, PORT
from plantcare.dependencies import limiter
from plantcare.errors import ConfigurationError, ParseFailure, PlantCareError
from plantcare.routers import analysis, chat, health
from plantcare.services.gateway import AIGateway, GatewayConfig

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================#
# Lifespan Events
# ============================================================================#

@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    # Startup
    logger.info("=" * 60)
    logger.info("Starting Plant Care Assistant")
    logger.info(f"OpenRouter API: {'✓' if OPENROUTER_API_KEY else '✗'}")
    logger.info("=" * 60)

    try:
        app_instance.state.gateway = AIGateway(GatewayConfig.from_env())
    except ConfigurationError as e:
        logger.error(f"AI gateway disabled: {e.message}")
        app_instance.state.gateway = None

    yield

    # Shutdown
    logger.info("Shutting down gracefully...")
    if app_instance.state.gateway is not None:
        await app_instance.state.gateway.close()


# Initialize FastAPI app
app = FastAPI(
    title="Plant Care Assistant",
    description="AI-powered plant disease, nutrient, soil, seed and weather analysis",
    version=__version__,
    lifespan=lifespan
)

# Initialize Rate Limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlantCareError)
async def plant_care_error_handler(request: Request, exc: PlantCareError):
    if isinstance(exc, ParseFailure):
        # raw_text is already logged by the parser; it never goes to the client
        logger.warning(f"{request.url.path}: unusable {exc.kind} response ({exc.reason[:200]})")
    else:
        logger.warning(f"{request.url.path}: {exc.error_code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "error": exc.to_dict()},
    )


app.include_router(health.router)
app.include_router(analysis.router)
app.include_router(chat.router)


if __name__ == "__main__":
    uvicorn.run('plantcare.main:app', host='0.0.0.0', port=PORT, reload=True)
