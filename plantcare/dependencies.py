import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from plantcare.errors import RequestFailure
from plantcare.services.gateway import AIGateway

logger = logging.getLogger(__name__)

# Rate limiter (per client IP)
limiter = Limiter(key_func=get_remote_address)


def get_gateway(request: Request) -> AIGateway:
    """The AI gateway created at startup; tests override this dependency."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        logger.error("OpenRouter API key not configured")
        raise RequestFailure("Plant analysis service not configured", details={"reason": "not_configured"})
    return gateway
