from fastapi import APIRouter, Request

from plantcare import __version__
from plantcare.config import AI_MODEL

router = APIRouter()


@router.get("/")
async def root():
    return {
        "status": "online",
        "service": "Plant Care Assistant",
        "version": __version__,
        "features": [
            "Disease & Pest Diagnosis",
            "Nutrient Deficiency Analysis",
            "Soil Report Reading",
            "Seed Identification",
            "Weather & Disaster Risk (search grounded)",
            "Botanist / Garden Master / Soil Expert Chat",
            "Translation (Hindi, Malayalam)",
        ]
    }


@router.get("/health")
async def health_check(request: Request):
    return {
        "status": "healthy",
        "version": __version__,
        "model": AI_MODEL,
        "services": {
            "gateway": getattr(request.app.state, "gateway", None) is not None,
        }
    }
