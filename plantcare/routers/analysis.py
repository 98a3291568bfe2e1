import base64
import logging
import time
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from plantcare.config import RATE_LIMIT
from plantcare.dependencies import get_gateway, limiter
from plantcare.errors import InputFailure
from plantcare.models import (
    HISTORY_TYPES,
    AnalysisKind,
    AnalysisRequest,
    HistoryItem,
    WireModel,
)
from plantcare.services.analysis import (
    IMAGE_ANALYSES,
    analyze,
    location_from_coordinates,
)
from plantcare.services.gateway import AIGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

_DEFAULT_TITLES = {
    AnalysisKind.NUTRIENT: "Plant Nutrient Check",
    AnalysisKind.SOIL: "Soil Report",
}


class WeatherRequest(WireModel):
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def build_history_item(kind: AnalysisKind, result, image_bytes: Optional[bytes] = None) -> HistoryItem:
    """Wrap a successful result as a history entry for the front end to keep."""
    plant_name = (
        getattr(result, "plant_name", None)
        or getattr(result, "location_name", None)
        or _DEFAULT_TITLES.get(kind)
    )
    return HistoryItem(
        id=uuid.uuid4().hex,
        timestamp=int(time.time() * 1000),
        type=HISTORY_TYPES[kind],
        plant_name=plant_name,
        image=base64.b64encode(image_bytes).decode("utf-8") if image_bytes else None,
        result=result,
    )


@router.post("/analyze/{kind}", response_model=HistoryItem)
@limiter.limit(RATE_LIMIT)
async def analyze_image(
    request: Request,
    kind: AnalysisKind,
    file: Optional[UploadFile] = File(None),
    gateway: AIGateway = Depends(get_gateway),
):
    if kind not in IMAGE_ANALYSES:
        raise InputFailure(f"'{kind.value}' cannot be analyzed from a photo.")

    image_bytes = await file.read() if file is not None else b""
    result = await analyze(gateway, AnalysisRequest(kind=kind, image_bytes=image_bytes))
    return build_history_item(kind, result, image_bytes)


@router.post("/weather", response_model=HistoryItem)
@limiter.limit(RATE_LIMIT)
async def weather(
    request: Request,
    body: WeatherRequest,
    gateway: AIGateway = Depends(get_gateway),
):
    location = body.location
    if body.latitude is not None or body.longitude is not None:
        if body.latitude is None or body.longitude is None:
            raise InputFailure("Unable to retrieve your location. Please check browser permissions.")
        location = location_from_coordinates(body.latitude, body.longitude)

    result = await analyze(gateway, AnalysisRequest(kind=AnalysisKind.WEATHER, location_query=location))
    return build_history_item(AnalysisKind.WEATHER, result)
