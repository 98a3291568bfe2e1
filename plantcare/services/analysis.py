"""
Analysis Service
Disease, nutrient, soil, seed and weather analysis.

Each entry point returns a typed result or raises one of InputFailure,
RequestFailure or ParseFailure.
"""

import logging
import math
from typing import Optional

from plantcare.errors import InputFailure
from plantcare.models import (
    AnalysisKind,
    AnalysisRequest,
    DiseaseResult,
    NutrientResult,
    SeedResult,
    SoilResult,
    WeatherResult,
)
from plantcare.services import prompts
from plantcare.services.gateway import AIGateway
from plantcare.services.parser import parse_result, parse_weather
from plantcare.utils.image import encode_image

logger = logging.getLogger(__name__)

_IMAGE_PROMPTS = {
    AnalysisKind.DISEASE: (prompts.DISEASE_INSTRUCTION, prompts.disease_prompt),
    AnalysisKind.NUTRIENT: (prompts.NUTRIENT_ANALYSER_INSTRUCTION, prompts.nutrient_prompt),
    AnalysisKind.SOIL: (prompts.SOIL_ANALYSER_INSTRUCTION, prompts.soil_prompt),
    AnalysisKind.SEED: (prompts.SEED_ANALYSER_INSTRUCTION, prompts.seed_prompt),
}


async def _analyze_image(gateway: AIGateway, kind: AnalysisKind, image_bytes: Optional[bytes]):
    image = encode_image(image_bytes)
    system_instruction, build_prompt = _IMAGE_PROMPTS[kind]

    logger.info(f"Starting {kind.value} analysis ({image.mime_type}, {len(image_bytes)} bytes)")
    reply = await gateway.generate(
        build_prompt(),
        system_instruction=system_instruction,
        image=image,
        json_output=True,
    )
    result = parse_result(kind, reply.text)
    logger.info(f"✓ {kind.value} analysis complete")
    return result


async def analyze_plant_disease(gateway: AIGateway, image_bytes: bytes) -> DiseaseResult:
    """Identify the plant, disease or pest, and treatments from a leaf photo."""
    result = await _analyze_image(gateway, AnalysisKind.DISEASE, image_bytes)
    logger.info(f"Disease detected: {result.disease_name} on {result.plant_name} (Severity: {result.severity})")
    return result


async def analyze_plant_nutrients(gateway: AIGateway, image_bytes: bytes) -> NutrientResult:
    result = await _analyze_image(gateway, AnalysisKind.NUTRIENT, image_bytes)
    if not 0 <= result.health_score <= 100:
        logger.warning(f"Health score out of range: {result.health_score}")
    return result


async def analyze_soil_report(gateway: AIGateway, image_bytes: bytes) -> SoilResult:
    return await _analyze_image(gateway, AnalysisKind.SOIL, image_bytes)


async def analyze_seed_image(gateway: AIGateway, image_bytes: bytes) -> SeedResult:
    return await _analyze_image(gateway, AnalysisKind.SEED, image_bytes)


_LOCATION_UNAVAILABLE = "Unable to use your location. Please check browser permissions or type a city name."


def location_from_coordinates(latitude: float, longitude: float) -> str:
    """Build the location query used when the browser shares GPS coordinates."""
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InputFailure(_LOCATION_UNAVAILABLE)
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise InputFailure(
            _LOCATION_UNAVAILABLE,
            details={"latitude": latitude, "longitude": longitude},
        )
    return f"latitude {latitude}, longitude {longitude}"


async def get_weather_details(gateway: AIGateway, location: Optional[str]) -> WeatherResult:
    """Current weather, 3-day forecast and flood/cyclone risk, grounded with web search."""
    location = (location or "").strip()
    if not location:
        raise InputFailure("Please enter a city or share your location.")

    logger.info(f"Checking weather for location: {location}")
    # json_output is left off: the web plugin and JSON mode do not combine reliably
    reply = await gateway.generate(prompts.weather_prompt(location), web_search=True)
    result = parse_weather(reply.text, reply.citations)
    logger.info(f"Weather check successful for {result.location_name} ({len(result.grounding_sources)} sources)")
    return result


async def analyze(gateway: AIGateway, request: AnalysisRequest):
    """Run the analysis selected by ``request.kind``."""
    if request.kind == AnalysisKind.WEATHER:
        return await get_weather_details(gateway, request.location_query)
    handler = IMAGE_ANALYSES.get(request.kind)
    if handler is None:
        raise InputFailure(f"'{request.kind.value}' is not an image or weather analysis.")
    return await handler(gateway, request.image_bytes)


IMAGE_ANALYSES = {
    AnalysisKind.DISEASE: analyze_plant_disease,
    AnalysisKind.NUTRIENT: analyze_plant_nutrients,
    AnalysisKind.SOIL: analyze_soil_report,
    AnalysisKind.SEED: analyze_seed_image,
}
