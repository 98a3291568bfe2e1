import json
import logging
from typing import Dict, Iterable, List, Type
from urllib.parse import urlparse

from pydantic import BaseModel, ValidationError

from plantcare.errors import ParseFailure
from plantcare.models import (
    AnalysisKind,
    Citation,
    DiseaseResult,
    GroundingSource,
    NutrientResult,
    SeedResult,
    SoilResult,
    WeatherResult,
)

logger = logging.getLogger(__name__)

RESULT_MODELS: Dict[AnalysisKind, Type[BaseModel]] = {
    AnalysisKind.DISEASE: DiseaseResult,
    AnalysisKind.NUTRIENT: NutrientResult,
    AnalysisKind.SOIL: SoilResult,
    AnalysisKind.SEED: SeedResult,
    AnalysisKind.WEATHER: WeatherResult,
}


def strip_code_fence(raw_text: str) -> str:
    """Remove one surrounding ```json ... ``` block, if the model added it."""
    json_str = raw_text.strip()
    if json_str.startswith("```json"):
        json_str = json_str[7:]
    elif json_str.startswith("```"):
        json_str = json_str[3:]
    if json_str.endswith("```"):
        json_str = json_str[:-3]
    return json_str.strip()


def parse_result(kind: AnalysisKind, raw_text: str) -> BaseModel:
    """Deserialize the AI reply into the result model for ``kind``.

    Strict: invalid JSON, a non-object top level or a missing/mistyped field
    raises ParseFailure. A partial result is never returned.
    """
    model = RESULT_MODELS[kind]
    try:
        data = json.loads(strip_code_fence(raw_text or ""))
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return model.model_validate(data)
    except (ValueError, RecursionError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError; deeply nested input overflows the decoder
        logger.error(f"Failed to parse {kind.value} response: {e}\nRaw response: {raw_text}")
        raise ParseFailure(kind.value, raw_text, reason=str(e)) from e


def grounding_sources(citations: Iterable[Citation]) -> List[GroundingSource]:
    """Keep citations with a resolvable link; untitled ones are labelled by host."""
    sources = []
    seen = set()
    for citation in citations or []:
        uri = (citation.uri or "").strip()
        try:
            parsed = urlparse(uri)
            host = parsed.hostname
        except ValueError:
            continue
        if parsed.scheme not in ("http", "https") or not host:
            continue
        if uri in seen:
            continue
        seen.add(uri)
        title = (citation.title or "").strip() or host
        sources.append(GroundingSource(title=title, url=uri))
    return sources


def parse_weather(raw_text: str, citations: Iterable[Citation]) -> WeatherResult:
    result = parse_result(AnalysisKind.WEATHER, raw_text)
    result.grounding_sources = grounding_sources(citations)
    return result
