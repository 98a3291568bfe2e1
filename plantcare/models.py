from enum import Enum
from typing import ClassVar, Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

RiskLevel = Literal["Low", "Medium", "High"]


class AnalysisKind(str, Enum):
    DISEASE = "disease"
    SOIL = "soil"
    SEED = "seed"
    NUTRIENT = "nutrient"
    WEATHER = "weather"
    CHAT = "chat"


class WireModel(BaseModel):
    """camelCase on the wire (the field names the AI is asked to produce), snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    # Fields filled in by us rather than by the AI; left out of the prompt shape
    prompt_exclude: ClassVar[FrozenSet[str]] = frozenset()
    # Example rows shown for list-of-object fields
    prompt_list_rows: ClassVar[Dict[str, int]] = {}


# ============================================================================#
# Analysis results
# ============================================================================#

class NutrientResult(WireModel):
    health_score: int  # 0-100 expected, passed through unclamped
    deficiencies: List[str]
    symptoms: List[str]
    recommendations: List[str]


class Cures(WireModel):
    organic: List[str]
    chemical: List[str]


class PurchaseLink(WireModel):
    name: str = Field(alias="pesticideName")
    url: str


class DiseaseResult(WireModel):
    plant_name: str
    disease_name: str
    severity: RiskLevel
    symptoms: List[str]
    cures: Cures
    purchase_links: List[PurchaseLink]
    prevention: List[str]


class SoilResult(WireModel):
    ph_value: str
    nitrogen: str
    phosphorus: str
    potassium: str
    organic_matter: str
    suitable_crops: List[str]
    improvement_tips: List[str]


class SeedResult(WireModel):
    seed_name: str
    plant_name: str
    description: str
    cultivation_places: List[str]
    best_soil: str
    growth_tips: List[str]


class CurrentWeather(WireModel):
    temp: str = Field(description="e.g. 30°C")
    condition: str = Field(description="e.g. Rainy")
    humidity: str
    wind: str


class ForecastDay(WireModel):
    day: str
    temp: str
    condition: str


class WeatherRisks(WireModel):
    flood_probability: RiskLevel
    cyclone_probability: RiskLevel
    details: str = Field(description="summary of risks")


class GroundingSource(WireModel):
    title: str
    url: str


class WeatherResult(WireModel):
    location_name: str = Field(description="City, Region")
    current: CurrentWeather
    forecast: List[ForecastDay]  # 3 days expected, not enforced
    risks: WeatherRisks
    farming_tip: str
    grounding_sources: List[GroundingSource] = Field(default_factory=list)

    prompt_exclude: ClassVar[FrozenSet[str]] = frozenset({"grounding_sources"})
    prompt_list_rows: ClassVar[Dict[str, int]] = {"forecast": 3}


AnalysisResult = Union[DiseaseResult, NutrientResult, SoilResult, SeedResult, WeatherResult]


# ============================================================================#
# Grounding metadata
# ============================================================================#

class Citation(BaseModel):
    """One citation returned by a search-grounded call."""

    title: Optional[str] = None
    uri: Optional[str] = None


# ============================================================================#
# Requests / chat
# ============================================================================#

class ChatTurn(WireModel):
    role: Literal["user", "model"]
    text: str

    @field_validator("role", mode="before")
    @classmethod
    def _assistant_is_model(cls, value):
        if isinstance(value, str) and value.lower() == "assistant":
            return "model"
        return value


class ChatPersona(str, Enum):
    BOTANIST = "botanist"
    GARDEN_MASTER = "garden-master"
    SOIL_EXPERT = "soil-expert"


class TargetLanguage(str, Enum):
    HINDI = "Hindi"
    MALAYALAM = "Malayalam"


class AnalysisRequest(WireModel):
    """One image or weather analysis. Persona chat goes through services.chat."""
    kind: AnalysisKind
    image_bytes: Optional[bytes] = None
    location_query: Optional[str] = None


# ============================================================================#
# History
# ============================================================================#

HISTORY_TYPES = {
    AnalysisKind.DISEASE: "disease-detection",
    AnalysisKind.NUTRIENT: "nutrient-analysis",
    AnalysisKind.SOIL: "soil-analysis",
    AnalysisKind.SEED: "seed-detection",
    AnalysisKind.WEATHER: "weather",
}


class HistoryItem(WireModel):
    id: str
    timestamp: int  # ms since epoch
    type: str
    plant_name: Optional[str] = None
    image: Optional[str] = None  # base64, no data: prefix
    result: AnalysisResult
