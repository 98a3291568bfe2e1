"""
Prompts embed the reply shape rendered from the result models, so the prompt
and the parser always agree on field names.
"""
import pytest

from conftest import SAMPLE_REPLIES
from plantcare.models import (
    ChatPersona,
    DiseaseResult,
    NutrientResult,
    SeedResult,
    SoilResult,
    TargetLanguage,
    WeatherResult,
)
from plantcare.services import prompts
from plantcare.services.schema import render_shape, wire_field_names

PROMPT_MODELS = [
    (prompts.disease_prompt, DiseaseResult, "disease"),
    (prompts.nutrient_prompt, NutrientResult, "nutrient"),
    (prompts.soil_prompt, SoilResult, "soil"),
    (prompts.seed_prompt, SeedResult, "seed"),
    (lambda: prompts.weather_prompt("Kochi"), WeatherResult, "weather"),
]


def _keys(data):
    """All keys of a nested JSON example."""
    keys = set()
    if isinstance(data, dict):
        for key, value in data.items():
            keys.add(key)
            keys |= _keys(value)
    elif isinstance(data, list):
        for item in data:
            keys |= _keys(item)
    return keys


class TestRenderShape:
    def test_disease_shape(self):
        shape = render_shape(DiseaseResult)
        assert '"plantName": string' in shape
        assert '"severity": "Low" | "Medium" | "High"' in shape
        assert '"symptoms": string[]' in shape
        assert '"organic": string[]' in shape
        assert '{ "pesticideName": string, "url": string }' in shape

    def test_nutrient_shape(self):
        shape = render_shape(NutrientResult)
        assert shape.startswith("{\n")
        assert shape.endswith("\n}")
        assert '"healthScore": number' in shape
        assert '"deficiencies": string[]' in shape

    def test_weather_shape_has_three_forecast_rows(self):
        shape = render_shape(WeatherResult)
        assert shape.count('{ "day": string, "temp": string, "condition": string }') == 3
        assert '"temp": "string (e.g. 30°C)"' in shape
        assert '"floodProbability": "Low" | "Medium" | "High"' in shape

    def test_grounding_sources_are_not_asked_for(self):
        assert "groundingSources" not in render_shape(WeatherResult)
        assert "groundingSources" not in wire_field_names(WeatherResult)


class TestPromptMatchesParser:
    @pytest.mark.parametrize("build_prompt,model,kind", PROMPT_MODELS)
    def test_every_wire_field_is_in_prompt(self, build_prompt, model, kind):
        prompt = build_prompt()
        for name in wire_field_names(model):
            assert f'"{name}"' in prompt, f"{name} missing from {kind} prompt"

    @pytest.mark.parametrize("build_prompt,model,kind", PROMPT_MODELS)
    def test_documented_examples_use_only_prompt_fields(self, build_prompt, model, kind):
        example = next(v for k, v in SAMPLE_REPLIES.items() if k.value == kind)
        assert _keys(example) == set(wire_field_names(model))


class TestPromptText:
    def test_weather_prompt_includes_location(self):
        prompt = prompts.weather_prompt("latitude 9.93, longitude 76.26")
        assert "latitude 9.93, longitude 76.26" in prompt
        assert "Do not use Markdown code blocks" in prompt

    def test_translation_prompt(self):
        prompt = prompts.translation_prompt("**Water** daily", TargetLanguage.MALAYALAM)
        assert "into Malayalam" in prompt
        assert "MAINTAIN ALL MARKDOWN FORMATTING" in prompt
        assert '"**Water** daily"' in prompt

    def test_every_persona_has_an_instruction(self):
        assert set(prompts.CHAT_INSTRUCTIONS) == set(ChatPersona)
        for instruction in prompts.CHAT_INSTRUCTIONS.values():
            assert "JSON" in instruction

    def test_garden_master_headers(self):
        assert "**Watering Needs**" in prompts.GARDEN_MASTER_INSTRUCTION

    def test_prompts_are_deterministic(self):
        assert prompts.disease_prompt() == prompts.disease_prompt()
        assert prompts.soil_prompt() == prompts.soil_prompt()
