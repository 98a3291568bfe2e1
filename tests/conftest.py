"""
Shared fixtures: a stub AI gateway, documented reply examples, image bytes.
"""
import io
import json
import os
import sys

import pytest
from PIL import Image

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from plantcare.models import AnalysisKind
from plantcare.services.gateway import GatewayReply


class StubGateway:
    """Stands in for AIGateway; records every call and replies with fixed text."""

    def __init__(self, text="", citations=None, error=None):
        self.text = text
        self.citations = citations or []
        self.error = error
        self.calls = []

    async def generate(self, prompt, **kwargs):
        self.calls.append({"prompt": prompt, **kwargs})
        if self.error is not None:
            raise self.error
        return GatewayReply(text=self.text, citations=list(self.citations))

    async def chat(self, system_instruction, history, message):
        self.calls.append({
            "system_instruction": system_instruction,
            "history": list(history),
            "message": message,
        })
        if self.error is not None:
            raise self.error
        return self.text


SAMPLE_REPLIES = {
    AnalysisKind.DISEASE: {
        "plantName": "Tomato",
        "diseaseName": "Early Blight",
        "severity": "Medium",
        "symptoms": ["Concentric brown rings on lower leaves"],
        "cures": {
            "organic": ["Remove infected leaves", "Copper-based spray"],
            "chemical": ["Chlorothalonil"],
        },
        "purchaseLinks": [
            {"pesticideName": "Chlorothalonil", "url": "https://www.google.com/search?q=buy+chlorothalonil"}
        ],
        "prevention": ["Rotate crops", "Water at the base"],
    },
    AnalysisKind.NUTRIENT: {
        "healthScore": 83,
        "deficiencies": ["Magnesium"],
        "symptoms": ["Interveinal chlorosis on older leaves"],
        "recommendations": ["Apply Epsom salt as a foliar spray"],
    },
    AnalysisKind.SOIL: {
        "phValue": "6.5",
        "nitrogen": "Low",
        "phosphorus": "Medium",
        "potassium": "High",
        "organicMatter": "1.2%",
        "suitableCrops": ["Wheat", "Maize"],
        "improvementTips": ["Add well-rotted compost"],
    },
    AnalysisKind.SEED: {
        "seedName": "Sunflower seed",
        "plantName": "Sunflower",
        "description": "Striped, tear-shaped seed with a hard hull",
        "cultivationPlaces": ["India", "Ukraine"],
        "bestSoil": "Well-drained loam",
        "growthTips": ["Sow 2-3 cm deep in full sun"],
    },
    AnalysisKind.WEATHER: {
        "locationName": "Kochi, Kerala",
        "current": {"temp": "30°C", "condition": "Rainy", "humidity": "85%", "wind": "12 km/h"},
        "forecast": [
            {"day": "Monday", "temp": "29°C", "condition": "Rain"},
            {"day": "Tuesday", "temp": "30°C", "condition": "Cloudy"},
            {"day": "Wednesday", "temp": "31°C", "condition": "Sunny"},
        ],
        "risks": {
            "floodProbability": "High",
            "cycloneProbability": "Low",
            "details": "Heavy monsoon rain may flood low-lying fields",
        },
        "farmingTip": "Clear field drains before the weekend",
    },
}


def sample_text(kind):
    return json.dumps(SAMPLE_REPLIES[kind], ensure_ascii=False)


def make_image(image_format="JPEG"):
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), (40, 160, 60)).save(buf, format=image_format)
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes():
    return make_image("JPEG")


@pytest.fixture
def png_bytes():
    return make_image("PNG")
