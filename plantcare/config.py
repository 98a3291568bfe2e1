import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ============================================================================#
# ENVIRONMENT / SERVICES
# ============================================================================#
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")  # Gemini via OpenRouter
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
AI_MODEL = os.getenv("AI_MODEL", "google/gemini-3-flash-preview")

# Sent to OpenRouter as HTTP-Referer / X-Title
APP_URL = os.getenv("APP_URL", "https://plantcare-assistant.app")
APP_TITLE = os.getenv("APP_TITLE", "Plant Care Assistant")

# Timeout configuration for AI calls (seconds)
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "60"))
API_CONNECT_TIMEOUT = float(os.getenv("API_CONNECT_TIMEOUT", "15"))
AI_MAX_TOKENS = int(os.getenv("AI_MAX_TOKENS", "8192"))

# ============================================================================#
# HTTP SERVER
# ============================================================================#
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))  # 10 MB
RATE_LIMIT = os.getenv("RATE_LIMIT", "30/minute")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8080"))
