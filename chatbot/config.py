"""Centralized configuration for the chatbot web app."""

import os
from pathlib import Path
from typing import Tuple

_THIS_DIR = Path(__file__).parent
_PROJECT_ROOT = _THIS_DIR.parent

APP_VERSION = os.getenv("APP_VERSION", "6.0")

# LLM Configuration (OpenRouter speaks the OpenAI chat-completions API)
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")

# Free models available on OpenRouter; the first one is used unless LLM_MODEL is set
FREE_MODELS: Tuple[str, ...] = (
    "mistralai/mistral-7b-instruct:free",
    "meta-llama/llama-3.1-8b-instruct:free",
    "anthropic/claude-3-haiku:beta",
)
LLM_MODEL = os.getenv("LLM_MODEL", FREE_MODELS[0])
LLM_TEMPERATURE = 0.7
LLM_TOP_P = 0.9
LLM_MAX_TOKENS = 300
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "20"))

# Attribution headers OpenRouter shows in its dashboard
APP_REFERER = os.getenv("APP_REFERER", "https://automaclick.app")
APP_TITLE = os.getenv("APP_TITLE", "Automaclick Chatbot")

# Product cache
CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "3600"))

# Flask app settings (allow env overrides; default debug off for safety)
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "3000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Interaction logs
LOG_DIR = Path(os.getenv("CHATBOT_LOG_DIR", str(_PROJECT_ROOT / "logs")))
