import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

# "gemini" | "chat"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini")

GEMINI_AI_KEY = os.getenv("GEMINI_AI_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-pro")

# OpenAI-compatible chat completions endpoint
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "http://host.docker.internal:11434/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "mistral:7b-instruct")
LLM_API_KEY = os.getenv("LLM_API_KEY", "")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))

LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
GENERATION_RETRIES = int(os.getenv("GENERATION_RETRIES", "3"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
