import os
from dotenv import load_dotenv

load_dotenv()

# Origin the embed script is served from; the chat relay lives under it
PUBLIC_ORIGIN = os.getenv("WIDGET_PUBLIC_ORIGIN", "http://localhost:8000")
RELAY_PATH = "/api/chat-relay"

# Tier assumed when the billing layer does not send one
DEFAULT_TIER = os.getenv("WIDGET_DEFAULT_TIER", "basic")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]


def relay_endpoint(origin: str = None) -> str:
    base = (origin or PUBLIC_ORIGIN).rstrip("/")
    return f"{base}{RELAY_PATH}"
