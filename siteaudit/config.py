"""
Runtime configuration, read from the environment (and a local .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()

API_SECRET = os.environ.get("API_SECRET_KEY", "")

FETCH_TIMEOUT = float(os.environ.get("FETCH_TIMEOUT", "15"))

FETCH_USER_AGENT = os.environ.get(
    "FETCH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

PORT = int(os.environ.get("PORT", 8000))
