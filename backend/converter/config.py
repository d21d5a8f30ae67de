"""Application configuration. Loads from environment and .env file."""
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
# Load .env from cwd, then backend/.env, then project root .env
load_dotenv()
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR.parent / ".env")


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    value = float(raw)
    return value if value > 0 else None


# Conversion options (env overrides)
DEFAULT_QUALITY = int(os.getenv("DEFAULT_QUALITY", "80"))
MIN_QUALITY = 1
MAX_QUALITY = 100
# Comma-separated MIME types accepted as input; empty means "same as the output formats"
ACCEPTED_INPUT_TYPES = [
    t.strip().lower() for t in os.getenv("ACCEPTED_INPUT_TYPES", "").split(",") if t.strip()
]
# Seconds per codec call; unset or 0 disables the limit
CODEC_TIMEOUT_SECONDS = _optional_float("CODEC_TIMEOUT_SECONDS")

# Concurrency
MAX_WORKERS = int(os.getenv("MAX_WORKERS", str(min(32, (os.cpu_count() or 4) + 4))))

# Server (for uvicorn)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4444"))
# CORS: the single origin allowed to call the API
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000").strip()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("converter")
