import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BACKEND_URL = "http://localhost:8000"
DEFAULT_EXPORT_DIR = "reports"

ANALYZE_PATH = "/api/analyze"
HEALTH_PATH = "/health"


def backend_url() -> str:
    url = os.getenv("BACKEND_URL") or DEFAULT_BACKEND_URL
    return url.strip().rstrip("/")


def export_dir() -> str:
    return os.getenv("EXPORT_DIR") or DEFAULT_EXPORT_DIR


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
