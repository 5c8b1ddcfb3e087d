"""Utility helpers for logging and formatting."""
import logging

from cmdregistry.config import get_settings

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("cmdregistry")


def preview(text: str, limit: int = 60) -> str:
    """Single-line excerpt of a template body for log messages."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 3] + "..."
