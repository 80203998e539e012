"""Process-level configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return the explicit key if given, else the first non-empty env variable."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


@dataclass
class Settings:
    neynar_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> Settings:
        if load_env_file:
            load_dotenv()
        return cls(
            neynar_api_key=resolve_api_key(None, "NEYNAR_API_KEY"),
            gemini_api_key=resolve_api_key(None, "GEMINI_API_KEY", "GOOGLE_API_KEY"),
            gemini_model=os.environ.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            cloudinary_cloud_name=resolve_api_key(None, "CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=resolve_api_key(None, "CLOUDINARY_API_KEY"),
            cloudinary_api_secret=resolve_api_key(None, "CLOUDINARY_API_SECRET"),
            log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
