"""Data models for the Frame cover generator."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_PFP_URL = "https://i.imgur.com/3q0Y7Yv.png"
DEFAULT_LOGO_URL = "https://i.imgur.com/M8P5gYg.png"

RESET_BUTTON_INDEX = 2

HTML_HEADERS: dict[str, str] = {"content-type": "text/html"}


class FrameState(str, Enum):
    INITIAL = "initial"
    RESULT = "result"


def _default_transformation(overlay_url: str) -> list[dict[str, Any]]:
    return [
        {"width": 1000, "height": 523, "crop": "fill", "gravity": "face", "effect": "blur:100"},
        {"effect": "brightness:-30"},
        {
            "overlay": {"url": overlay_url},
            "width": 200,
            "height": 200,
            "crop": "limit",
            "gravity": "south_east",
            "x": 40,
            "y": 40,
            "opacity": 90,
        },
    ]


@dataclass
class FrameRequest:
    fid: int | None
    input_text: str = ""
    button_index: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> FrameRequest:
        """Parse a Frame callback body.

        Accepts the raw JSON text (str or bytes) or an already decoded mapping.
        Fields are not validated; a body without ``untrustedData`` raises.
        """
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8")
        if isinstance(payload, str):
            payload = json.loads(payload)
        untrusted = payload["untrustedData"]
        return cls(
            fid=untrusted.get("fid"),
            input_text=untrusted.get("inputText") or "",
            button_index=untrusted.get("buttonIndex"),
        )

    @property
    def is_reset(self) -> bool:
        return self.button_index == RESET_BUTTON_INDEX


@dataclass
class Profile:
    picture_url: str


@dataclass
class ExtractedTopic:
    token: str

    @property
    def domain(self) -> str:
        return f"{self.token.lower()}.com"


@dataclass
class LogoReference:
    url: str
    is_fallback: bool = False


@dataclass
class CompositeImageRequest:
    base_image_url: str
    overlay_image_url: str
    transformation: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def for_cover(cls, base_image_url: str, overlay_image_url: str) -> CompositeImageRequest:
        """Blurred, darkened 1000x523 background with the logo in the bottom-right corner."""
        return cls(
            base_image_url=base_image_url,
            overlay_image_url=overlay_image_url,
            transformation=_default_transformation(overlay_image_url),
        )


@dataclass
class CoverResult:
    profile: Profile
    topic: ExtractedTopic
    logo: LogoReference
    image_url: str


@dataclass
class FrameResponse:
    body: str
    state: FrameState = FrameState.INITIAL
    status: int = 200
    headers: dict[str, str] = field(default_factory=lambda: dict(HTML_HEADERS))
