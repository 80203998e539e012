"""Renders the Frame HTML documents served to Farcaster clients."""

from __future__ import annotations

import html
import logging
from urllib.parse import quote

from prompts.templates import (
    DEFAULT_MESSAGE,
    INITIAL_FRAME,
    INITIAL_IMAGE_URL,
    INPUT_PLACEHOLDER,
    RESULT_FRAME,
    SHARE_COMPOSE_URL,
)

logger = logging.getLogger(__name__)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)


def build_share_url(image_url: str) -> str:
    """Compose deep link that embeds the generated image in a new cast.

    The image URL is percent-encoded whole so its own query string and
    escapes survive as part of the ``embeds[]`` value.
    """
    return f"{SHARE_COMPOSE_URL}{quote(image_url, safe='')}"


def render_initial_frame(message: str = DEFAULT_MESSAGE) -> str:
    """Build the landing Frame with the text input and the generate button."""
    return INITIAL_FRAME.substitute(
        image_url=_attr(INITIAL_IMAGE_URL),
        placeholder=_attr(INPUT_PLACEHOLDER),
        message=html.escape(message),
    )


def render_result_frame(image_url: str) -> str:
    """Build the Frame showing the composite image with share and reset buttons."""
    document = RESULT_FRAME.substitute(
        image_url=_attr(image_url),
        share_url=_attr(build_share_url(image_url)),
    )
    logger.debug("Rendered result frame for %s", image_url)
    return document
