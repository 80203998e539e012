"""Topic extraction from cast text using Google Gemini."""

from __future__ import annotations

import logging
import re

from core.models import ExtractedTopic
from core.providers import TopicExtractor
from core.settings import DEFAULT_GEMINI_MODEL, resolve_api_key
from prompts.templates import TOPIC_EXTRACTION_PROMPT

logger = logging.getLogger(__name__)

_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9\s-]")


def clean_topic(raw: str) -> str:
    """Reduce a model answer to its first space-delimited alphanumeric token.

    The answer is trimmed, stripped of everything outside letters, digits,
    whitespace and hyphens, then cut at the first space. The result may be empty.
    """
    return _DISALLOWED_CHARS.sub("", raw.strip()).split(" ")[0]


class GeminiTopicExtractor(TopicExtractor):
    """Asks Gemini for the most prominent brand or concept named in a piece of text."""

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_GEMINI_MODEL) -> None:
        self.api_key = resolve_api_key(api_key, "GEMINI_API_KEY", "GOOGLE_API_KEY")
        self.model = model
        self._client = None
        if not self.api_key:
            raise ValueError(
                "Gemini API key is required. Set GEMINI_API_KEY or pass api_key."
            )

    def _get_client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def build_prompt(self, text: str) -> str:
        return TOPIC_EXTRACTION_PROMPT.substitute(text=text)

    def extract(self, text: str) -> ExtractedTopic:
        client = self._get_client()

        response = client.models.generate_content(
            model=self.model,
            contents=self.build_prompt(text),
        )

        raw = response.text
        if raw is None:
            raise RuntimeError("Gemini returned no text; the prompt may have been blocked.")

        topic = ExtractedTopic(token=clean_topic(raw))
        logger.info("Extracted topic %r from %d chars of input", topic.token, len(text))
        return topic
