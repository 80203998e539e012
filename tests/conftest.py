from html.parser import HTMLParser
from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.models import CompositeImageRequest, ExtractedTopic, LogoReference, Profile
from core.providers import ImageComposer, LogoProvider, ProfileProvider, TopicExtractor
from core.pipeline import FrameServices


class _MetaParser(HTMLParser):
    def __init__(self):
        super().__init__()
        self.meta = {}
        self.body = ""
        self._in_body = False

    def handle_starttag(self, tag, attrs):
        attrs = dict(attrs)
        if tag == "meta" and "property" in attrs:
            self.meta[attrs["property"]] = attrs.get("content")
        elif tag == "body":
            self._in_body = True

    def handle_endtag(self, tag):
        if tag == "body":
            self._in_body = False

    def handle_data(self, data):
        if self._in_body:
            self.body += data


def _parse_frame(document):
    parser = _MetaParser()
    parser.feed(document)
    return parser.meta, parser.body


@pytest.fixture
def parse_frame():
    """Return a parser yielding (meta properties, body text) for a Frame document."""
    return _parse_frame


class FakeProfiles(ProfileProvider):
    def __init__(self, picture_url="https://cdn.example.com/pfp.png", error=None):
        self.picture_url = picture_url
        self.error = error
        self.calls = []

    def fetch_profile(self, fid):
        self.calls.append(fid)
        if self.error:
            raise self.error
        return Profile(picture_url=self.picture_url)


class FakeTopics(TopicExtractor):
    def __init__(self, token="Vercel", error=None):
        self.token = token
        self.error = error
        self.calls = []

    def extract(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return ExtractedTopic(token=self.token)


class FakeLogos(LogoProvider):
    def __init__(self, url="https://logo.example.com/vercel.com", is_fallback=False):
        self.url = url
        self.is_fallback = is_fallback
        self.calls = []

    def find_logo(self, topic):
        self.calls.append(topic)
        return LogoReference(url=self.url, is_fallback=self.is_fallback)


class FakeComposer(ImageComposer):
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def compose(self, request: CompositeImageRequest):
        self.calls.append(request)
        if self.error:
            raise self.error
        return f"https://img.example.com/fetch/{request.overlay_image_url}/{request.base_image_url}"


@pytest.fixture
def services():
    return FrameServices(
        profiles=FakeProfiles(),
        topics=FakeTopics(),
        logos=FakeLogos(),
        composer=FakeComposer(),
    )
