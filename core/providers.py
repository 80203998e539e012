"""External service interfaces and their implementations.

Every provider makes a single attempt per call. Only the logo lookup recovers
from failure locally; everything else propagates to the request handler.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from core.models import (
    DEFAULT_LOGO_URL,
    DEFAULT_PFP_URL,
    CompositeImageRequest,
    ExtractedTopic,
    LogoReference,
    Profile,
)
from core.settings import resolve_api_key

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ProfileProvider(ABC):
    """Resolves a Farcaster user's profile picture."""

    @abstractmethod
    def fetch_profile(self, fid: int) -> Profile:
        ...


class TopicExtractor(ABC):
    """Extracts a single topic token from free text."""

    @abstractmethod
    def extract(self, text: str) -> ExtractedTopic:
        ...


class LogoProvider(ABC):
    """Finds a logo image for a topic."""

    @abstractmethod
    def find_logo(self, topic: ExtractedTopic) -> LogoReference:
        ...


class ImageComposer(ABC):
    """Turns a composite request into a final image URL."""

    @abstractmethod
    def compose(self, request: CompositeImageRequest) -> str:
        ...


class NeynarProfileProvider(ProfileProvider):
    """Neynar bulk-user lookup."""

    DEFAULT_BASE_URL = "https://api.neynar.com/v2"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = resolve_api_key(api_key, "NEYNAR_API_KEY")
        self.base_url = base_url or self.DEFAULT_BASE_URL
        self.timeout = timeout
        self._transport = transport
        if not self.api_key:
            raise ValueError("Neynar API key is required. Set NEYNAR_API_KEY or pass api_key.")

    def _headers(self) -> dict[str, str]:
        return {"accept": "application/json", "api_key": self.api_key}

    def fetch_users(self, fids: list[int]) -> list[dict]:
        """Fetch user records for a list of fids.

        See https://docs.neynar.com/reference/fetch-bulk-users
        """
        if not fids:
            return []
        params = {"fids": ",".join(str(fid) for fid in fids)}
        with httpx.Client(timeout=self.timeout, transport=self._transport) as http:
            resp = http.get(
                f"{self.base_url}/farcaster/user/bulk",
                params=params,
                headers=self._headers(),
            )
            resp.raise_for_status()
        return resp.json().get("users") or []

    def fetch_profile(self, fid: int) -> Profile:
        if fid is None:
            raise ValueError("fid is required to look up a profile picture.")

        users = self.fetch_users([fid])
        picture_url = (users[0].get("pfp_url") if users else None) or DEFAULT_PFP_URL
        if picture_url == DEFAULT_PFP_URL:
            logger.warning("No profile picture for fid=%s, using default", fid)
        else:
            logger.info("Profile picture for fid=%s: %s", fid, picture_url)
        return Profile(picture_url=picture_url)


class ClearbitLogoProvider(LogoProvider):
    """Probes the Clearbit logo-by-domain endpoint, falling back to a fixed logo."""

    DEFAULT_BASE_URL = "https://logo.clearbit.com"

    def __init__(
        self,
        base_url: str | None = None,
        fallback_url: str = DEFAULT_LOGO_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or self.DEFAULT_BASE_URL
        self.fallback_url = fallback_url
        self.timeout = timeout
        self._transport = transport

    def logo_url_for(self, topic: ExtractedTopic) -> str:
        return f"{self.base_url}/{topic.domain}"

    def find_logo(self, topic: ExtractedTopic) -> LogoReference:
        logo_url = self.logo_url_for(topic)
        try:
            with httpx.Client(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as http:
                resp = http.get(logo_url)
                resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Logo not found for %r (%s), using default logo", topic.domain, e)
            return LogoReference(url=self.fallback_url, is_fallback=True)

        logger.info("Logo found: %s", logo_url)
        return LogoReference(url=logo_url)


class CloudinaryComposer(ImageComposer):
    """Builds signed Cloudinary fetch URLs; no image bytes pass through this process."""

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
    ) -> None:
        self.cloud_name = resolve_api_key(cloud_name, "CLOUDINARY_CLOUD_NAME")
        self.api_key = resolve_api_key(api_key, "CLOUDINARY_API_KEY")
        self.api_secret = resolve_api_key(api_secret, "CLOUDINARY_API_SECRET")
        if not self.cloud_name or not self.api_secret:
            raise ValueError(
                "Cloudinary credentials are required. "
                "Set CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_SECRET or pass them."
            )

    def compose(self, request: CompositeImageRequest) -> str:
        from cloudinary.utils import cloudinary_url

        url, _ = cloudinary_url(
            request.base_image_url,
            type="fetch",
            transformation=request.transformation,
            sign_url=True,
            secure=True,
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
        )
        logger.info("Composite image URL: %s", url)
        return url
