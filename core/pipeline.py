"""Button-press flow: profile picture, topic, logo, composite, Frame document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from core.frame_builder import render_initial_frame, render_result_frame
from core.gemini_topic import GeminiTopicExtractor
from core.models import (
    CompositeImageRequest,
    CoverResult,
    FrameRequest,
    FrameResponse,
    FrameState,
)
from core.providers import (
    ClearbitLogoProvider,
    CloudinaryComposer,
    ImageComposer,
    LogoProvider,
    NeynarProfileProvider,
    ProfileProvider,
    TopicExtractor,
)
from core.settings import Settings
from prompts.templates import APOLOGY_MESSAGE

logger = logging.getLogger(__name__)

ERROR_STATUS = 500


@dataclass
class FrameServices:
    profiles: ProfileProvider
    topics: TopicExtractor
    logos: LogoProvider
    composer: ImageComposer

    @classmethod
    def from_settings(cls, settings: Settings) -> FrameServices:
        """Build the production service handles."""
        return cls(
            profiles=NeynarProfileProvider(api_key=settings.neynar_api_key),
            topics=GeminiTopicExtractor(
                api_key=settings.gemini_api_key, model=settings.gemini_model
            ),
            logos=ClearbitLogoProvider(),
            composer=CloudinaryComposer(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
            ),
        )


ServicesFactory = Callable[[], FrameServices]


def generate_cover_image(request: FrameRequest, services: FrameServices) -> CoverResult:
    """Run the four external steps in order and return every intermediate value.

    Each step blocks on the previous one. Only the logo lookup recovers from
    failure; any other exception aborts the whole sequence.
    """
    profile = services.profiles.fetch_profile(request.fid)
    topic = services.topics.extract(request.input_text)
    logo = services.logos.find_logo(topic)

    composite = CompositeImageRequest.for_cover(profile.picture_url, logo.url)
    image_url = services.composer.compose(composite)

    return CoverResult(profile=profile, topic=topic, logo=logo, image_url=image_url)


def handle_button_press(request: FrameRequest, services_factory: ServicesFactory) -> FrameResponse:
    if request.is_reset:
        logger.info("Reset pressed by fid=%s", request.fid)
        return FrameResponse(body=render_initial_frame())

    logger.info("Generate pressed by fid=%s (button=%s)", request.fid, request.button_index)
    result = generate_cover_image(request, services_factory())
    return FrameResponse(body=render_result_frame(result.image_url), state=FrameState.RESULT)


def handle_frame_request(
    method: str,
    body: Any,
    services_factory: ServicesFactory,
) -> FrameResponse:
    """Route a Frame callback.

    Anything other than POST gets the initial Frame. A failed POST also gets the
    initial Frame, carrying the apology message and a 500 status; the failure
    detail only goes to the server log.
    """
    if (method or "").upper() != "POST":
        return FrameResponse(body=render_initial_frame())

    try:
        request = FrameRequest.from_payload(body)
        return handle_button_press(request, services_factory)
    except Exception:
        logger.exception("Frame request failed")
        return FrameResponse(body=render_initial_frame(APOLOGY_MESSAGE), status=ERROR_STATUS)
