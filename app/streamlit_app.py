"""Local preview for the Frame cover generator.

Runs the same button-press flow the serverless handler runs, against the
services configured in the environment (or .env), and shows every step:
profile picture, extracted topic, logo, composite image and the Frame markup.

    streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.frame_builder import build_share_url, render_initial_frame, render_result_frame
from core.models import FrameRequest
from core.pipeline import FrameServices, generate_cover_image
from core.settings import Settings, configure_logging

settings = Settings.from_env()
configure_logging(settings)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Frame Cover Preview", layout="wide")


@st.cache_resource
def get_services() -> FrameServices:
    return FrameServices.from_settings(settings)


def credential_status() -> dict[str, bool]:
    return {
        "Neynar": bool(settings.neynar_api_key),
        "Gemini": bool(settings.gemini_api_key),
        "Cloudinary": bool(settings.cloudinary_cloud_name and settings.cloudinary_api_secret),
    }


with st.sidebar:
    st.markdown("### Credentials")
    for name, ok in credential_status().items():
        st.caption(f"{name}: {'configured' if ok else 'missing'}")
    st.caption(f"Gemini model: {settings.gemini_model}")

st.title("Frame Cover Preview")

tab_generate, tab_initial = st.tabs(["Generate", "Initial Frame"])

with tab_generate:
    fid = st.number_input("Farcaster fid", min_value=1, value=3, step=1)
    input_text = st.text_area("Cast text", placeholder="I love Vercel deployments")

    if st.button("Generate Image!", type="primary"):
        request = FrameRequest(fid=int(fid), input_text=input_text, button_index=1)
        try:
            with st.spinner("Calling Neynar, Gemini, Clearbit and Cloudinary..."):
                services = get_services()
                result = generate_cover_image(request, services)
        except Exception as e:
            logger.exception("Preview generation failed")
            st.error(f"Generation failed: {e}")
        else:
            col_pfp, col_logo = st.columns(2)
            with col_pfp:
                st.markdown("**Profile picture**")
                st.image(result.profile.picture_url, width=200)
            with col_logo:
                label = "fallback" if result.logo.is_fallback else result.topic.domain
                st.markdown(f"**Logo** ({label})")
                st.image(result.logo.url, width=200)

            st.markdown(f"**Topic:** `{result.topic.token or '(empty)'}`")
            st.image(result.image_url, caption="Composite", width="stretch")
            st.markdown(f"[Share link]({build_share_url(result.image_url)})")

            with st.expander("Result Frame HTML"):
                st.code(render_result_frame(result.image_url), language="html")

with tab_initial:
    st.code(render_initial_frame(), language="html")
