"""
MedDent API - Typed site configuration

The settings collection accepts any JSON per key. The public site reads it
through this schema: every key the frontend uses is declared with a type
and a default, so a mistyped value degrades to the default instead of
reaching the page.
"""

import logging
from typing import Annotated, Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, StringConstraints, ValidationError

logger = logging.getLogger("site_config")

HexColor = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")]


class SiteConfig(BaseModel):
    # Colors
    primary_color: HexColor = "#2563eb"
    secondary_color: HexColor = "#dc2626"
    accent_color: HexColor = "#0891b2"
    hero_oval_frame_border_color: HexColor = "#2563eb"

    # Fonts / branding
    font_family: str = "Inter"
    site_logo: Optional[str] = None
    tooth_icon_url: Optional[str] = None

    # Hero
    hero_subtitle_uz: str = ""
    hero_subtitle_ru: str = ""
    hero_subtitle_white_words_uz: str = ""
    hero_subtitle_white_words_ru: str = ""

    # Offer countdown
    offer_enabled: bool = False
    offer_hours: float = 24
    countdown_expiry_text: str = ""
    countdown_expiry_text_size: float = 16
    countdown_expiry_text_weight: float = 600
    countdown_glow_color: HexColor = "#2563eb"
    countdown_glow_intensity: float = 0.5
    countdown_glow_text: bool = False

    # Hero image edge blending
    edge_blend_enabled: bool = False
    edge_blend_side: str = "left"
    edge_blend_width: float = 0


def build_site_config(raw: Dict[str, Any]) -> Tuple[SiteConfig, List[str]]:
    """
    Validate stored settings against SiteConfig field by field.
    Returns the config and the keys whose stored value was rejected.
    Unknown keys are ignored.
    """
    values = {}
    rejected = []

    for name in SiteConfig.model_fields:
        if name not in raw or raw[name] is None:
            continue
        try:
            values[name] = getattr(SiteConfig.model_validate({name: raw[name]}), name)
        except ValidationError:
            rejected.append(name)
            logger.warning(f"[SITE_CONFIG] Invalid value for '{name}': {raw[name]!r}, using default")

    return SiteConfig(**values), rejected
