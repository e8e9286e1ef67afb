# =============================================================================
# media/fallbacks.py - Legacy Placeholder Compatibility Table
# =============================================================================
# Static placeholder_id -> public_id pairs for identifiers that predate the
# media_placeholder_links table. Consulted only when no persisted link exists.
#
# The resolver receives this table as a constructor argument; tests pass
# their own mapping.
# =============================================================================

from types import MappingProxyType
from typing import Mapping

DEFAULT_FALLBACKS: Mapping[str, str] = MappingProxyType({
    # Page heroes from the first site build
    "homepage-hero": "homepage/hero-image",
    "about-hero": "about/hero-image",
    "contact-hero": "contact/hero-image",
    "hero-home": "hero/home-hero",
    "hero-about": "hero/about-hero",
    "hero-team": "hero/hero-team",
    "hero-gallery": "hero/gallery-hero",
    "hero-financing": "hero/financing-hero",
    "hero-reviews": "hero/reviews-hero",
    "hero-appointment": "hero/appointment-hero",
    "hero-out-of-town": "hero/1441-1401-avocado-avenue",
    "hero-plastic-surgery": "hero/plastic-surgery-hero",
    "hero-dermatology": "hero/dermatology-hero",
    "hero-medical-spa": "hero/medical-spa-hero",
    "hero-functional-medicine": "hero/functional-medicine-hero",
    "hero-injectables": "hero/injectables-hero",
    "hero-facial-treatments": "hero/facial-treatments-hero",
    "hero-skin-rejuvenation": "hero/skin-rejuvenation-hero",
    # Out-of-town partner hotels
    "pendry": "gallery/pnb-4-rest-bar-pendry-02-2175",
    "pelican-hill": "gallery/mw-pelican-bungalow-039-frev-cr4f-brightensheets-1200x520",
    "lido-house": "gallery/npbak-table-0065-hor-wide-web",
})
