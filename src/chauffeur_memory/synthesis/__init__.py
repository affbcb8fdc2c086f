"""
Context synthesis: profile and memory rendering, extraction, and the
concierge reply loop.
"""

from chauffeur_memory.synthesis.context import render_profile_context, render_semantic_context
from chauffeur_memory.synthesis.extractors import BookingDetailsExtracter, ProfileDeltaExtracter
from chauffeur_memory.synthesis.prompts import (
    BOOKING_EXTRACTION_PROMPT,
    CONCIERGE_REPLY_PROMPT,
    PROFILE_EXTRACTION_PROMPT,
)
from chauffeur_memory.synthesis.synthesizer import (
    APOLOGY_REPLY,
    ContextSynthesizer,
    apply_profile_delta,
    build_completion_provider,
    build_message_store,
)

__all__ = [
    "ContextSynthesizer",
    "ProfileDeltaExtracter",
    "BookingDetailsExtracter",
    "apply_profile_delta",
    "build_completion_provider",
    "build_message_store",
    "render_profile_context",
    "render_semantic_context",
    "APOLOGY_REPLY",
    # Prompts
    "CONCIERGE_REPLY_PROMPT",
    "PROFILE_EXTRACTION_PROMPT",
    "BOOKING_EXTRACTION_PROMPT",
]
