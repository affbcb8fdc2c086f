"""
Rendering of the structured profile and recalled snippets into prompt text.
"""

from typing import List, Optional

from chauffeur_memory.models import Client, StructuredProfile
from chauffeur_memory.utils.time import format_date

NONE_RECORDED = "- None recorded yet"


def _bullets(values: List[str]) -> str:
    if not values:
        return NONE_RECORDED
    return "\n".join(f"- {value}" for value in values)


def render_profile_context(client: Client, profile: Optional[StructuredProfile]) -> str:
    """
    Render what the CRM knows about a client.

    Args:
        client: The client record
        profile: The client's structured profile, if one exists

    Returns:
        Multi-line text for the system prompt
    """
    if profile is None:
        return f"Client Name: {client.name}\nPhone: {client.phone}\nNo previous interaction history."

    last_interaction = (
        format_date(profile.last_interaction) if profile.last_interaction else "Never"
    )

    return "\n".join(
        [
            f"Client Name: {client.name}",
            f"Phone: {client.phone}",
            f"Email: {client.email or 'Not provided'}",
            "",
            f"Summary: {profile.summary or 'No summary available'}",
            "",
            "Preferences:",
            _bullets(profile.preferences),
            "",
            "Important Notes:",
            _bullets(profile.notes),
            "",
            f"Last Interaction: {last_interaction}",
        ]
    )


def render_semantic_context(snippets: List[str]) -> str:
    """Bulleted block of recalled memories, or an empty string when there are none."""
    if not snippets:
        return ""
    bullets = "\n".join(f"• {snippet}" for snippet in snippets)
    return f"\n**Relevant History (Semantic Search):**\n{bullets}"
