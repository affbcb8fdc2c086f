import json
import logging
from typing import Optional

from casual_llm import LLMProvider, SystemMessage, UserMessage
from pydantic import ValidationError

from chauffeur_memory.models import BookingDetails, ProfileDelta, StructuredProfile
from chauffeur_memory.synthesis.prompts import (
    BOOKING_EXTRACTION_PROMPT,
    PROFILE_EXTRACTION_PROMPT,
)
from chauffeur_memory.utils.json_utils import parse_json_response

logger = logging.getLogger(__name__)


class ProfileDeltaExtracter:
    """Proposes profile additions from one client/concierge exchange."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        temperature: float = 0.3,
        max_tokens: int = 500,
        prompt: str = PROFILE_EXTRACTION_PROMPT,
    ):
        self.llm_provider = llm_provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.prompt = prompt

    async def extract(
        self, profile: StructuredProfile, user_message: str, reply_text: str
    ) -> Optional[ProfileDelta]:
        """
        Ask the model what the exchange adds to the profile.

        Args:
            profile: Current profile, shown to the model so it proposes only new facts
            user_message: What the client wrote
            reply_text: What the concierge answered

        Returns:
            The proposed delta, or None if the completion failed or its output
            was not a valid delta
        """
        system_prompt = self.prompt.format(
            summary=profile.summary,
            preferences=json.dumps(profile.preferences),
            notes=json.dumps(profile.notes),
        )
        messages = [
            SystemMessage(content=system_prompt),
            UserMessage(content=f"Client: {user_message}\nAI: {reply_text}"),
        ]

        try:
            response = await self.llm_provider.chat(
                messages,
                response_format="json",
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            data = parse_json_response(response.content)
            delta = ProfileDelta.model_validate(data)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse profile extraction JSON: {e}")
            return None
        except ValidationError as e:
            logger.warning(f"Profile extraction returned an invalid delta: {e}")
            return None
        except Exception as e:
            logger.error(f"Profile extraction LLM failed: {e}")
            return None

        logger.debug(
            f"Extracted {len(delta.new_preferences)} preferences, {len(delta.new_notes)} notes, "
            f"summary {'updated' if delta.updated_summary else 'unchanged'}"
        )
        return delta


class BookingDetailsExtracter:
    """Pulls pickup, dropoff, time and special requests out of a ride request."""

    def __init__(self, llm_provider: LLMProvider, temperature: float = 0.2):
        self.llm_provider = llm_provider
        self.temperature = temperature

    async def extract(self, text: str) -> Optional[BookingDetails]:
        messages = [
            SystemMessage(content=BOOKING_EXTRACTION_PROMPT),
            UserMessage(content=text),
        ]

        try:
            response = await self.llm_provider.chat(
                messages, response_format="json", temperature=self.temperature
            )
            data = parse_json_response(response.content)
            if not data:
                return None
            details = BookingDetails.model_validate(data)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse booking extraction JSON: {e}")
            return None
        except ValidationError as e:
            logger.warning(f"Booking extraction returned invalid details: {e}")
            return None
        except Exception as e:
            logger.error(f"Booking extraction LLM failed: {e}")
            return None

        if not any(details.model_dump().values()):
            return None
        return details
