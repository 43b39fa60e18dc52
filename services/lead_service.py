from google import genai
from google.genai import types
from models.internal import CompanyProfile, Lead
from services.prompt_builder import build_prompt
from services.errors import BackendUnavailable, MalformedResponse, InvalidResponseShape
from config import settings
from pydantic import ValidationError as PydanticValidationError
from utils.text import truncate
from typing import List, Optional
import json
import logging

logger = logging.getLogger(__name__)


class GeminiBackend:
    """Sends one prompt to Gemini with search grounding and returns the raw text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        grounding_tool: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        self.client = genai.Client(api_key=api_key or settings.gemini_api_key)
        self.model = model or settings.gemini_model
        self.grounding_tool = grounding_tool or settings.grounding_tool
        self.temperature = settings.gemini_temperature if temperature is None else temperature

    def _tool(self) -> types.Tool:
        if self.grounding_tool == "google_maps":
            return types.Tool(google_maps=types.GoogleMaps())
        return types.Tool(google_search=types.GoogleSearch())

    async def generate(self, prompt: str) -> str:
        # No response_mime_type: JSON mode cannot be combined with grounding tools.
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                tools=[self._tool()],
                temperature=self.temperature,
            ),
        )
        text = response.text or ""
        finish = getattr(response.candidates[0], 'finish_reason', None) if response.candidates else None
        logger.info(f"Gemini response: {len(text)} chars, finish_reason={finish}")
        return text


def strip_fences(raw: str) -> str:
    """Remove one leading code fence line (```, ```json, ```JSON...) and one trailing ```."""
    text = raw.strip()
    if text.startswith("```"):
        if "\n" in text:
            text = text.split("\n", 1)[1]
        else:
            text = text[3:]
            if text[:4].lower() == "json":
                text = text[4:]
        if text.endswith("```"):
            text = text[:-3]
    return text.strip()


def parse_leads(raw: str) -> List[Lead]:
    text = strip_fences(raw)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Lead response is not valid JSON ({e}); first 200 chars: {truncate(text, 200)}")
        raise MalformedResponse(f"AI response could not be parsed as JSON: {e}") from e

    if not isinstance(parsed, list):
        logger.warning(f"Lead response is a {type(parsed).__name__}, expected a list")
        raise InvalidResponseShape("AI response is not a valid list of leads.")

    leads = []
    for i, item in enumerate(parsed):
        if not isinstance(item, dict):
            raise InvalidResponseShape(f"Lead #{i + 1} is not an object.")
        try:
            leads.append(Lead.model_validate(item))
        except PydanticValidationError as e:
            raise InvalidResponseShape(f"Lead #{i + 1} has an unexpected shape: {e}") from e
    return leads


class LeadServiceClient:
    """One profile in, a list of leads out. No retries."""

    def __init__(self, backend=None, lead_count: Optional[int] = None):
        self.backend = backend if backend is not None else GeminiBackend()
        self.lead_count = lead_count or settings.leads_per_profile

    async def search(self, profile: CompanyProfile) -> List[Lead]:
        prompt = build_prompt(profile, self.lead_count)
        logger.info(f"Requesting {self.lead_count} leads ({len(prompt)} char prompt, sector={profile.sector!r})")
        try:
            raw = await self.backend.generate(prompt)
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise BackendUnavailable(f"Failed to communicate with the Gemini API: {e}") from e
        leads = parse_leads(raw)
        logger.info(f"Parsed {len(leads)} leads")
        return leads
