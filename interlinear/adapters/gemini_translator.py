# interlinear/adapters/gemini_translator.py
import json
import re
from typing import Optional

import google.generativeai as genai
import structlog
from pydantic import ValidationError

from interlinear.core.domain.exceptions import TranslationFailedError
from interlinear.core.domain.models import TranslationRequest, TranslationResponse
from interlinear.shared.resilience import CircuitBreaker, get_circuit_breaker
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

SYSTEM_PROMPT = """You are a translator specialised in biblical and theological terms.
Translate the given lexicon entry from English into Brazilian Portuguese, accurately and clearly.
Keep established theological terminology where appropriate.
Reply ONLY with the translation as JSON:
{"word": "translated gloss", "definition": "translated definition", "usage": "translated usage"}"""

# First {...} object in the reply; models sometimes wrap it in prose or fences
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_translation(strongs_id: str, reply: str) -> TranslationResponse:
    match = _JSON_OBJECT_RE.search(reply or "")
    if not match:
        raise TranslationFailedError(strongs_id, "no JSON object in model reply")
    try:
        return TranslationResponse.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as e:
        raise TranslationFailedError(strongs_id, f"unparseable model reply: {e}") from e


class GeminiTranslator:
    """
    Driven Adapter for Google Gemini.
    Without an API key the adapter stays disabled and every call fails fast.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "gemini-1.5-flash",
        breaker: Optional[CircuitBreaker] = None,
    ):
        self.model = None
        self.breaker = breaker or get_circuit_breaker("gemini")

        if not api_key:
            logger.warning("llm_init_skipped", msg="No Google API Key found. Translation is disabled.")
            return

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name, system_instruction=SYSTEM_PROMPT)

    async def translate(self, strongs_id: str, request: TranslationRequest) -> TranslationResponse:
        if self.model is None:
            raise TranslationFailedError(strongs_id, "no Google API Key configured")
        return await self.breaker.a_call(self._generate, strongs_id, request)

    async def _generate(self, strongs_id: str, request: TranslationRequest) -> TranslationResponse:
        prompt = (
            f"Word: {request.word or 'N/A'}\n\n"
            f"Definition: {request.definition or 'N/A'}\n\n"
            f"Usage: {request.usage or 'N/A'}"
        )
        with tracer.start_as_current_span("gemini.translate") as span:
            span.set_attribute("strongs.id", strongs_id)
            try:
                response = await self.model.generate_content_async(prompt)
            except Exception as e:
                if "429" in str(e):
                    raise TranslationFailedError(strongs_id, "Gemini quota exceeded") from e
                raise
            return extract_translation(strongs_id, response.text)

    async def close(self) -> None:
        return None
