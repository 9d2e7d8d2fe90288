# interlinear/adapters/http_translator.py
from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from interlinear.core.domain.exceptions import TranslationFailedError
from interlinear.core.domain.models import TranslationRequest, TranslationResponse
from interlinear.shared.resilience import CircuitBreaker, get_circuit_breaker

logger = structlog.get_logger()


class HttpTranslator:
    """
    Driven Adapter: Calls the translate-strongs HTTP function.

    Request body:  {"strongs_id", "word", "definition", "usage"}
    Response body: {"word"?, "definition"?, "usage"?} or {"error": "..."}
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
        breaker: Optional[CircuitBreaker] = None,
    ):
        self.url = url
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self.client = client or httpx.AsyncClient(timeout=timeout, headers=headers)
        self.breaker = breaker or get_circuit_breaker("translator")

    async def translate(self, strongs_id: str, request: TranslationRequest) -> TranslationResponse:
        return await self.breaker.a_call(self._post, strongs_id, request)

    async def _post(self, strongs_id: str, request: TranslationRequest) -> TranslationResponse:
        payload = {"strongs_id": strongs_id, **request.model_dump()}
        response = await self.client.post(self.url, json=payload)

        if response.status_code == 429:
            raise TranslationFailedError(strongs_id, "rate limit exceeded")
        if response.status_code != 200:
            raise TranslationFailedError(strongs_id, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationFailedError(strongs_id, "response is not JSON") from e
        if not isinstance(data, dict):
            raise TranslationFailedError(strongs_id, "response is not a JSON object")
        if data.get("error"):
            raise TranslationFailedError(strongs_id, str(data["error"]))

        try:
            return TranslationResponse.model_validate(data)
        except ValidationError as e:
            raise TranslationFailedError(strongs_id, f"unexpected response shape: {e}") from e

    async def close(self) -> None:
        await self.client.aclose()
