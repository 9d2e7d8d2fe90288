# interlinear/adapters/http_fetcher.py
from typing import Any, Optional

import httpx
import structlog

from interlinear.core.domain.exceptions import MalformedResourceError, ResourceUnavailableError
from interlinear.shared.resilience import resource_retrying
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class HttpResourceFetcher:
    """
    Driven Adapter: Fetches the static JSON documents from a web server.

    Transport failures are retried with backoff; HTTP errors (404 included)
    and undecodable bodies are final and surface as ResourceUnavailableError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        attempts: int = 3,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.attempts = attempts
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def fetch_json(self, path: str) -> Any:
        relative = path.lstrip("/")
        with tracer.start_as_current_span("http_fetcher.fetch_json") as span:
            span.set_attribute("resource.path", relative)

            try:
                async for attempt in resource_retrying(self.attempts):
                    with attempt:
                        response = await self.client.get(relative)
            except (httpx.TransportError, TimeoutError) as e:
                logger.error("resource_fetch_failed", path=relative, error=str(e))
                raise ResourceUnavailableError(relative, f"transport error: {e}") from e

            span.set_attribute("http.status_code", response.status_code)
            if response.status_code != 200:
                logger.warning("resource_fetch_status", path=relative, status=response.status_code)
                raise ResourceUnavailableError(relative, f"HTTP {response.status_code}")

            try:
                return response.json()
            except ValueError as e:
                raise MalformedResourceError(relative, f"invalid JSON: {e}") from e

    async def close(self) -> None:
        await self.client.aclose()
