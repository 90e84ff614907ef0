"""Client for the external AI ingredient aggregation service."""

import asyncio
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mealplanner.config import get_settings
from mealplanner.logging_config import get_logger
from mealplanner.normalize.aggregate import AggregatedItem, capitalize_first
from mealplanner.normalize.units import normalize_unit

logger = get_logger(__name__)


class AggregationServiceError(Exception):
    """Raised when the AI aggregation service is unavailable or misbehaves."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class AIAggregatedItem(BaseModel):
    """One merged ingredient as returned by the AI service."""

    name: str = Field(min_length=1)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = None
    original_items: list[str] = Field(default_factory=list, alias="originalItems")

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    def to_aggregated_item(self) -> AggregatedItem:
        """Convert to the local aggregator's shape: capitalized name and canonical unit."""
        return AggregatedItem(
            name=capitalize_first(self.name),
            quantity=self.quantity,
            unit=normalize_unit(self.unit) if self.unit else None,
        )


class AIAggregationResponse(BaseModel):
    items: list[AIAggregatedItem]


class AIAggregationClient:
    """
    Sends raw ingredient lines to a semantic aggregation endpoint.

    The service merges lines that mean the same thing ("chicken breast" and
    "boneless chicken breast") and answers in the same shape as the local
    aggregator, so either result can be saved as the generated list.
    """

    MAX_RETRIES = 2
    BACKOFF_BASE = 0.5
    BACKOFF_MAX = 5

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        settings = get_settings()
        self.url = url if url is not None else settings.ai_aggregation_url
        self.api_key = api_key if api_key is not None else settings.ai_aggregation_api_key
        self.timeout = timeout or settings.ai_aggregation_timeout
        self.max_retries = max_retries or settings.ai_aggregation_max_retries or self.MAX_RETRIES
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {
                "Accept": "application/json",
                "User-Agent": "Mealplanner/1.0",
            }
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), headers=headers)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AIAggregationClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        """POST with retry on transient transport errors."""
        client = await self._get_client()

        @retry(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.BACKOFF_BASE, max=self.BACKOFF_MAX),
            reraise=True,
        )
        async def _do_request() -> httpx.Response:
            return await client.post(self.url, json=payload)

        try:
            return await _do_request()
        except (RetryError, httpx.HTTPError) as e:
            logger.error(f"AI aggregation request failed after {self.max_retries} attempts: {e}")
            raise AggregationServiceError(
                f"Request failed after {self.max_retries} attempts",
                response=str(e),
            ) from e

    def _parse_response(self, response: httpx.Response) -> list[AggregatedItem]:
        if response.status_code >= 400:
            error_detail = response.text[:500] if response.text else "No details"
            logger.error(f"AI aggregation error {response.status_code}: {error_detail}")
            raise AggregationServiceError(
                f"AI aggregation failed with status {response.status_code}",
                status_code=response.status_code,
                response=error_detail,
            )

        try:
            parsed = AIAggregationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AggregationServiceError(
                "Malformed AI aggregation response",
                status_code=response.status_code,
                response=response.text[:500],
            ) from e

        return [item.to_aggregated_item() for item in parsed.items]

    async def aggregate(self, lines: list[str]) -> list[AggregatedItem]:
        """
        Aggregate ingredient lines through the AI service.

        Raises:
            AggregationServiceError: if the service is not configured, fails,
                times out, or returns an unusable payload.
        """
        if not self.is_configured:
            raise AggregationServiceError("AI aggregation is not configured")

        logger.info(f"Requesting AI aggregation for {len(lines)} ingredient lines")

        try:
            response = await asyncio.wait_for(
                self._post({"ingredients": lines}),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise AggregationServiceError(
                f"AI aggregation timed out after {self.timeout}s"
            ) from e

        items = self._parse_response(response)
        logger.info(f"AI aggregation returned {len(items)} items")
        return items
