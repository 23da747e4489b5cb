import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from errors import MalformedResponseError, ServiceError
from models import SummaryResponse
from settings import settings
from utils import normalize_url

logger = logging.getLogger(__name__)


class SummaryClient:
    """Calls a running relay's POST /summarize. One request per call: no retries, no caching."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = normalize_url(base_url or settings.relay_url)
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = client

    async def summarize(self, text: str) -> SummaryResponse:
        if self._client is not None:
            return await self._post(self._client, text)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._post(client, text)

    async def _post(self, client: httpx.AsyncClient, text: str) -> SummaryResponse:
        url = f"{self.base_url}/summarize"
        try:
            resp = await client.post(
                url,
                json={"text": text},
                headers={"Content-type": "application/json; charset=UTF-8"},
            )
        except httpx.HTTPError as exc:
            raise ServiceError(f"Summarization request to {url} failed: {exc}") from exc

        if not resp.is_success:
            logger.warning("Relay answered %s: %s", resp.status_code, resp.text[:200])
            raise ServiceError(
                f"Summarization service answered {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return SummaryResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise MalformedResponseError(f"Unexpected summarization response: {exc}") from exc
