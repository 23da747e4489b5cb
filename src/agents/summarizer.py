# src/agents/summarizer.py
import logging
from typing import Dict, Any, Optional

import httpx
import openai
from langchain_core.outputs import LLMResult

from agents.base import Agent
from errors import ServiceError
from llm import build_completion_llm
from models import SummaryChoice, SummaryResponse
from settings import settings

logger = logging.getLogger(__name__)


def to_summary_response(result: LLMResult) -> SummaryResponse:
    """Shape a completion result like the upstream completions payload: {"choices": [{"text": ...}]}."""
    generations = result.generations[0] if result.generations else []
    llm_output = result.llm_output or {}
    return SummaryResponse(
        choices=[
            # generation_info carries finish_reason and logprobs
            SummaryChoice(**{**(g.generation_info or {}), "text": g.text, "index": i})
            for i, g in enumerate(generations)
        ],
        model=llm_output.get("model_name"),
        usage=llm_output.get("token_usage"),
    )


class SummarizerAgent(Agent):
    name = "summarizer"
    description = "Rewrites text as a short summary a young reader can follow"

    def __init__(self, llm=None, http_client: Optional[httpx.AsyncClient] = None):
        self._llm = llm
        self.http_client = http_client

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        summary = await self.summarize(context.get("text") or "")
        return summary.model_dump(exclude_none=True)

    async def summarize(self, text: str, prompt_template: Optional[str] = None) -> SummaryResponse:
        prompt = (prompt_template or settings.summary_prompt).format(text=text)
        logger.info("Summarizing %d chars", len(text))
        try:
            if self._llm is None:
                self._llm = build_completion_llm(http_async_client=self.http_client)
            result = await self._llm.agenerate([prompt])
        except (openai.OpenAIError, httpx.HTTPError) as exc:
            status_code = getattr(exc, "status_code", None)
            logger.error("Completion request failed: %s", exc)
            raise ServiceError(f"Completion request failed: {exc}", status_code=status_code) from exc
        return to_summary_response(result)
