from __future__ import annotations
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping

from agents.base import Agent
from errors import ExtractionError, MalformedResponseError, ServiceError
from models import ExplainResult, ExplainStatus, PageKind, SummaryResponse
from utils import is_wikipedia_url, is_youtube_url

logger = logging.getLogger(__name__)

Summarize = Callable[[str], Awaitable[SummaryResponse]]

SUBMIT_LABELS = {
    PageKind.YOUTUBE: "Parse YouTube transcript",
    PageKind.WIKIPEDIA: "Parse Wikipedia article",
    PageKind.SELECTION: "Parse from text selection",
}


def detect_page_kind(url: str | None) -> PageKind:
    if is_youtube_url(url):
        return PageKind.YOUTUBE
    if is_wikipedia_url(url):
        return PageKind.WIKIPEDIA
    return PageKind.SELECTION


def submit_label(url: str | None) -> str:
    return SUBMIT_LABELS[detect_page_kind(url)]


class PageDispatcher:
    """
    Runs one extract-then-summarize interaction.
    The extractor for each page kind and the summarize coroutine are supplied
    by the caller, so nothing here depends on a live page or a running relay.
    """

    def __init__(self, handlers: Mapping[PageKind, Agent], summarize: Summarize):
        missing = [kind.value for kind in PageKind if kind not in handlers]
        if missing:
            raise ValueError(f"No handler registered for: {', '.join(missing)}")
        self.handlers = dict(handlers)
        self.summarize = summarize

    async def submit(self, context: Dict[str, Any]) -> ExplainResult:
        kind = detect_page_kind(context.get("url"))
        try:
            extraction = await self.handlers[kind].run(context)
        except ExtractionError as exc:
            logger.warning("%s extraction failed: %s", kind.value, exc)
            return ExplainResult(kind=kind, status=ExplainStatus.PARSING_FAILED, error=str(exc))

        if not extraction.text:
            return ExplainResult(kind=kind, status=ExplainStatus.EMPTY)

        try:
            summary = (await self.summarize(extraction.text)).text
        except (ServiceError, MalformedResponseError) as exc:
            # the source text is still worth showing
            logger.warning("Summarization failed: %s", exc)
            return ExplainResult(
                kind=kind,
                status=ExplainStatus.SUMMARY_FAILED,
                source=extraction.text,
                segments=extraction.segments,
                error=str(exc),
            )

        return ExplainResult(
            kind=kind,
            status=ExplainStatus.OK,
            source=extraction.text,
            segments=extraction.segments,
            summary=summary,
        )
