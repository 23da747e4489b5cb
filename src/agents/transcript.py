# src/agents/transcript.py
from __future__ import annotations
import html
import json
import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from agents.base import Agent
from errors import ExtractionError, MalformedResponseError
from models import CaptionTrackReference, Extraction, PageKind, TranscriptSegment
from utils import fetch_text
from xml_tree import Many, as_list, xml_to_tree

logger = logging.getLogger(__name__)

# Returned instead of a segment list when the transcript could not be produced.
PARSING_FAILED = "PARSING_FAILED"

CAPTIONS_MARKER = '"captions":'
CAPTIONS_TERMINATOR = ',"videoDetails'


def extract_captions_json(raw_html: str) -> Dict[str, Any]:
    """
    Pull the player's captions object out of a watch page's raw HTML.
    The object sits between the `"captions":` key and the following
    `,"videoDetails` key of the embedded player response.
    """
    start = raw_html.find(CAPTIONS_MARKER)
    if start < 0:
        raise ExtractionError("Page has no captions block (captions may be disabled)")
    start += len(CAPTIONS_MARKER)
    end = raw_html.find(CAPTIONS_TERMINATOR, start)
    if end < 0:
        raise ExtractionError("Captions block is not followed by videoDetails")

    snippet = raw_html[start:end].replace("\n", "")
    try:
        data = json.loads(snippet)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Captions block is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponseError("Captions block is not a JSON object")
    return data


def parse_caption_tracks(raw_html: str) -> List[CaptionTrackReference]:
    captions = extract_captions_json(raw_html)
    logger.debug("Captions block: %s", captions)
    renderer = captions.get("playerCaptionsTracklistRenderer")
    if renderer is None:
        raise ExtractionError("Captions block has no caption track list")
    if not isinstance(renderer, dict):
        raise MalformedResponseError("playerCaptionsTracklistRenderer is not an object")
    tracks = renderer.get("captionTracks")
    if tracks is None:
        raise ExtractionError("Video has no caption tracks")
    if not isinstance(tracks, list):
        raise MalformedResponseError("captionTracks is not a list")
    refs = [
        CaptionTrackReference(base_url=t["baseUrl"])
        for t in tracks
        if isinstance(t, dict) and isinstance(t.get("baseUrl"), str)
    ]
    if not refs:
        raise ExtractionError("Video has no caption tracks")
    return refs


def _text_content(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Many):
        return "".join(_text_content(v) for v in value)
    if isinstance(value, dict):
        return _text_content(value.get("text"))
    return html.unescape(value)


def _seconds(entry: Dict[str, Any], key: str, default: Optional[float] = None) -> float:
    raw = entry.get(key)
    if raw is None:
        if default is None:
            raise MalformedResponseError(f"Caption entry is missing '{key}'")
        return default
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Caption entry has a non-numeric '{key}': {raw!r}") from exc


def parse_timed_text(xml_text: str) -> List[TranscriptSegment]:
    """Turn a timed-text document (<transcript><text start dur>...</text></transcript>) into segments."""
    tree = xml_to_tree(xml_text)
    transcript = tree.get("transcript") if isinstance(tree, dict) else None
    if not isinstance(transcript, dict):
        raise MalformedResponseError("Timed-text document has no <transcript> root")

    segments: List[TranscriptSegment] = []
    for entry in as_list(transcript.get("text")):
        if not isinstance(entry, dict):
            raise MalformedResponseError("Caption entry carries no timing attributes")
        segments.append(TranscriptSegment(
            text=_text_content(entry.get("text")),
            start=_seconds(entry, "start"),
            duration=_seconds(entry, "dur", default=0.0),
        ))
    return segments


async def fetch_transcript(url: str, client: httpx.AsyncClient) -> List[TranscriptSegment]:
    # The page is fetched again as raw text; the rendered DOM of a single-page
    # app can still belong to the previous video.
    raw_html = await fetch_text(client, url)
    track = parse_caption_tracks(raw_html)[0]
    xml_text = await fetch_text(client, track.base_url)
    return parse_timed_text(xml_text)


async def get_youtube_transcript(url: str, client: httpx.AsyncClient) -> Union[List[TranscriptSegment], str]:
    """Segments of the video's first caption track, or PARSING_FAILED."""
    try:
        return await fetch_transcript(url, client)
    except ExtractionError as exc:
        logger.warning("Transcript extraction failed for %s: %s", url, exc)
        return PARSING_FAILED


def transcript_to_text(segments: List[TranscriptSegment]) -> str:
    return " ".join(s.text for s in segments)


class TranscriptAgent(Agent):
    name = "transcript"
    description = "Extracts the caption transcript of a YouTube video"

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def run(self, context: Dict[str, Any]) -> Extraction:
        url = (context.get("url") or "").strip()
        result = await get_youtube_transcript(url, self.client)
        if result == PARSING_FAILED:
            raise ExtractionError("Could not parse the video transcript")
        return Extraction(kind=PageKind.YOUTUBE, text=transcript_to_text(result), segments=result)
