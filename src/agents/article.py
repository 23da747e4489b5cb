# src/agents/article.py
import logging
import re
from typing import Any, Dict, Optional

import httpx
from bs4 import BeautifulSoup, Tag

from agents.base import Agent
from errors import ExtractionError
from models import Extraction, PageKind
from utils import fetch_text

logger = logging.getLogger(__name__)

ARTICLE_CONTAINER = "#bodyContent"

SELECTORS_TO_REMOVE = [
    "style",
    "noscript",
    "script",
    ".reflist",
    "#toc",
    "table.sidebar",
    '[style*="display:none"]',
    '[style*="display: none"]',
    ".printfooter",
    "#siteSub",
    ".mw-jump-link",
    ".hatnote",
    "#mw-normal-catlinks",
    "#mw-hidden-catlinks",
]

TRAILING_SECTIONS = re.compile(
    r"^(See also|References|Conferences|Journals|Software|Sources|Further reading|External links)",
    re.MULTILINE,
)

MARKERS = re.compile(r"\[edit\]|\[[0-9]+\]")


def remove_unused_tags(root: Tag) -> None:
    for selector in SELECTORS_TO_REMOVE:
        for el in root.select(selector):
            # nested matches go away with their ancestor
            if not el.decomposed:
                el.decompose()


def _is_section_heading(el: Tag) -> bool:
    return el.name == "h2" or (el.name == "div" and "mw-heading2" in (el.get("class") or []))


def remove_trailing_sections(root: Tag) -> None:
    """Drop boilerplate sections (references, external links...) wherever they appear."""
    for heading in root.find_all("h2"):
        if heading.decomposed:
            continue
        if not TRAILING_SECTIONS.search(heading.get_text().strip()):
            continue

        # newer skins wrap the heading and its edit link in <div class="mw-heading">
        anchor = heading
        if heading.parent is not None and _is_section_heading(heading.parent):
            anchor = heading.parent

        sibling = anchor.find_next_sibling()
        while sibling is not None and not _is_section_heading(sibling):
            following = sibling.find_next_sibling()
            sibling.decompose()
            sibling = following
        anchor.decompose()


def cleanup_text(text: str) -> str:
    return MARKERS.sub("", text).strip()


def clean_article(container: Tag) -> str:
    """Readable prose of an article's content container. The container itself is left untouched."""
    root = BeautifulSoup(container.decode_contents(), "html.parser")
    remove_unused_tags(root)
    remove_trailing_sections(root)
    return cleanup_text(root.get_text())


def parse_article(html: str) -> str:
    page = BeautifulSoup(html, "html.parser")
    container = page.select_one(ARTICLE_CONTAINER)
    if container is None:
        raise ExtractionError(f"Article has no {ARTICLE_CONTAINER} container")
    return clean_article(container)


class ArticleAgent(Agent):
    name = "article"
    description = "Extracts the prose of a Wikipedia article"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client

    async def run(self, context: Dict[str, Any]) -> Extraction:
        html = context.get("html")
        if not html:
            url = (context.get("url") or "").strip()
            if self.client is None or not url:
                raise ExtractionError("No article HTML was provided")
            html = await fetch_text(self.client, url)
        text = parse_article(html)
        logger.debug("Article text: %d chars", len(text))
        return Extraction(kind=PageKind.WIKIPEDIA, text=text)
