from typing import Any, Dict, Optional

from agents.base import Agent
from models import Extraction, PageKind


def get_selection_text(selection: Optional[str]) -> str:
    """Text the user had selected on the page, or "" when nothing is selected."""
    return selection or ""


class SelectionAgent(Agent):
    name = "selection"
    description = "Passes the user's text selection through as the source text"

    async def run(self, context: Dict[str, Any]) -> Extraction:
        return Extraction(kind=PageKind.SELECTION, text=get_selection_text(context.get("selection")))
