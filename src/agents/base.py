from typing import Any, Dict


class Agent:
    name: str = "base"
    description: str = "Base agent"

    async def run(self, context: Dict[str, Any]):
        raise NotImplementedError("Agent must implement run()")
