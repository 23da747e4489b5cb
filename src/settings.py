from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path

# Current directory (where this file is located)
curr_dir = Path(__file__).parent if "__file__" in globals() else Path.cwd()


class Settings(BaseSettings):
    """
    Centralized application configuration.
    Values are loaded automatically from environment variables or `.env` file.
    """

    # --- Server Settings ---
    host: str = "localhost"               # Default host
    port: int = 3000                      # Default port
    debug: bool = False                   # Debug logging + autoreload

    # --- CORS (Cross-Origin Resource Sharing) ---
    # Extension pages call in from chrome-extension:// origins
    allow_origins: List[str] = ["*"]

    # --- OpenAI ---
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    # API gateway key, sent as a header instead of a bearer token
    openai_subscription_key: Optional[str] = None

    # --- Completion Model ---
    model_name: str = "gpt-3.5-turbo-instruct"
    temperature: float = 0.7
    max_tokens: int = 300
    summary_prompt: str = "Summarize this for a second-grade student: {text}"

    # --- Relay client ---
    relay_url: str = "http://localhost:3000"

    # --- Outbound HTTP ---
    request_timeout: Optional[float] = 30.0  # None waits forever
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"

    class Config:
        """
        Pydantic Settings configuration:
        - Reads values from `.env` file in current directory
        - UTF-8 encoding for environment variables
        """
        env_file = curr_dir / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate settings so it can be imported directly
settings = Settings()
