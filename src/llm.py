import certifi
import ssl
import httpx
from typing import Optional
from langchain_openai import OpenAI
from settings import settings

def build_http_client() -> httpx.AsyncClient:
    """Outbound client with a certifi-backed SSL context; the caller owns and closes it."""
    ca_certs = certifi.where()
    ssl_context = ssl.create_default_context(cafile=ca_certs)
    return httpx.AsyncClient(verify=ssl_context, timeout=settings.request_timeout)

def build_completion_llm(
    openai_api_key: Optional[str] = None,
    model_name: Optional[str] = None,
    base_url: Optional[str] = None,
    http_async_client: Optional[httpx.AsyncClient] = None,
) -> OpenAI:
    # --- Decide which authentication method to use ---
    if settings.openai_subscription_key:
        # Use API Key in header
        default_headers = {"Ocp-Apim-Subscription-Key": settings.openai_subscription_key}
    else:
        default_headers = None

    return OpenAI(
        model=model_name or settings.model_name,
        api_key=openai_api_key or settings.openai_api_key or settings.openai_subscription_key,
        base_url=base_url or settings.openai_base_url,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.request_timeout,
        # None lets the OpenAI SDK create and manage its own client
        http_async_client=http_async_client,
        default_headers=default_headers,
    )
