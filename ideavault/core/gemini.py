"""Gemini client access: text generation and query embeddings."""

from functools import lru_cache
from typing import Any

from google import genai

from ideavault.core.config import get_settings
from ideavault.core.env_validator import is_placeholder
from ideavault.core.llm import with_retry
from ideavault.core.logging import get_logger
from ideavault.core.memory_store import get_embedding_cache, get_quota

logger = get_logger(__name__)

# Cache keys use only the head of the text
EMBEDDING_CACHE_KEY_CHARS = 100


def is_gemini_configured() -> bool:
    """True when a non-placeholder Gemini API key is present."""
    key = get_settings().GOOGLE_GEMINI_API_KEY
    return bool(key) and not is_placeholder(key)


@lru_cache(maxsize=1)
def get_gemini_client() -> genai.Client:
    """
    Get Gemini client instance (cached singleton).

    Raises:
        RuntimeError: If the API key is missing or a placeholder
    """
    if not is_gemini_configured():
        raise RuntimeError("Gemini API key not configured")
    return genai.Client(api_key=get_settings().GOOGLE_GEMINI_API_KEY)


async def generate_text(
    prompt: str,
    *,
    temperature: float = 0.7,
    max_output_tokens: int = 4096,
    top_k: int = 40,
    top_p: float = 0.95,
    model: str | None = None,
    label: str = "gemini",
) -> str:
    """
    Generate text with Gemini under the shared timeout/retry policy.

    Returns:
        Response text (possibly empty)

    Raises:
        RuntimeError: If Gemini is not configured
        TimeoutError: If every attempt timed out
        google.genai.errors.APIError: On non-retryable API errors
    """
    client = get_gemini_client()
    config: dict[str, Any] = {
        "temperature": temperature,
        "top_k": top_k,
        "top_p": top_p,
        "max_output_tokens": max_output_tokens,
    }

    response = await with_retry(
        lambda: client.aio.models.generate_content(
            model=model or get_settings().GEMINI_MODEL,
            contents=prompt,
            config=config,
        ),
        label=label,
    )
    return (response.text or "").strip()


async def embed_text(text: str) -> list[float]:
    """
    Embed a query string, reusing cached vectors for repeated inputs.

    Raises:
        RuntimeError: If Gemini is not configured, the hourly quota is spent,
            or the response carries no vector
    """
    cache = get_embedding_cache()
    cache_key = f"embedding_{text[:EMBEDDING_CACHE_KEY_CHARS]}"
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug("Using cached embedding")
        return cached

    quota = get_quota()
    if quota.is_exceeded("embeddings"):
        raise RuntimeError("Quota exceeded for embeddings")

    client = get_gemini_client()
    result = await with_retry(
        lambda: client.aio.models.embed_content(
            model=get_settings().GEMINI_EMBEDDING_MODEL,
            contents=text,
        ),
        label="embedding",
    )

    if not result.embeddings or not result.embeddings[0].values:
        raise RuntimeError("Invalid embedding response from Gemini")

    embedding = list(result.embeddings[0].values)
    cache.put(cache_key, embedding)
    quota.record("embeddings")
    return embedding
