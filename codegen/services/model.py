from langchain.chat_models import init_chat_model
from langchain_core.rate_limiters import InMemoryRateLimiter

from codegen.config import get_settings

rate_limiter = InMemoryRateLimiter(
    requests_per_second=2,
    check_every_n_seconds=0.1,
    max_bucket_size=20,
)


def get_model(api_key: str, model: str):
    """Create a Gemini chat model that answers in JSON."""
    settings = get_settings()

    return init_chat_model(
        model=f"google_genai:{model}",
        google_api_key=api_key,
        response_mime_type="application/json",
        rate_limiter=rate_limiter,
        max_retries=settings.generation_max_retries,
    )
