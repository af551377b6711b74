import httpx
import logging
from dataclasses import dataclass
from typing import Optional
from brand_analyzer.config import settings
from brand_analyzer.services.html_utils import NOT_FOUND

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Rewrite and enhance the following website description to be more concise, "
    "engaging, and suitable for a short summary. Keep it under 150 characters if possible.\n"
    'Original description: "{description}"'
)
GENERATION_CONFIG = {"temperature": 0.7, "maxOutputTokens": 100}


@dataclass
class EnhancementResult:
    text: str
    enhanced: bool
    reason: Optional[str] = None


class GeminiEnhancer:
    """Best-effort rewrite of a description through the Gemini generateContent API.

    ``enhance`` never raises: on any failure the original text comes back with
    ``enhanced=False`` and the reason is logged.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 api_base: str | None = None, timeout: float | None = None,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.model = model or settings.GEMINI_MODEL
        self.api_base = (api_base or settings.GEMINI_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.ENHANCE_TIMEOUT_SECS
        self.transport = transport

    @classmethod
    def from_settings(cls, settings) -> "GeminiEnhancer":
        return cls(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL,
                   api_base=settings.GEMINI_API_BASE, timeout=settings.ENHANCE_TIMEOUT_SECS)

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_payload(self, description: str) -> dict:
        prompt = PROMPT_TEMPLATE.format(description=description)
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": dict(GENERATION_CONFIG),
        }

    @staticmethod
    def parse_response(data) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        candidates = data.get("candidates") or []
        if not candidates or not isinstance(candidates[0], dict):
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts or not isinstance(parts[0], dict):
            return None
        text = parts[0].get("text")
        if not isinstance(text, str):
            return None
        return text.strip() or None

    async def enhance(self, description: str) -> EnhancementResult:
        if description == NOT_FOUND:
            return EnhancementResult(description, False, "no description extracted")
        if not self.api_key:
            return EnhancementResult(description, False, "no API key configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(
                    self.endpoint,
                    headers={"x-goog-api-key": self.api_key},
                    json=self.build_payload(description),
                )
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error enhancing description with AI: %s", e)
            return EnhancementResult(description, False, f"request failed: {e}")
        except Exception as e:
            logger.exception("Unexpected error enhancing description with AI")
            return EnhancementResult(description, False, f"unexpected error: {e!r}")

        text = self.parse_response(data)
        if text is None:
            logger.warning("AI response unexpected: %s", str(data)[:500])
            return EnhancementResult(description, False, "unexpected response shape")

        logger.info("Description enhanced by AI: %s", text)
        return EnhancementResult(text, True)
