import logging
from typing import Any

import httpx

from domain.errors import RemixError
from domain.models import Recipe, Remix
from domain.prompts import RemixPrompt


logger = logging.getLogger(__name__)


BASE_URL = "https://api.openai.com/v1/"
DEFAULT_MODEL = "gpt-4.1"
MAX_TOKENS = 500
TEMPERATURE = 0.8
TIMEOUT = 60 * 2


def openai_client_factory(
    token: str | None,
    base_url: str = BASE_URL,
) -> httpx.AsyncClient:
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(base_url=base_url, headers=headers, timeout=TIMEOUT)


class ChatMsg:
    def __init__(self, *, role: str, content: str) -> None:
        self.role = role
        self.content = content

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class RemixClient:
    """Single-turn chat completion asking for a themed variation of a recipe."""

    def __init__(
        self,
        *,
        token: str | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._has_token = bool(token)
        self._client = openai_client_factory(token) if client is None else client

    def payload(self, msg: ChatMsg) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [msg.to_dict()],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    async def _complete(self, data: dict[str, Any]) -> str:
        try:
            resp = await self._client.post("chat/completions", json=data)
            resp.raise_for_status()
            body = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Completion request failed: %r", e)
            raise RemixError("Problem creating completion.") from e

        choices = body.get("choices") if isinstance(body, dict) else None
        if not choices:
            logger.warning("Completion response had no choices: %s", body)
            raise RemixError("No response from the model.")

        try:
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise RemixError("Unexpected completion response.") from e

        if not isinstance(content, str) or not content.strip():
            raise RemixError("Empty response from the model.")
        return content.strip()

    async def remix(self, recipe: Recipe, theme: str) -> Remix:
        theme = theme.strip()
        if not theme:
            raise ValueError("Provide a remix theme.")
        if not self._has_token:
            logger.error("No completion api key configured, set OPENAI_API_KEY.")
            raise RemixError("No api key configured.")

        prompt = RemixPrompt(recipe, theme)
        logger.info("Remixing %s with a %s theme", recipe.name, theme)
        msg = ChatMsg(role="user", content=str(prompt))
        text = await self._complete(self.payload(msg))
        return Remix(recipe_name=recipe.name, theme=theme, text=text)

    async def close(self) -> None:
        await self._client.aclose()
