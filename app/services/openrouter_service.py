# /app/services/openrouter_service.py

"""
Client for the OpenRouter chat-completion API, which turns a group's prompt
into SVG markup for one model.

Every failure, from a missing API key to an empty completion, surfaces as a
single `GenerationError` with a descriptive message. Nothing is retried: a
generation is a user-triggered, at-most-once action.
"""

import logging
import re
from typing import List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import GenerationError
from ..models.generation_model import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    PromptConfig,
    ReasoningConfig,
)
from .prompt_library import DEFAULT_PROMPT_CONFIG, format_user_prompt

logger = logging.getLogger(__name__)

# A whole response wrapped in one fence, with or without a language tag.
_ENCLOSING_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL)


def strip_code_fences(content: str) -> str:
    """
    Returns bare SVG markup from a completion: surrounding whitespace trimmed
    and any enclosing ``` / ```svg fence removed.
    """
    cleaned = content.strip()
    match = _ENCLOSING_FENCE_RE.match(cleaned)
    if match:
        cleaned = match.group(1)
    else:
        cleaned = cleaned.replace("```svg", "").replace("```", "")
    return cleaned.strip()


class OpenRouterClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://openrouter.ai/api/v1",
        prompt_config: PromptConfig = DEFAULT_PROMPT_CONFIG,
        timeout_seconds: float = 300.0,
        referer: str = "http://localhost:8000",
        title: str = "Pelican Art Gallery",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.prompt_config = prompt_config
        self.timeout_seconds = timeout_seconds
        self.referer = referer
        self.title = title
        # Tests swap in an httpx.MockTransport here.
        self._transport = transport

    def build_messages(self, prompt_text: str) -> List[ChatMessage]:
        messages = [
            ChatMessage(role=system_prompt.role, content=system_prompt.content)
            for system_prompt in self.prompt_config.system_prompts
        ]
        messages.append(
            ChatMessage(role="user", content=format_user_prompt(self.prompt_config.user_prompt_template, prompt_text))
        )
        return messages

    async def generate_svg(
        self,
        prompt_text: str,
        model: str,
        temperature: float,
        max_tokens: int,
        reasoning: Optional[ReasoningConfig] = None,
    ) -> str:
        if not self.api_key:
            raise GenerationError("OPENROUTER_API_KEY environment variable is not set")

        request_body = ChatCompletionRequest(
            model=model,
            messages=self.build_messages(prompt_text),
            temperature=temperature,
            max_tokens=max_tokens,
            reasoning=reasoning,
        ).model_dump(exclude_none=True)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

        logger.info("Calling chat-completion API: model=%s, messages=%d", model, len(request_body["messages"]))
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(f"{self.base_url}/chat/completions", json=request_body, headers=headers)
        except httpx.HTTPError as e:
            raise GenerationError(f"Failed to reach the chat-completion API: {e}") from e

        logger.info("Chat-completion API responded with status %d (%d bytes)", response.status_code, len(response.content))

        if response.status_code != 200:
            raise GenerationError(
                f"Chat-completion API returned status {response.status_code}: {response.text}",
                details={"status_code": response.status_code, "body": response.text},
            )

        try:
            completion = ChatCompletionResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            raise GenerationError(
                "Failed to parse the chat-completion response",
                details={"body": response.text},
            ) from e

        if completion.error is not None:
            raise GenerationError(
                f"Chat-completion API error: {completion.error.message}",
                details=completion.error.model_dump(exclude_none=True),
            )

        if not completion.choices:
            raise GenerationError("No response from the chat-completion API")

        svg = strip_code_fences(completion.choices[0].message.content or "")
        if not svg:
            raise GenerationError(f"Model {model} returned an empty response")

        logger.info("Cleaned SVG content length: %d characters", len(svg))
        return svg
