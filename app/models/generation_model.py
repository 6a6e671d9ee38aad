# /app/models/generation_model.py

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


# --- Prompt configuration ---

class SystemPrompt(BaseModel):
    role: str = "system"
    content: str


class PromptConfig(BaseModel):
    """
    The fixed conversation prefix sent with every generation request, plus the
    template the group's prompt text is substituted into.
    """
    name: str
    description: str = ""
    system_prompts: List[SystemPrompt] = Field(default_factory=list)
    user_prompt_template: str


# --- Chat-completion wire records ---

class ReasoningConfig(BaseModel):
    """Optional reasoning hint for models that support it."""
    enabled: Optional[bool] = None
    effort: Optional[Literal["low", "medium", "high"]] = None
    exclude: Optional[bool] = None


class ChatMessage(BaseModel):
    role: str
    # Null when a model refuses or returns only tool calls.
    content: Optional[str] = None


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    temperature: float
    max_tokens: int
    reasoning: Optional[ReasoningConfig] = None


class ChatCompletionChoice(BaseModel):
    message: ChatMessage


class ChatCompletionError(BaseModel):
    message: str = ""
    type: Optional[str] = None
    # The API sends either a string or a number here.
    code: Optional[Any] = None


class ChatCompletionResponse(BaseModel):
    choices: List[ChatCompletionChoice] = Field(default_factory=list)
    error: Optional[ChatCompletionError] = None


# --- API contract for POST /api/generate ---

class GenerateRequest(BaseModel):
    """
    Either `artwork_id` (generate and persist for a stored artwork) or
    `prompt` + `model` (one-off generation, nothing is stored).
    """
    artwork_id: Optional[int] = None
    prompt: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    reasoning: Optional[ReasoningConfig] = None

    @model_validator(mode="after")
    def _check_target(self) -> "GenerateRequest":
        if self.artwork_id is None and not (self.prompt or self.model):
            raise ValueError("Provide either 'artwork_id' or 'prompt' and 'model'.")
        return self


class GenerateResponse(BaseModel):
    svg: str
    artwork_id: Optional[int] = None


# --- Model catalog ---

class ModelInfo(BaseModel):
    id: str
    name: str
    # USD per one million output tokens.
    cost: float = 0.0
    checked: bool = False


def model_info_from_api(entry: Dict[str, Any]) -> ModelInfo:
    pricing = entry.get("pricing") or {}
    cost = 0.0
    completion = pricing.get("completion")
    if completion not in (None, ""):
        try:
            cost = float(completion) * 1_000_000
        except (TypeError, ValueError):
            cost = 0.0
    return ModelInfo(id=entry["id"], name=entry.get("name") or entry["id"], cost=cost)
