"""LLM client using OpenAI or OpenRouter."""

from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from src.config import Settings, settings
from src.core.logging import get_logger

logger = get_logger("llm")

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

SUPPORTED_MODELS = {
    "gpt-4o": {"openai": "gpt-4o", "openrouter": "openai/gpt-4o"},
    "gpt-4o-mini": {"openai": "gpt-4o-mini", "openrouter": "openai/gpt-4o-mini"},
    "gpt-4": {"openai": "gpt-4", "openrouter": "openai/gpt-4"},
    "claude-sonnet-4": {"openrouter": "anthropic/claude-sonnet-4"},
    "deepseek-r1": {"openrouter": "deepseek/deepseek-r1"},
}


def get_chat_llm(
    model: str = "gpt-4o",
    temperature: float = 0.0,
    max_tokens: Optional[int] = None,
    config: Settings = settings,
) -> ChatOpenAI:
    """Get a chat LLM instance, preferring OpenRouter when configured."""
    if config.openrouter_api_key:
        provider = "openrouter"
        api_key = config.openrouter_api_key
        base_url: Optional[str] = OPENROUTER_BASE_URL
    elif config.openai_api_key:
        provider = "openai"
        api_key = config.openai_api_key
        base_url = None
    else:
        raise ValueError("No LLM API key configured")

    model_id = SUPPORTED_MODELS.get(model, {}).get(provider, model)

    logger.debug(f"[LLM] Using {provider}: {model} -> {model_id}")

    return ChatOpenAI(
        model=model_id,
        api_key=api_key,
        base_url=base_url,
        temperature=temperature,
        max_tokens=max_tokens,
    )


class LLMClient:
    """Prompt in, text out. Safe to share across concurrent reviews.

    A fresh chat model is built per call so no request state is shared.
    """

    def __init__(self, model: str, config: Settings = settings) -> None:
        self.model = model
        self._config = config

    async def complete(
        self,
        prompt: str,
        system_instruction: str,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> str:
        llm = get_chat_llm(
            model=self.model,
            temperature=temperature,
            max_tokens=max_tokens,
            config=self._config,
        )
        response = await llm.ainvoke(
            [
                SystemMessage(content=system_instruction),
                HumanMessage(content=prompt),
            ]
        )
        content = response.content
        return content if isinstance(content, str) else str(content)


def build_llm_client(config: Settings = settings) -> Optional[LLMClient]:
    """Return an LLM client, or None when no API key is configured."""
    if not config.llm_enabled:
        return None
    return LLMClient(model=config.review_model, config=config)
