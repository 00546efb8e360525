"""
LangChain generation backend.

Adapts LangChain chat models to the GenerationBackend protocol. Chat models
fix temperature and token limits at construction, so one instance is built
per (temperature, max_tokens) pair and reused.

Dependencies: langchain_core
System role: Text generation provider adapter
"""

import logging
import threading
from collections.abc import Callable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

logger = logging.getLogger(__name__)

ChatModelFactory = Callable[[float, int], BaseChatModel]


def message_text(content: object) -> str:
    """Flatten chat message content (string or list of parts) to text."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content)


class LangChainGenerationBackend:
    """GenerationBackend over LangChain chat models."""

    def __init__(self, model_factory: ChatModelFactory, name: str) -> None:
        """
        Initialize backend.

        Args:
            model_factory: Builds a chat model for (temperature, max_tokens)
            name: Identifier used in logs (provider:model)
        """
        self._model_factory = model_factory
        self._name = name
        self._models: dict[tuple[float, int], BaseChatModel] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Identifier for logging."""
        return self._name

    def _get_model(self, temperature: float, max_tokens: int) -> BaseChatModel:
        """Return the cached chat model for these sampling parameters."""
        key = (temperature, max_tokens)
        with self._lock:
            if key not in self._models:
                logger.info(
                    f"{__name__}:_get_model - Creating chat model {self._name} "
                    f"(temperature={temperature}, max_tokens={max_tokens})"
                )
                self._models[key] = self._model_factory(temperature, max_tokens)
            return self._models[key]

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Run a single system + user turn.

        Args:
            system_prompt: System instruction
            user_prompt: User turn
            max_tokens: Completion token limit
            temperature: Sampling temperature

        Returns:
            str: Completion text (may be empty)
        """
        model = self._get_model(temperature, max_tokens)
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        response = await model.ainvoke(messages)
        content = response.content if hasattr(response, "content") else response
        return message_text(content)
