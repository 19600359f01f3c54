"""
LLM Client Infrastructure
==========================

Wrapper for the LLM provider (OpenAI) providing a clean interface for chat completions.

This module abstracts the LLM client implementation following the
Dependency Inversion Principle - the triage module depends on the
ILLMClient abstraction, not on the OpenAI SDK.
"""

import json
import time
from typing import List, Optional
from abc import ABC, abstractmethod

from openai import AsyncOpenAI

from src.config import settings, PLACEHOLDER_API_KEY, DecisionCategory
from src.core import LLMException, ConfigurationException


class ChatCompletionResult:
    """Result of a chat completion."""

    def __init__(
        self,
        content: str,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: int
    ):
        self.content = content
        self.model = model
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.total_tokens = prompt_tokens + completion_tokens
        self.latency_ms = latency_ms


class ILLMClient(ABC):
    """
    Interface for LLM client operations.

    Following Interface Segregation Principle - only methods
    actually needed by the application are defined.
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 300,
        timeout: Optional[float] = None,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Generate chat completion."""


class OpenAILLMClient(ILLMClient):
    """
    OpenAI client implementation for GPT models.

    Provides async wrapper around OpenAI SDK operations.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key or settings.openai_api_key
        if not self._api_key or self._api_key == PLACEHOLDER_API_KEY:
            raise ConfigurationException("OpenAI API key not configured")

        # Retries would multiply the caller's timeout budget
        self._client = AsyncOpenAI(api_key=self._api_key, max_retries=0)
        self._model = model or settings.llm_model

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 300,
        timeout: Optional[float] = None,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """
        Generate chat completion using OpenAI GPT.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate
            timeout: Request timeout in seconds (SDK default when None)
            operation: Operation label, used in error messages

        Returns:
            ChatCompletionResult with generated text

        Raises:
            LLMException: If completion fails or returns no content
        """
        start_time = time.perf_counter()

        request_kwargs = {}
        if timeout is not None:
            request_kwargs["timeout"] = timeout

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **request_kwargs
            )
        except Exception as e:
            raise LLMException(
                f"{operation} failed: {str(e)}",
                {"error_type": type(e).__name__}
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMException(f"{operation} failed: empty response from model")

        usage = response.usage
        return ChatCompletionResult(
            content=content,
            model=self._model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency_ms
        )


class MockLLMClient(ILLMClient):
    """
    Mock LLM client for testing.

    Returns predictable responses without calling external APIs.
    """

    MOCK_ASSESSMENT = {
        "recommendation": DecisionCategory.TECHNICAL_REMEDIATION,
        "confidence": 0.85,
        "reasoning": "Mock: ticket describes a system-level fault in a digital channel.",
        "technical_indicators": ["api", "error"],
        "operational_indicators": []
    }

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 300,
        timeout: Optional[float] = None,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Return mock response based on operation type."""
        if "assessment" in operation.lower():
            content = f"```json\n{json.dumps(self.MOCK_ASSESSMENT, indent=2)}\n```"
        else:
            content = "This is a mock LLM response for testing purposes."

        return ChatCompletionResult(
            content=content,
            model="mock-model",
            prompt_tokens=100,
            completion_tokens=len(content.split()),
            latency_ms=0
        )


def create_llm_client(config=None) -> Optional[ILLMClient]:
    """
    Build the LLM client the settings ask for.

    Returns None when no external assessment is configured; that is the
    normal demo/test setup, not an error.
    """
    config = config or settings
    if config.mock_llm:
        return MockLLMClient()
    if not config.has_openai_key:
        return None
    return OpenAILLMClient(api_key=config.openai_api_key, model=config.llm_model)
