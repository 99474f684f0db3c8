"""Generative text service backed by pydantic-ai agents."""

import asyncio
from collections.abc import Mapping
from typing import Any

import logfire
from pydantic_ai import Agent

from seopanel.core.generation.config import LLMConfig, create_model
from seopanel.exceptions import GenerationError
from seopanel.models.metadata import FieldRole
from seopanel.models.payloads import (
    GeneratedDescription,
    GeneratedPayload,
    GeneratedTags,
    GeneratedTitle,
    GenerationRequest,
)
from seopanel.retry import get_async_retryer, log_retry
from seopanel.utils.prompts import load_prompt

OUTPUT_TYPES: dict[FieldRole, type[GeneratedPayload]] = {
    FieldRole.KEYWORD_LIST: GeneratedTags,
    FieldRole.PRIMARY_TEXT: GeneratedTitle,
    FieldRole.LONG_TEXT: GeneratedDescription,
}


class GenerativeService:
    """Produces replacement metadata with an LLM.

    One agent per field role, each with its own system prompt and typed
    output. Every failure, including timeouts and output that fails
    validation, surfaces as GenerationError.

    Attributes:
        agents: Agent per field role
        timeout: Seconds allowed for one attempt
        max_attempts: Attempts per request before giving up
        provider: Name of the LLM provider

    """

    def __init__(
        self,
        llm_config: LLMConfig | None = None,
        agents: Mapping[FieldRole, Agent[Any, Any]] | None = None,
        timeout: float = 30.0,
        max_attempts: int = 2,
    ):
        """Initialize the service with an LLM configuration or prebuilt agents.

        Args:
            llm_config: Configuration for the LLM provider and model
            agents: Agents keyed by role, used instead of building them from llm_config
            timeout: Seconds allowed for one attempt. Defaults to 30.0.
            max_attempts: Attempts per request. Defaults to 2.

        Raises:
            ValueError: Must provide llm_config or agents

        """
        self.timeout = timeout
        self.max_attempts = max_attempts

        if agents is not None:
            self.agents = dict(agents)
            self.provider = 'custom'
        elif llm_config is not None:
            model = create_model(llm_config)
            settings = llm_config.model_settings()
            self.agents = {
                role: Agent(
                    model,
                    output_type=output_type,
                    system_prompt=load_prompt(role),
                    model_settings=settings,
                )
                for role, output_type in OUTPUT_TYPES.items()
            }
            self.provider = llm_config.provider
        else:
            raise ValueError('Either provide llm_config or agents parameter')

    @logfire.instrument('generate_metadata', extract_args=False)
    async def generate(self, request: GenerationRequest) -> GeneratedPayload:
        """Generate a replacement for one field.

        Args:
            request: Role and current metadata

        Returns:
            GeneratedTags, GeneratedTitle or GeneratedDescription, matching the role.

        Raises:
            GenerationError: On any failure, timeout or malformed payload.

        """
        role = request.role
        agent = self.agents.get(role)
        if agent is None:
            raise GenerationError(role.field_name, 'no agent configured')

        logfire.info('Requesting generation', role=role.field_name, provider=self.provider)
        try:
            async for attempt in get_async_retryer(
                max_attempts=self.max_attempts,
                wait_min=0.5,
                wait_max=2.0,
                log_callback=log_retry,
            ):
                with attempt:
                    result = await asyncio.wait_for(agent.run(request.render()), timeout=self.timeout)
        except Exception as e:
            reason = str(e) or type(e).__name__
            logfire.error('Generation failed', role=role.field_name, error=reason, provider=self.provider)
            raise GenerationError(role.field_name, reason) from e

        output = result.output
        expected = OUTPUT_TYPES[role]
        if not isinstance(output, expected):
            raise GenerationError(role.field_name, f'expected {expected.__name__}, got {type(output).__name__}')
        return output
