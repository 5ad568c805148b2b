"""PydanticAI agent that answers visitor questions about Bodegoes."""

from __future__ import annotations

import httpx
from loguru import logger
from openai import AsyncOpenAI, OpenAIError
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError
from pydantic_ai.models.instrumented import InstrumentationSettings
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from bodegoes_assistant.application.exceptions import ProviderError
from bodegoes_assistant.config import Settings

# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

RESTAURANT_KNOWLEDGE = """\
You are the AI assistant for Bodegoes, a Mediterranean restaurant. Answer \
guests' questions using the information below.

## Restaurant Overview
- Name: Bodegoes
- Cuisine: Mediterranean
- Specialties: fresh seafood, grilled meats, vegetarian options, authentic \
Mediterranean flavors
- Atmosphere: casual yet elegant; suits families, dates, and business meals

## Menu Highlights
- Appetizers: hummus platter, grilled octopus, Mediterranean bruschetta, \
stuffed grape leaves
- Main courses: grilled branzino, lamb souvlaki, moussaka, seafood paella, \
Mediterranean chicken
- Vegetarian: grilled vegetable platter, falafel plate, Mediterranean pasta
- Desserts: baklava, tiramisu, Greek yogurt with honey and nuts
- Beverages: extensive list of Mediterranean wines, craft cocktails, fresh juices

## Services
- Dine-in, takeout, and delivery
- Reservations recommended for dinner
- Private dining rooms for events
- Catering for parties and corporate events

## Special Features
- Happy Hour: 3-6 PM daily with 25% off appetizers and drinks
- Live music on weekends
- Outdoor seating (weather permitting)
- Gluten-free and vegan options
- Ingredients sourced locally when possible

## Guidelines
- Always give helpful, accurate information about the restaurant.
- For reservations, direct guests to call the restaurant or use the online \
booking system.
- Be friendly, knowledgeable, and enthusiastic about Mediterranean cuisine \
and the dining experience at Bodegoes.
"""


# ---------------------------------------------------------------------------
# Agent factory
# ---------------------------------------------------------------------------


def create_assistant_agent(
    settings: Settings,
    instrument: InstrumentationSettings | None = None,
) -> Agent[None, str]:
    """Create the configured PydanticAI agent for restaurant Q&A.

    The agent makes exactly one model request per run: with no retries an
    empty or invalid response raises ``UnexpectedModelBehavior`` instead of
    prompting the model again.  *instrument* comes from
    ``telemetry.get_instrumentation_settings`` and is left out entirely
    when observability is off.
    """
    client = AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )

    model = OpenAIChatModel(
        settings.openai_chat_model,
        provider=OpenAIProvider(openai_client=client),
    )

    extra: dict = {}
    if instrument is not None:
        extra["instrument"] = instrument

    return Agent(
        model=model,
        system_prompt=RESTAURANT_KNOWLEDGE,
        output_type=str,
        model_settings=ModelSettings(
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        ),
        retries=0,
        output_retries=0,
        **extra,
    )


# ---------------------------------------------------------------------------
# Completion provider
# ---------------------------------------------------------------------------


class AssistantAgentClient:
    """Completion provider backed by a PydanticAI agent.

    Each call is a single user turn with no message history, so the model
    sees only the system prompt and the current question.
    """

    def __init__(self, agent: Agent[None, str]) -> None:
        self.agent = agent

    async def complete(self, prompt: str) -> str:
        """Run the agent once and return its text output.

        Raises:
            ProviderError: If the model call fails for any reason.
        """
        try:
            result = await self.agent.run(prompt)
        except (AgentRunError, OpenAIError, httpx.HTTPError) as exc:
            logger.warning("Completion provider failed: {}", exc)
            raise ProviderError(str(exc)) from exc
        return result.output
