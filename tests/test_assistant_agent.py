"""Tests for the assistant agent module."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.messages import ModelMessage, ModelRequest, ModelResponse, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.instrumented import InstrumentationSettings

from bodegoes_assistant.application.exceptions import ProviderError
from bodegoes_assistant.application.use_cases.assistant import FALLBACK_REPLY, AssistantGateway
from bodegoes_assistant.infrastructure.assistant_agent import (
    RESTAURANT_KNOWLEDGE,
    AssistantAgentClient,
    create_assistant_agent,
)


class TestSystemPrompt:
    """Verify the system prompt carries the restaurant knowledge."""

    def test_names_restaurant_and_cuisine(self):
        assert "Bodegoes" in RESTAURANT_KNOWLEDGE
        assert "Mediterranean" in RESTAURANT_KNOWLEDGE

    def test_contains_menu(self):
        for dish in ("hummus platter", "grilled branzino", "moussaka", "baklava"):
            assert dish in RESTAURANT_KNOWLEDGE

    def test_contains_happy_hour(self):
        assert "Happy Hour: 3-6 PM daily with 25% off" in RESTAURANT_KNOWLEDGE

    def test_contains_reservation_guidance(self):
        assert "call the restaurant" in RESTAURANT_KNOWLEDGE


class TestCreateAgent:
    def test_builds_agent(self, settings):
        agent = create_assistant_agent(settings)
        assert isinstance(agent, Agent)

    def test_builds_agent_with_instrumentation(self, settings):
        agent = create_assistant_agent(settings, instrument=InstrumentationSettings())
        assert isinstance(agent, Agent)

    async def test_instrumented_agent_still_answers(self, settings):
        agent = create_assistant_agent(settings, instrument=InstrumentationSettings())
        model, calls = _scripted_model("Live music every weekend.")

        with agent.override(model=model):
            result = await agent.run("Is there music?")

        assert result.output == "Live music every weekend."
        assert len(calls) == 1


def _scripted_model(text: str) -> tuple[FunctionModel, list[list[ModelMessage]]]:
    """A FunctionModel that always answers *text* and records each request."""
    calls: list[list[ModelMessage]] = []

    def respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        calls.append(list(messages))
        return ModelResponse(parts=[TextPart(text)])

    return FunctionModel(respond), calls


class TestSingleModelRequest:
    """One visitor turn must cost exactly one model request."""

    async def test_answer_uses_one_request_without_history(self, settings):
        agent = create_assistant_agent(settings)
        model, calls = _scripted_model("We serve baklava and tiramisu.")

        with agent.override(model=model):
            answer = await AssistantAgentClient(agent).complete("Any desserts?")

        assert answer == "We serve baklava and tiramisu."
        assert len(calls) == 1
        (request,) = calls[0]
        assert isinstance(request, ModelRequest)
        user_parts = [p for p in request.parts if isinstance(p, UserPromptPart)]
        assert [p.content for p in user_parts] == ["Any desserts?"]

    async def test_empty_output_fails_without_retrying(self, settings):
        agent = create_assistant_agent(settings)
        model, calls = _scripted_model("")

        with agent.override(model=model):
            with pytest.raises(ProviderError):
                await AssistantAgentClient(agent).complete("Are you open?")

        assert len(calls) == 1

    async def test_empty_output_stores_fallback_after_one_request(self, settings, store):
        agent = create_assistant_agent(settings)
        model, calls = _scripted_model("")
        session_id = store.create_chat_session("Ana").id
        gateway = AssistantGateway(store, AssistantAgentClient(agent))

        with agent.override(model=model):
            reply = await gateway.respond(session_id, "Are you open?")

        assert reply.assistant_message.content == FALLBACK_REPLY
        assert len(calls) == 1


def _agent_returning(output=None, error: Exception | None = None) -> MagicMock:
    agent = MagicMock()
    if error is not None:
        agent.run = AsyncMock(side_effect=error)
    else:
        agent.run = AsyncMock(return_value=SimpleNamespace(output=output))
    return agent


class TestAssistantAgentClient:
    async def test_returns_output(self):
        agent = _agent_returning("Our happy hour runs 3-6 PM.")
        client = AssistantAgentClient(agent)

        assert await client.complete("When is happy hour?") == "Our happy hour runs 3-6 PM."
        agent.run.assert_awaited_once_with("When is happy hour?")

    @pytest.mark.parametrize(
        "error",
        [
            ModelHTTPError(status_code=503, model_name="gpt-4o", body=None),
            UnexpectedModelBehavior("empty response"),
            openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com")),
            httpx.ReadTimeout("timed out"),
        ],
    )
    async def test_failures_become_provider_error(self, error):
        client = AssistantAgentClient(_agent_returning(error=error))

        with pytest.raises(ProviderError) as exc_info:
            await client.complete("Hello")
        assert exc_info.value.__cause__ is error

    async def test_unrelated_errors_propagate(self):
        client = AssistantAgentClient(_agent_returning(error=KeyError("bug")))

        with pytest.raises(KeyError):
            await client.complete("Hello")
