"""Assistant use case — one chat turn against the completion provider.

A turn writes the visitor's message, asks the provider for a reply and
writes that reply.  Provider failures never fail the turn: a fixed
apology is stored in place of the generated text.  Storage failures do.
"""

from __future__ import annotations

import time

from loguru import logger

from bodegoes_assistant.application.exceptions import ProviderError, ValidationError
from bodegoes_assistant.domain.models import AssistantReply
from bodegoes_assistant.domain.protocols import IChatStore, ICompletionProvider

FALLBACK_REPLY = (
    "I apologize, but I couldn't generate a response at this time. "
    "Please try again."
)


class AssistantGateway:
    """Orchestrates a single chat turn.

    Parameters
    ----------
    store:
        Persistence for the user and assistant messages.
    completion:
        The text-completion provider.  It is called once per turn with only
        the new user text; earlier turns of the session are not sent.
    """

    def __init__(self, store: IChatStore, completion: ICompletionProvider) -> None:
        self.store = store
        self.completion = completion

    async def respond(self, session_id: int, user_text: str) -> AssistantReply:
        """Store *user_text*, generate a reply and store it.

        Raises:
            ValidationError: If *user_text* is empty; nothing is stored.
            StorageError: If either write fails.
        """
        if not user_text or not user_text.strip():
            raise ValidationError("Message content must not be empty")

        user_message = self.store.create_message(session_id, user_text, is_assistant=False)

        t0 = time.perf_counter()
        answer = await self._generate(user_text)
        latency = int((time.perf_counter() - t0) * 1000)

        assistant_message = self.store.create_message(session_id, answer, is_assistant=True)

        logger.info(
            "Chat turn completed | session={} | latency={}ms | fallback={}",
            session_id,
            latency,
            answer == FALLBACK_REPLY,
        )
        return AssistantReply(user_message=user_message, assistant_message=assistant_message)

    async def _generate(self, user_text: str) -> str:
        try:
            answer = await self.completion.complete(user_text)
        except ProviderError as exc:
            logger.warning("Serving fallback reply after provider failure: {}", exc)
            return FALLBACK_REPLY

        if not answer or not answer.strip():
            logger.warning("Provider returned empty output, serving fallback reply")
            return FALLBACK_REPLY
        return answer
