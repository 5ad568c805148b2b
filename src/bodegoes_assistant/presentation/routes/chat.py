"""Chat routes — health, sessions, and message exchange endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request
from loguru import logger

from bodegoes_assistant.application.exceptions import StorageError, ValidationError
from bodegoes_assistant.application.use_cases.assistant import AssistantGateway
from bodegoes_assistant.application.use_cases.sessions import SessionService
from bodegoes_assistant.presentation.schemas import (
    ChatSessionResponse,
    CreateSessionRequest,
    MessageResponse,
    SendMessageRequest,
    SendMessageResponse,
)

router = APIRouter(tags=["chat"])


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health")
async def health():
    """Simple liveness / readiness check."""
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@router.post("/api/chat/session", response_model=ChatSessionResponse)
async def create_session(request: CreateSessionRequest, raw_request: Request):
    """Open a chat session for the visitor's display name."""
    sessions: SessionService = raw_request.app.state.sessions

    try:
        session = sessions.create_session(request.name)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to create session: {exc}")

    logger.info("POST /api/chat/session | session={} name={}", session.id, session.name)
    return ChatSessionResponse.from_domain(session)


@router.get("/api/chat/session/{session_id}/messages", response_model=list[MessageResponse])
async def get_session_messages(session_id: int, raw_request: Request):
    """Get all messages in a session, ordered chronologically."""
    sessions: SessionService = raw_request.app.state.sessions

    try:
        messages = sessions.list_messages(session_id)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to get messages: {exc}")

    return [MessageResponse.from_domain(m) for m in messages]


@router.get("/api/chat/sessions", response_model=list[ChatSessionResponse])
async def list_sessions(raw_request: Request, name: str = Query(description="Display name")):
    """List every session opened under a display name."""
    sessions: SessionService = raw_request.app.state.sessions

    try:
        found = sessions.sessions_for(name)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to list sessions: {exc}")

    return [ChatSessionResponse.from_domain(s) for s in found]


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


@router.post("/api/chat/message", response_model=SendMessageResponse)
async def send_message(request: SendMessageRequest, raw_request: Request):
    """Send a visitor message and receive the assistant's reply.

    Provider failures are answered with a fixed apology, so only storage
    failures produce a 500.
    """
    assistant: AssistantGateway = raw_request.app.state.assistant

    logger.info(
        "POST /api/chat/message | session={} msg={}",
        request.session_id,
        request.content[:60],
    )

    try:
        reply = await assistant.respond(request.session_id, request.content)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to process message: {exc}")

    return SendMessageResponse(
        user_message=MessageResponse.from_domain(reply.user_message),
        assistant_message=MessageResponse.from_domain(reply.assistant_message),
    )
