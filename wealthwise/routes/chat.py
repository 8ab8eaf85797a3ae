"""Chatbot route."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wealthwise.core.dependencies import get_chat_service
from wealthwise.core.errors import ChatUnavailableError
from wealthwise.services.openai_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


class ChatRequest(BaseModel):
    message: Optional[str] = None


class ChatResponse(BaseModel):
    response: str
    fallback: Optional[bool] = None


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
def chat(
    request: Optional[ChatRequest] = None,
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Ask the WealthWise assistant a question.

    Upstream failures still answer 200, with the canned reply and
    ``fallback: true``.
    """
    if request is None:
        request = ChatRequest()
    if not request.message:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Message is required"},
        )

    try:
        reply = chat_service.complete(request.message)
    except ChatUnavailableError as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Chatbot service is unavailable", "details": str(e)},
        )
    except Exception as e:
        logger.exception("Chat API error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to process your request", "details": str(e)},
        )

    if reply.is_fallback:
        return ChatResponse(response=reply.text, fallback=True)
    return ChatResponse(response=reply.text)
