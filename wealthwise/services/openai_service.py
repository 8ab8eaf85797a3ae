"""OpenAI chat completion proxy for the WealthWise assistant."""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from openai import OpenAI

from wealthwise.core.errors import ChatUnavailableError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an AI assistant for WealthWise, a financial services company. "
    "Provide helpful, concise information about personal finance, investing, "
    "budgeting, and wealth management. Keep responses professional, informative, "
    "and focused on financial topics. Limit responses to 3-4 sentences when possible."
)

FALLBACK_RESPONSE = (
    "I'm sorry, I'm having trouble processing your request right now. "
    "Our financial advisors are available during business hours if you have "
    "urgent questions. Please try again later or contact our support team."
)

DEFAULT_MAX_TOKENS = 500


@dataclass(frozen=True)
class ChatReply:
    text: str
    is_fallback: bool = False


class ChatService:
    """Forward a single user message to the completion API.

    Every request is independent: one fixed system instruction plus the user
    message, no history. Failures of the upstream call degrade to
    ``FALLBACK_RESPONSE`` instead of raising.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self):
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def build_messages(self, message: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ]

    def complete(self, message: str) -> ChatReply:
        """
        Get the assistant's reply to ``message``.

        Raises:
            ChatUnavailableError: no API key is configured. No request is made.
        """
        if not self.is_configured:
            raise ChatUnavailableError("API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(message),
                max_tokens=self.max_tokens,
            )
            content = response.choices[0].message.content
            if content is None:
                raise ValueError("Completion has no content")
        except Exception:
            logger.exception("OpenAI API error")
            return ChatReply(text=FALLBACK_RESPONSE, is_fallback=True)

        logger.debug("OpenAI API response: %s", content)
        return ChatReply(text=content)
