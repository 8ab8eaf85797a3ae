"""FastAPI dependencies that hand bootstrap-owned objects to the routes."""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from wealthwise.core.config import Settings
from wealthwise.db.sessions import get_db
from wealthwise.services.openai_service import ChatService
from wealthwise.services.user_store import UserStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service
