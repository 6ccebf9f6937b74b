"""Application services."""

from drive_qa.application.services.chat_service import ChatService

__all__ = ["ChatService"]
