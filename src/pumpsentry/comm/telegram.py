"""Telegram bot client used as the alert notification sink."""

from typing import Any, Dict, Optional

import aiohttp

from ..config.logging import get_logger

logger = get_logger(__name__)


class TelegramBot:
    """Telegram Bot client for sending and editing alert messages."""

    def __init__(self, bot_token: Optional[str], chat_id: Optional[str] = None):
        if not bot_token:
            raise ValueError("Telegram bot token is required")

        self.bot_token = bot_token
        self.chat_id = chat_id
        self.base_url = f"https://api.telegram.org/bot{self.bot_token}"
        self.logger = logger.bind(component="telegram")

    async def send_message(
        self, text: str, chat_id: Optional[str] = None
    ) -> Optional[int]:
        """
        Send a message to a Telegram chat.

        Args:
            text: Message text to send (Markdown)
            chat_id: Target chat ID (uses default if not provided)

        Returns:
            Telegram message ID if sent successfully, None otherwise
        """
        target_chat_id = chat_id or self.chat_id
        if not target_chat_id:
            self.logger.error("No chat ID provided")
            return None

        data = {
            "chat_id": target_chat_id,
            "text": text,
            "parse_mode": "Markdown",
        }
        result = await self._call("sendMessage", data)
        if result is None:
            return None

        message_id = result.get("message_id")
        self.logger.info(
            "Message sent", chat_id=target_chat_id, message_id=message_id
        )
        return message_id

    async def edit_message(
        self, message_id: int, text: str, chat_id: Optional[str] = None
    ) -> bool:
        """
        Replace the text of a previously sent message.

        Args:
            message_id: ID returned by :meth:`send_message`
            text: New message text (Markdown)
            chat_id: Target chat ID (uses default if not provided)

        Returns:
            True if the message was edited, False otherwise (including when
            the message no longer exists)
        """
        target_chat_id = chat_id or self.chat_id
        if not target_chat_id:
            self.logger.error("No chat ID provided")
            return False

        data = {
            "chat_id": target_chat_id,
            "message_id": message_id,
            "text": text,
            "parse_mode": "Markdown",
        }
        return await self._call("editMessageText", data) is not None

    async def _call(self, method: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """POST a Bot API method; returns the ``result`` object or None on failure."""
        url = f"{self.base_url}/{method}"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(url, json=data) as response:
                    payload = await response.json(content_type=None)
                    if response.status == 200 and payload.get("ok"):
                        result = payload.get("result")
                        return result if isinstance(result, dict) else {}

                    self.logger.warning(
                        "Telegram API call rejected",
                        method=method,
                        status=response.status,
                        description=payload.get("description"),
                    )
                    return None
        except Exception as e:
            self.logger.error("Telegram API call failed", method=method, error=str(e))
            return None
