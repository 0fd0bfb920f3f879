"""Outbound communication channels."""

from .telegram import TelegramBot

__all__ = ["TelegramBot"]
