"""Delivery configuration — reads Telegram bot settings from environment variables.

The bot token and chat id are secrets and have no usable defaults.  When
they are unset they hold placeholder sentinels, and the submitter refuses
to send (``configuration_missing``) instead of calling the API with junk.
"""

import os
from dataclasses import dataclass

from questionnaire_forms.constants import (
    CHAT_ID_PLACEHOLDER,
    SUBMIT_TIMEOUT_SECONDS,
    TOKEN_PLACEHOLDER,
)


@dataclass(frozen=True)
class TelegramSettings:
    """Immutable Telegram delivery configuration."""

    bot_token: str = TOKEN_PLACEHOLDER
    chat_id: str = CHAT_ID_PLACEHOLDER

    # Base URL of the Bot API; overridable for self-hosted API servers
    api_base: str = "https://api.telegram.org"

    # Client-side bound on the whole request, in seconds
    timeout_seconds: float = SUBMIT_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        """True when both the token and the chat id are real values."""
        return (
            bool(self.bot_token)
            and bool(self.chat_id)
            and self.bot_token != TOKEN_PLACEHOLDER
            and self.chat_id != CHAT_ID_PLACEHOLDER
        )

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/bot{self.bot_token}/sendMessage"


def load_telegram_settings() -> TelegramSettings:
    """Build settings from ``TELEGRAM_*`` environment variables."""
    return TelegramSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN") or TOKEN_PLACEHOLDER,
        chat_id=os.getenv("TELEGRAM_CHAT_ID") or CHAT_ID_PLACEHOLDER,
        api_base=os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org"),
        timeout_seconds=float(os.getenv("TELEGRAM_TIMEOUT_SECONDS", str(SUBMIT_TIMEOUT_SECONDS))),
    )
