"""TelegramSubmitter — delivers a rendered report through the Telegram Bot API.

One ``sendMessage`` call per submission, no retries.  Every outcome,
including timeouts and transport failures, comes back as a
:class:`SubmitResult`; nothing is raised past :meth:`TelegramSubmitter.send`
so the caller can simply show the error and offer to resend.

Error kinds:
  - configuration_missing: token or chat id not set (no request is made)
  - remote_rejected: non-2xx status, or ``{"ok": false}`` in the body
  - timeout: no complete response within ``timeout_seconds``
  - network: the request could not be completed (DNS, refused, reset)
  - unknown: anything else
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from questionnaire_forms.config import TelegramSettings, load_telegram_settings
from questionnaire_forms.models.form import SubmitResult

logger = logging.getLogger(__name__)

CONFIG_MISSING_MESSAGE = (
    "Telegram Bot Token or Chat ID not configured. Please set "
    "TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID environment variables."
)
TIMEOUT_MESSAGE = "Request timeout. Please check your internet connection and try again."
NETWORK_MESSAGE = "Network error. Please check your internet connection and try again."
UNKNOWN_MESSAGE = "Unknown error occurred"


class TelegramSubmitter:
    """Sends report text to a fixed Telegram chat.

    Args:
        settings: bot credentials and timeout; read from the environment
            when omitted
        transport: optional httpx transport (e.g. ``httpx.MockTransport``
            in tests)
    """

    def __init__(
        self,
        settings: TelegramSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings if settings is not None else load_telegram_settings()
        self._transport = transport

    @property
    def settings(self) -> TelegramSettings:
        return self._settings

    async def send(self, text: str) -> SubmitResult:
        """Send ``text`` as a Markdown message and return the normalized result."""
        settings = self._settings
        if not settings.is_configured:
            logger.error(CONFIG_MISSING_MESSAGE)
            return SubmitResult(
                success=False,
                error=CONFIG_MISSING_MESSAGE,
                error_kind="configuration_missing",
            )

        # Never log the token itself
        logger.info(
            "Sending to Telegram: chat_id=%s text_length=%d",
            settings.chat_id, len(text),
        )

        try:
            # httpx bounds each phase; wait_for bounds the request as a whole
            return await asyncio.wait_for(
                self._post(text), timeout=settings.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error("Telegram request timed out after %.1fs", settings.timeout_seconds)
            return SubmitResult(success=False, error=TIMEOUT_MESSAGE, error_kind="timeout")
        except httpx.TransportError as exc:
            logger.error("Network error sending to Telegram: %r", exc)
            return SubmitResult(success=False, error=NETWORK_MESSAGE, error_kind="network")
        except Exception as exc:
            logger.exception("Error sending to Telegram")
            return SubmitResult(
                success=False,
                error=str(exc) or UNKNOWN_MESSAGE,
                error_kind="unknown",
            )

    async def _post(self, text: str) -> SubmitResult:
        settings = self._settings
        payload = {
            "chat_id": settings.chat_id,
            "text": text,
            "parse_mode": "Markdown",
        }
        async with httpx.AsyncClient(
            timeout=settings.timeout_seconds, transport=self._transport,
        ) as client:
            response = await client.post(settings.send_message_url, json=payload)

        data = self._parse_body(response)

        if not response.is_success:
            description = (data or {}).get("description") or f"HTTP {response.status_code}"
            logger.error(
                "Telegram API error: status=%d body=%s", response.status_code, data,
            )
            return SubmitResult(
                success=False,
                error=f"Telegram API error: {description}",
                error_kind="remote_rejected",
            )

        if data is None:
            raise ValueError("Invalid JSON in Telegram API response")

        if not data.get("ok"):
            description = data.get("description") or "Unknown Telegram API error"
            logger.error("Telegram API returned error: %s", data)
            return SubmitResult(
                success=False,
                error=f"Telegram API error: {description}",
                error_kind="remote_rejected",
            )

        logger.info("Successfully sent to Telegram")
        return SubmitResult(success=True)

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict[str, Any] | None:
        """Decode a JSON object body; None when the body is not one."""
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None


async def send_to_telegram(text: str, settings: TelegramSettings | None = None) -> SubmitResult:
    """Send ``text`` with a one-off :class:`TelegramSubmitter`."""
    return await TelegramSubmitter(settings).send(text)
