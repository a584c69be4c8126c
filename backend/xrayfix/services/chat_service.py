"""
Slack delivery: direct responses through an interaction ``response_url`` and
channel messages through ``chat.postMessage``.
"""
from typing import Any, Dict, Optional
import httpx

from xrayfix.core.config import settings
from xrayfix.core.exceptions import PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.services.http import RemoteService


def check_response_url(response_url: str, allowed_host: Optional[str] = None) -> str:
    """Only https URLs on the Slack response host may receive interaction replies"""
    allowed_host = allowed_host or settings.SLACK_RESPONSE_HOST
    try:
        url = httpx.URL(response_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise PayloadError(f"Invalid response_url: {e}") from e
    if url.scheme != "https" or url.host != allowed_host:
        raise PayloadError(f"response_url must be an https URL on {allowed_host}")
    return response_url


class ChatService(RemoteService):
    service_name = "slack"

    def __init__(
        self,
        api_url: Optional[str] = None,
        bot_token: Optional[str] = None,
        response_host: Optional[str] = None,
        **kwargs: Any,
    ):
        bot_token = bot_token if bot_token is not None else settings.SLACK_BOT_TOKEN
        headers = {"Authorization": f"Bearer {bot_token}"} if bot_token else {}
        self.response_host = response_host or settings.SLACK_RESPONSE_HOST
        super().__init__(api_url or settings.SLACK_API_URL, headers=headers, **kwargs)

    async def respond(self, message: Dict[str, Any], response_url: str, message_id: str) -> None:
        """Replace the message the interaction came from"""
        check_response_url(response_url, self.response_host)
        logger.info(f"Responding to interaction for {message_id}")
        # response_url is self-authenticating; the bot token is not sent
        await self.request(
            "POST",
            response_url,
            authenticated=False,
            json={**message, "replace_original": True, "metadata": _metadata(message_id)},
        )

    async def address_channel(self, message: Dict[str, Any], channel_id: str, message_id: str) -> None:
        logger.info(f"Sending message {message_id} to channel {channel_id}")
        body = await self.post_json(
            "/chat.postMessage",
            {**message, "channel": channel_id, "metadata": _metadata(message_id)},
        )
        if body is not None and not body.get("ok", False):
            raise RemoteCallError(self.service_name, f"chat.postMessage failed: {body.get('error')}")


def _metadata(message_id: str) -> Dict[str, Any]:
    return {"event_type": "xray_security_issue", "event_payload": {"id": message_id}}
