# backend/xrayfix/commands/messages.py
"""Slack messages offered with an Xray security issue"""
import json
from typing import Any, Dict, List, Optional

from xrayfix.core.constants import CommandName
from xrayfix.schemas.command import CommandParameters

DEFAULT_PROMPT = "What can I do for you now?"
BLOCKED_NOTICE = "Downloads from Artifactory have been blocked"
IGNORED_NOTICE = "Notifications about this issue will be ignored for this project"
NO_KNOWN_FIX = "There is no known fix for this issue"


def button_for_command(text: str, command: CommandName, params: CommandParameters) -> Dict[str, Any]:
    """Interactive button that re-invokes ``command`` with the same parameters"""
    return {
        "name": command.value,
        "text": text,
        "type": "button",
        "value": json.dumps(params.as_button_value()),
    }


def generate_message(
    params: CommandParameters,
    attachment_text: str,
    actions: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    text = f"*{params.issue_id}*: {params.issue_description}:\n*{params.component_id}*"

    return {
        "text": "*Incoming Xray Security Issue*",
        "attachments": [
            {
                "text": text,
                "color": "warning",
                "fallback": "Security Issue",
                "mrkdwn_in": ["text"],
            },
            {
                "text": NO_KNOWN_FIX,
                "color": "danger",
                "fallback": "Security Issue",
                "mrkdwn_in": ["text"],
            },
            {
                "text": attachment_text,
                "fallback": attachment_text,
                "mrkdwn_in": ["text"],
                "color": "good",
                "callback_id": params.issue_id,
                "actions": actions or [],
            },
        ],
    }


def default_message(params: CommandParameters) -> Dict[str, Any]:
    return generate_message(
        params,
        DEFAULT_PROMPT,
        [
            button_for_command("Block all downloads", CommandName.BLOCK_DOWNLOAD, params),
            button_for_command("Ignore for this project", CommandName.IGNORE_VIOLATION, params),
        ],
    )


def blocked_message(params: CommandParameters) -> Dict[str, Any]:
    return generate_message(
        params,
        BLOCKED_NOTICE,
        [button_for_command("Unblock downloads", CommandName.UNBLOCK_DOWNLOAD, params)],
    )


def ignore_message(params: CommandParameters) -> Dict[str, Any]:
    return generate_message(
        params,
        IGNORED_NOTICE,
        [button_for_command("Re-enable", CommandName.UNIGNORE_VIOLATION, params)],
    )
