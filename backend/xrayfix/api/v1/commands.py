"""
Chat command surface.

- POST /api/v1/commands/{command_name}  JSON parameters
- POST /api/v1/slack/actions            Slack interactive button callback
"""
import json
from typing import Any, Dict, Optional
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from xrayfix.api.dependencies import get_services
from xrayfix.commands import CommandContext, get_command
from xrayfix.core.exceptions import PayloadError
from xrayfix.core.logging import logger
from xrayfix.schemas import parse_payload
from xrayfix.schemas.command import CommandParameters, CommandRequest, CommandResponse
from xrayfix.services import ServiceContainer
from xrayfix.services.chat_service import check_response_url

router = APIRouter()


async def run_command(
    command_name: str,
    params: CommandParameters,
    services: ServiceContainer,
    response_url: Optional[str] = None,
) -> JSONResponse:
    handler = get_command(command_name)
    if response_url:
        check_response_url(response_url)
    if handler is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown command {command_name}")

    ctx = CommandContext(
        artifactory=services.artifactory,
        xray=services.xray,
        chat=services.chat,
        response_url=response_url,
    )
    result = await handler(params, ctx)
    response = CommandResponse(
        command=handler.name.value,
        success=result.success,
        message=result.message,
        detail=result.detail,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if result.success else status.HTTP_502_BAD_GATEWAY,
        content=response.model_dump(),
    )


@router.post("/commands/{command_name}")
async def invoke_command(
    command_name: str,
    request: CommandRequest,
    services: ServiceContainer = Depends(get_services),
):
    """Run a named command with JSON parameters"""
    return await run_command(command_name, request.parameters, services, request.response_url)


@router.post("/slack/actions")
async def slack_action(
    request: Request,
    services: ServiceContainer = Depends(get_services),
):
    """Handle a button click on one of our messages"""
    form = parse_qs((await request.body()).decode("utf-8"))
    raw = form.get("payload")
    if not raw:
        raise PayloadError("Slack action carries no payload")

    try:
        payload: Dict[str, Any] = json.loads(raw[0])
        action = payload["actions"][0]
        command_name = action["name"]
        values = json.loads(action["value"])
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise PayloadError(f"Malformed Slack action: {e}") from e

    logger.info(f"Slack action {command_name}", extra={"command": command_name})
    params = parse_payload(CommandParameters, values, "command parameters")
    return await run_command(command_name, params, services, payload.get("response_url"))
