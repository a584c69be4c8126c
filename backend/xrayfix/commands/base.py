# backend/xrayfix/commands/base.py
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from xrayfix.core.constants import CommandName
from xrayfix.core.exceptions import PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.schemas.command import CommandParameters
from xrayfix.services.artifactory_service import ArtifactoryService
from xrayfix.services.chat_service import ChatService
from xrayfix.services.xray_service import XrayService


@dataclass
class CommandContext:
    artifactory: ArtifactoryService
    xray: XrayService
    chat: ChatService
    response_url: Optional[str] = None


@dataclass
class CommandResult:
    success: bool
    message: Optional[Dict[str, Any]] = None
    detail: Optional[str] = None

    @classmethod
    def failed(cls, detail: str) -> "CommandResult":
        return cls(success=False, detail=detail)


Listener = Callable[[CommandParameters, CommandContext], Awaitable[CommandResult]]


@dataclass
class CommandHandler:
    name: CommandName
    description: str
    listener: Listener
    tags: List[str] = field(default_factory=list)
    intent: List[str] = field(default_factory=list)

    async def __call__(self, params: CommandParameters, ctx: CommandContext) -> CommandResult:
        logger.info(f"Running {self.name.value} for {params.component_id}", extra={"command": self.name.value})
        result = await self.listener(params, ctx)
        if not result.success:
            logger.warning(f"{self.name.value} failed: {result.detail}", extra={"command": self.name.value})
        return result


async def respond(ctx: CommandContext, message: Dict[str, Any], message_id: str) -> CommandResult:
    """Send ``message`` back to the invoking interaction, or hand it to the caller"""
    if ctx.response_url:
        try:
            await ctx.chat.respond(message, ctx.response_url, message_id)
        except (RemoteCallError, PayloadError) as e:
            return CommandResult(success=False, message=message, detail=f"Could not respond: {e}")
    return CommandResult(success=True, message=message)
