# backend/xrayfix/commands/__init__.py
from typing import Dict, Optional

from xrayfix.commands.base import CommandContext, CommandHandler, CommandResult
from xrayfix.commands.create_issue import CreateNewXrayIssue
from xrayfix.commands.downloads import (
    BlockArtifactoryDownload,
    IgnoreViolationForProject,
    UnblockArtifactoryDownload,
    UnIgnoreViolationForProject,
)

COMMANDS: Dict[str, CommandHandler] = {
    handler.name.value: handler
    for handler in (
        BlockArtifactoryDownload,
        UnblockArtifactoryDownload,
        IgnoreViolationForProject,
        UnIgnoreViolationForProject,
        CreateNewXrayIssue,
    )
}


def get_command(name: str) -> Optional[CommandHandler]:
    return COMMANDS.get(name)


__all__ = [
    "COMMANDS",
    "CommandContext",
    "CommandHandler",
    "CommandResult",
    "get_command",
]
