# backend/xrayfix/commands/downloads.py
"""
Block and unblock downloads of a component through the repository's
exclusion list, and acknowledge ignore/re-enable requests.
"""
from typing import Optional

from xrayfix.commands.base import CommandContext, CommandHandler, CommandResult, respond
from xrayfix.commands.messages import blocked_message, default_message, ignore_message
from xrayfix.core.constants import COMMAND_TAGS, CommandName
from xrayfix.core.exceptions import PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.schemas.command import CommandParameters
from xrayfix.schemas.repository import RepositoryConfig


def exclusion_pattern(component_id: str) -> str:
    """``group:artifact:version`` -> ``group/artifact/version/**``"""
    return "/".join(component_id.split(":")) + "/**"


def add_exclusion(config: RepositoryConfig, pattern: str) -> RepositoryConfig:
    exclusions = config.exclusions()
    if pattern in exclusions:
        return config
    return config.with_exclusions(exclusions + [pattern])


def remove_exclusion(config: RepositoryConfig, pattern: str) -> RepositoryConfig:
    exclusions = config.exclusions()
    if pattern not in exclusions:
        return config
    return config.with_exclusions([p for p in exclusions if p != pattern])


async def _fetch_config(ctx: CommandContext) -> Optional[RepositoryConfig]:
    try:
        return await ctx.artifactory.get_repo_config()
    except (RemoteCallError, PayloadError) as e:
        logger.error(f"Error getting repo config: {e}")
        return None


async def block_download(params: CommandParameters, ctx: CommandContext) -> CommandResult:
    config = await _fetch_config(ctx)
    if config is None:
        return CommandResult.failed("Could not fetch repository configuration")

    updated = add_exclusion(config, exclusion_pattern(params.component_id))
    if updated is not config:
        try:
            await ctx.artifactory.set_repo_config(updated)
        except RemoteCallError as e:
            return CommandResult.failed(f"Could not update repository configuration: {e}")
    return await respond(ctx, blocked_message(params), params.issue_id)


async def unblock_download(params: CommandParameters, ctx: CommandContext) -> CommandResult:
    config = await _fetch_config(ctx)
    if config is None:
        return CommandResult.failed("Could not fetch repository configuration")

    updated = remove_exclusion(config, exclusion_pattern(params.component_id))
    if updated is not config:
        try:
            await ctx.artifactory.set_repo_config(updated)
        except RemoteCallError as e:
            return CommandResult.failed(f"Could not update repository configuration: {e}")
    return await respond(ctx, default_message(params), params.issue_id)


async def ignore_violation(params: CommandParameters, ctx: CommandContext) -> CommandResult:
    # TODO: persist the ignore per project so later notifications for this issue are suppressed
    return await respond(ctx, ignore_message(params), params.issue_id)


async def unignore_violation(params: CommandParameters, ctx: CommandContext) -> CommandResult:
    return await respond(ctx, default_message(params), params.issue_id)


BlockArtifactoryDownload = CommandHandler(
    name=CommandName.BLOCK_DOWNLOAD,
    description="Block downloads of a component from Artifactory",
    listener=block_download,
    tags=COMMAND_TAGS,
)

UnblockArtifactoryDownload = CommandHandler(
    name=CommandName.UNBLOCK_DOWNLOAD,
    description="Unblock downloads of a component from Artifactory",
    listener=unblock_download,
    tags=COMMAND_TAGS,
)

IgnoreViolationForProject = CommandHandler(
    name=CommandName.IGNORE_VIOLATION,
    description="Ignore a given violation in a given project",
    listener=ignore_violation,
    tags=COMMAND_TAGS,
)

UnIgnoreViolationForProject = CommandHandler(
    name=CommandName.UNIGNORE_VIOLATION,
    description="Re-enable notifications for a given violation in a given project",
    listener=unignore_violation,
    tags=COMMAND_TAGS,
)
