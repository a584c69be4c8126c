# backend/xrayfix/commands/create_issue.py
from xrayfix.commands.base import CommandContext, CommandHandler, CommandResult, respond
from xrayfix.core.constants import CommandName
from xrayfix.core.exceptions import PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.schemas.command import CommandParameters


async def create_issue(params: CommandParameters, ctx: CommandContext) -> CommandResult:
    try:
        issue = await ctx.xray.create_issue(params.issue_id, params.issue_description, params.component_id)
    except (RemoteCallError, PayloadError) as e:
        logger.error(f"Error creating issue: {e}")
        return CommandResult.failed(f"Could not create issue in xray: {e}")

    logger.info(f"Created issue in xray: {issue.id}")
    return await respond(ctx, {"text": f"Created issue in xray {issue.id}"}, params.issue_id)


CreateNewXrayIssue = CommandHandler(
    name=CommandName.CREATE_ISSUE,
    description="Create a new XRay Issue",
    listener=create_issue,
    tags=["xray", "security", "issue", "violation", "jfrog"],
    intent=["create xray issue"],
)
