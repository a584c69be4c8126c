"""
Chat notifications for internally-authored issues.

No remediation happens on this path: each impacted build is resolved to its
repository and the repository's default channel is offered the block/ignore
actions. Builds that cannot be resolved are skipped.
"""
import asyncio
from typing import List, Optional, Tuple

from pydantic import ValidationError

from xrayfix.commands.messages import default_message
from xrayfix.core.constants import COMPONENT_ID_PREFIX, RemediationStage
from xrayfix.core.exceptions import BuildIdentifierError, PayloadError, RemoteCallError
from xrayfix.core.identifiers import parse_build_id
from xrayfix.core.logging import logger
from xrayfix.remediation.models import RemediationOutcome
from xrayfix.schemas.command import CommandParameters
from xrayfix.schemas.graph import Repo
from xrayfix.schemas.violation import ImpactedArtifact, Violation
from xrayfix.services.artifactory_service import ArtifactoryService
from xrayfix.services.chat_service import ChatService
from xrayfix.services.graph_service import GraphService


class IssueNotifier:
    def __init__(self, artifactory: ArtifactoryService, graph: GraphService, chat: ChatService):
        self.artifactory = artifactory
        self.graph = graph
        self.chat = chat

    async def notify(self, violation: Violation) -> RemediationOutcome:
        logger.info("New Security issue...")
        issue = violation.issues[0]
        build_ids = violation.build_ids()

        resolved = await asyncio.gather(*(self._resolve(build_id) for build_id in build_ids))
        impacts: List[Tuple[str, Repo]] = [r for r in resolved if r is not None]

        sent = 0
        for build_id, repo in impacts:
            artifact = next(a for a in issue.impacted_artifacts if a.display_name == build_id)
            params = self._parameters(artifact, issue.summary, issue.description)
            channel = repo.default_channel
            if params is None or channel is None:
                logger.warning(f"Nothing to notify for {build_id} in {repo.full_name}")
                continue
            try:
                await self.chat.address_channel(default_message(params), channel.channel_id, issue.summary)
            except RemoteCallError as e:
                logger.error(f"Could not notify {channel.channel_id} about {issue.summary}: {e}")
                continue
            sent += 1

        return RemediationOutcome.success(
            f"Notified {sent} of {len(build_ids)} impacted build(s) about {issue.summary}",
            stage=RemediationStage.NOTIFY,
        )

    async def _resolve(self, build_id: str) -> Optional[Tuple[str, Repo]]:
        try:
            identity = parse_build_id(build_id)
            sha = await self.artifactory.build_to_commit(identity)
            if not sha:
                return None
            commits = await self.graph.find_build_for_commit(sha, build_id)
        except (BuildIdentifierError, RemoteCallError, PayloadError) as e:
            logger.warning(f"Skipping {build_id}: {e}", extra={"build_id": build_id})
            return None

        build = commits.first_build()
        if build is None:
            logger.info(f"Could not find a commit {sha} for {build_id}")
            return None
        return build_id, build.repo

    @staticmethod
    def _parameters(artifact: ImpactedArtifact, summary: str, description: str) -> Optional[CommandParameters]:
        if not artifact.infected_files:
            return None
        component_id = artifact.infected_files[0].display_name
        if component_id.startswith(COMPONENT_ID_PREFIX):
            component_id = component_id[len(COMPONENT_ID_PREFIX):]
        try:
            return CommandParameters(componentId=component_id, issueId=summary, issueDescription=description)
        except ValidationError as e:
            logger.warning(f"Unusable component id {component_id!r}: {e.error_count()} error(s)")
            return None
