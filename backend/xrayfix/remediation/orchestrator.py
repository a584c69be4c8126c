"""
Violation -> pull request pipeline.

Stages run in order and stop at the first failure; nothing is retried and
remote changes made by earlier stages (a created branch) are left in place.
"""
import uuid
from typing import Dict, List, Optional

from xrayfix.core.config import settings
from xrayfix.core.constants import RemediationStage
from xrayfix.core.exceptions import BuildIdentifierError, PayloadError, RemoteCallError
from xrayfix.core.identifiers import parse_build_id
from xrayfix.core.logging import logger
from xrayfix.remediation.extractor import gradle_dependencies
from xrayfix.remediation.models import BuildFile, Dependency, RemediationOutcome
from xrayfix.remediation.normalizer import is_internal_issue, latest_builds_only
from xrayfix.remediation.notifier import IssueNotifier
from xrayfix.remediation.rewriter import update_gradle_dependencies
from xrayfix.schemas.violation import Violation
from xrayfix.services.artifactory_service import ArtifactoryService
from xrayfix.services.dedup_cache import DeduplicationCache
from xrayfix.services.graph_service import GraphService
from xrayfix.services.xray_service import XrayService
from xrayfix.vcs.project import ProjectLoader


def generate_body(files: List[BuildFile]) -> str:
    """Pull request body: one entry per fixed group:artifact, first fix only"""
    seen: Dict[str, Dependency] = {}
    for build_file in files:
        for dep in build_file.fixable():
            seen.setdefault(dep.key, dep)

    lines = []
    for dep in seen.values():
        fix = dep.fixes[0]
        lines.append(f"**{dep.coordinate} => {fix.fix_version}**\n- {fix.id}: {fix.summary}")
    return "\n\n".join(lines)


class RemediationOrchestrator:
    def __init__(
        self,
        xray: XrayService,
        artifactory: ArtifactoryService,
        graph: GraphService,
        loader: ProjectLoader,
        cache: DeduplicationCache,
        notifier: IssueNotifier,
        branch_prefix: Optional[str] = None,
        title: Optional[str] = None,
        file_glob: Optional[str] = None,
    ):
        self.xray = xray
        self.artifactory = artifactory
        self.graph = graph
        self.loader = loader
        self.cache = cache
        self.notifier = notifier
        self.branch_prefix = branch_prefix or settings.BRANCH_PREFIX
        self.title = title or settings.PULL_REQUEST_TITLE
        self.file_glob = file_glob or settings.BUILD_FILE_GLOB

    async def handle_violation(self, violation: Violation) -> RemediationOutcome:
        try:
            violation = latest_builds_only(violation)
        except BuildIdentifierError as e:
            return self._failed(RemediationStage.NORMALIZE, str(e))

        if is_internal_issue(violation):
            return await self.notifier.notify(violation)

        build_ids = violation.build_ids()
        if not build_ids:
            logger.info("Violation has no impacted builds")
            return RemediationOutcome.noop("No impacted builds")

        logger.info(f"Found builds: {build_ids}")
        build_id = build_ids[0]

        if not await self.cache.is_new(build_id):
            logger.warning("Received duplicate event - ignoring", extra={"build_id": build_id})
            return RemediationOutcome.noop("Duplicate event, ignored", build_id=build_id)

        return await self._remediate(build_id)

    async def _remediate(self, build_id: str) -> RemediationOutcome:
        try:
            identity = parse_build_id(build_id)
        except BuildIdentifierError as e:
            return self._failed(RemediationStage.GATE, str(e), build_id)

        try:
            sha = await self.artifactory.build_to_commit(identity)
        except (RemoteCallError, PayloadError) as e:
            return self._failed(RemediationStage.RESOLVE_BUILD, str(e), build_id)
        if not sha:
            logger.info(f"Could not find a commit for {build_id}")
            return RemediationOutcome.noop("Commit not found", build_id=build_id)

        try:
            commits = await self.graph.find_build_for_commit(sha, build_id)
            build = commits.first_build()
            build_dir = build.build_dir if build else ""
        except (RemoteCallError, PayloadError) as e:
            return self._failed(RemediationStage.RESOLVE_COMMIT, str(e), build_id)
        if build is None or build.push is None:
            logger.info(f"Could not find a commit {sha}")
            return RemediationOutcome.noop(f"Commit {sha} not found", build_id=build_id)

        try:
            violations = await self.xray.get_build_summary(identity)
        except (RemoteCallError, PayloadError) as e:
            return self._failed(RemediationStage.FETCH_VIOLATIONS, str(e), build_id)

        repo, base_branch = build.repo, build.push.branch
        try:
            project = await self.loader.load(repo.owner, repo.name, base_branch)
        except (RemoteCallError, PayloadError) as e:
            return self._failed(RemediationStage.LOAD_PROJECT, str(e), build_id)

        branch_name = f"{self.branch_prefix}{uuid.uuid4()}"
        branch = await project.create_branch(branch_name)
        if not branch.success:
            return self._failed(RemediationStage.CREATE_BRANCH, f"Error creating branch: {branch.error}", build_id)

        try:
            build_files = await gradle_dependencies(project, build_dir, violations, self.file_glob)
            body = generate_body(build_files)
            changed = await update_gradle_dependencies(project, build_files)
        except (RemoteCallError, PayloadError) as e:
            return self._failed(RemediationStage.PATCH, str(e), build_id)

        if not changed:
            logger.info(f"No fixable dependencies for {build_id} in {repo.full_name}")
            return RemediationOutcome.noop("No fixable dependencies found", build_id=build_id)
        logger.info(f"Editor succeeded on {changed}, committing")

        committed = await project.commit(self.title)
        if not committed.success:
            return self._failed(RemediationStage.COMMIT, f"Error creating commit: {committed.error}", build_id)

        logger.info("Commit success. Pushing branch...")
        pushed = await project.push()
        if not pushed.success:
            return self._failed(RemediationStage.PUSH, f"Error pushing: {pushed.error}", build_id)

        logger.info(f"Push success. Creating PR with title {self.title!r}")
        pr = await project.raise_pull_request(self.title, body, base_branch)
        if not pr.success:
            return self._failed(RemediationStage.RAISE_PR, f"PR creation failed: {pr.error}", build_id)

        logger.info(f"PR raised: {pr.target}", extra={"build_id": build_id})
        return RemediationOutcome.success(
            "Pull request raised",
            stage=RemediationStage.RAISE_PR,
            build_id=build_id,
            pull_request_url=pr.target,
        )

    @staticmethod
    def _failed(stage: RemediationStage, message: str, build_id: Optional[str] = None) -> RemediationOutcome:
        logger.warning(f"Remediation failed at {stage.value}: {message}", extra={"build_id": build_id, "stage": stage.value})
        return RemediationOutcome.failure(stage, message, build_id=build_id)
