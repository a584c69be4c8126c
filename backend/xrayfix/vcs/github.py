from typing import Dict, List, Optional

from xrayfix.core.exceptions import PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.schemas.github import TreeEntry
from xrayfix.services.github_service import GitHubService
from xrayfix.vcs.project import ActionResult, Project, ProjectLoader

_REMOTE_ERRORS = (RemoteCallError, PayloadError)


def _reason(error: Exception) -> str:
    return error.message if isinstance(error, RemoteCallError) else str(error)


class GitHubProject(Project):
    """
    Branch snapshot backed by the GitHub git data API.

    File contents are fetched lazily; a commit is built from blobs of the edited
    files on top of the current head, and ``push`` moves the working branch to it.
    """

    def __init__(
        self,
        service: GitHubService,
        owner: str,
        name: str,
        branch: str,
        head_sha: str,
        entries: List[TreeEntry],
    ):
        super().__init__(owner, name, branch)
        self.service = service
        self.head_sha = head_sha
        self._blobs = {e.path: e.sha for e in entries}
        self._modes = {e.path: e.mode for e in entries}
        self._contents: Dict[str, str] = {}
        self._unpushed: Optional[str] = None

    def paths(self) -> List[str]:
        return list(self._blobs)

    async def _read(self, path: str) -> str:
        if path not in self._contents:
            self._contents[path] = await self.service.get_blob(self.full_name, self._blobs[path])
        return self._contents[path]

    async def create_branch(self, name: str) -> ActionResult:
        try:
            await self.service.create_ref(self.full_name, name, self.head_sha)
        except _REMOTE_ERRORS as e:
            return ActionResult.failed(_reason(e))
        logger.info(f"Created branch {name} on {self.full_name} at {self.head_sha}")
        self.branch = name
        return ActionResult.ok(name)

    async def commit(self, message: str) -> ActionResult:
        if not self._changes:
            return ActionResult.failed("nothing to commit")
        try:
            entries = []
            for path, content in sorted(self._changes.items()):
                blob = await self.service.create_blob(self.full_name, content)
                entries.append({"path": path, "mode": self._modes.get(path, "100644"), "type": "blob", "sha": blob})
            base_tree = await self.service.get_commit_tree(self.full_name, self.head_sha)
            tree = await self.service.create_tree(self.full_name, base_tree, entries)
            sha = await self.service.create_commit(self.full_name, message, tree, self.head_sha)
        except _REMOTE_ERRORS as e:
            return ActionResult.failed(_reason(e))

        self._contents.update(self._changes)
        self._changes = {}
        self.head_sha = sha
        self._unpushed = sha
        return ActionResult.ok(sha)

    async def push(self) -> ActionResult:
        if self._unpushed is None:
            return ActionResult.failed("no commits to push")
        try:
            await self.service.update_ref(self.full_name, self.branch, self._unpushed)
        except _REMOTE_ERRORS as e:
            return ActionResult.failed(_reason(e))
        pushed, self._unpushed = self._unpushed, None
        return ActionResult.ok(pushed)

    async def raise_pull_request(self, title: str, body: str, base: Optional[str] = None) -> ActionResult:
        try:
            url = await self.service.create_pull_request(
                self.full_name, title, body, head=self.branch, base=base or self.base_branch
            )
        except _REMOTE_ERRORS as e:
            return ActionResult.failed(_reason(e))
        return ActionResult.ok(url)


class GitHubProjectLoader(ProjectLoader):
    def __init__(self, service: Optional[GitHubService] = None):
        self.service = service or GitHubService()

    async def load(self, owner: str, name: str, branch: str) -> GitHubProject:
        full_name = f"{owner}/{name}"
        head = await self.service.get_branch_head(full_name, branch)
        entries = await self.service.get_tree(full_name, head)
        logger.info(f"Loaded {full_name}@{branch} ({head}) with {len(entries)} file(s)")
        return GitHubProject(self.service, owner, name, branch, head, entries)
