"""
GitHub REST client covering the git data and pull request calls used to land a fix.

Responses are validated at the boundary; a shape GitHub did not promise surfaces
as PayloadError rather than a KeyError deep in the pipeline.
"""
import base64
import binascii
from typing import Any, Dict, List, Optional

from xrayfix.core.config import settings
from xrayfix.core.exceptions import PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.schemas import parse_payload
from xrayfix.schemas.github import GitBlob, GitCommit, GitObject, GitRef, GitTree, PullRequest, TreeEntry
from xrayfix.services.http import RemoteService


class GitHubService(RemoteService):
    service_name = "github"

    def __init__(self, api_url: Optional[str] = None, token: Optional[str] = None, **kwargs: Any):
        token = token if token is not None else settings.GITHUB_TOKEN
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        super().__init__(api_url or settings.GITHUB_API_URL, headers=headers, **kwargs)

    @staticmethod
    def _repo(full_name: str) -> str:
        return f"/repos/{full_name}"

    async def get_branch_head(self, full_name: str, branch: str) -> str:
        data = await self.get_json(f"{self._repo(full_name)}/git/ref/heads/{branch}")
        return parse_payload(GitRef, data, "github ref").target.sha

    async def get_tree(self, full_name: str, commit_sha: str) -> List[TreeEntry]:
        """Every blob reachable from ``commit_sha``; a truncated listing is an error"""
        tree_sha = await self.get_commit_tree(full_name, commit_sha)
        data = await self.get_json(
            f"{self._repo(full_name)}/git/trees/{tree_sha}",
            params={"recursive": "1"},
        )
        tree = parse_payload(GitTree, data, "github tree")
        if tree.truncated:
            logger.warning(f"Tree {tree_sha} of {full_name} is truncated at {len(tree.tree)} entries")
            raise RemoteCallError(
                self.service_name,
                f"tree of {full_name}@{commit_sha} is truncated, build files may be missing",
            )
        return [entry for entry in tree.tree if entry.type == "blob"]

    async def get_blob(self, full_name: str, blob_sha: str) -> str:
        data = await self.get_json(f"{self._repo(full_name)}/git/blobs/{blob_sha}")
        blob = parse_payload(GitBlob, data, "github blob")
        if blob.encoding != "base64":
            return blob.content
        try:
            return base64.b64decode(blob.content).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise PayloadError(f"Blob {blob_sha} of {full_name} is not UTF-8 text: {e}") from e

    async def create_ref(self, full_name: str, branch: str, sha: str) -> None:
        await self.post_json(
            f"{self._repo(full_name)}/git/refs",
            {"ref": f"refs/heads/{branch}", "sha": sha},
        )

    async def create_blob(self, full_name: str, content: str) -> str:
        data = await self.post_json(
            f"{self._repo(full_name)}/git/blobs",
            {"content": content, "encoding": "utf-8"},
        )
        return parse_payload(GitObject, data, "github blob").sha

    async def create_tree(self, full_name: str, base_tree: str, entries: List[Dict[str, str]]) -> str:
        data = await self.post_json(
            f"{self._repo(full_name)}/git/trees",
            {"base_tree": base_tree, "tree": entries},
        )
        return parse_payload(GitObject, data, "github tree").sha

    async def get_commit_tree(self, full_name: str, commit_sha: str) -> str:
        data = await self.get_json(f"{self._repo(full_name)}/git/commits/{commit_sha}")
        return parse_payload(GitCommit, data, "github commit").tree.sha

    async def create_commit(self, full_name: str, message: str, tree: str, parent: str) -> str:
        data = await self.post_json(
            f"{self._repo(full_name)}/git/commits",
            {"message": message, "tree": tree, "parents": [parent]},
        )
        return parse_payload(GitObject, data, "github commit").sha

    async def update_ref(self, full_name: str, branch: str, sha: str) -> None:
        await self.request(
            "PATCH",
            f"{self._repo(full_name)}/git/refs/heads/{branch}",
            json={"sha": sha, "force": False},
        )

    async def create_pull_request(self, full_name: str, title: str, body: str, head: str, base: str) -> str:
        data = await self.post_json(
            f"{self._repo(full_name)}/pulls",
            {"title": title, "body": body, "head": head, "base": base},
        )
        return parse_payload(PullRequest, data, "github pull request").html_url
