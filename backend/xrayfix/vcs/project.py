# backend/xrayfix/vcs/project.py
"""
Repository snapshots the remediation pipeline edits.

A Project exposes the files of one branch, records edits in memory and lands
them through four remote operations (branch, commit, push, pull request), each
reporting an ActionResult rather than raising.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ActionResult:
    success: bool
    error: Optional[str] = None
    target: Optional[str] = None

    @classmethod
    def ok(cls, target: Optional[str] = None) -> "ActionResult":
        return cls(success=True, target=target)

    @classmethod
    def failed(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)


def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a path glob (``**``, ``*``, ``?``) into an anchored regex"""
    out = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(out) + "$")


def build_file_glob(build_dir: str, file_glob: str) -> str:
    """Glob for descriptor files rooted at a build-relative directory"""
    root = (build_dir or "").strip()
    if root.startswith("./"):
        root = root[2:]
    root = root.strip("/")
    return f"{root}/{file_glob}" if root else file_glob


class Project(ABC):
    """One branch of a repository, with pending edits"""

    def __init__(self, owner: str, name: str, branch: str):
        self.owner = owner
        self.name = name
        self.branch = branch
        self.base_branch = branch
        self._changes: Dict[str, str] = {}

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def is_dirty(self) -> bool:
        return bool(self._changes)

    @abstractmethod
    def paths(self) -> List[str]:
        """All file paths in the snapshot"""

    @abstractmethod
    async def _read(self, path: str) -> str:
        pass

    def find_files(self, pattern: str) -> List[str]:
        matcher = glob_to_regex(pattern)
        return sorted(p for p in self.paths() if matcher.match(p))

    async def get_content(self, path: str) -> Optional[str]:
        """Current content of ``path``, None when the file does not exist"""
        if path in self._changes:
            return self._changes[path]
        if path not in self.paths():
            return None
        return await self._read(path)

    async def set_content(self, path: str, content: str) -> None:
        current = await self.get_content(path)
        if current == content:
            return
        self._changes[path] = content

    @abstractmethod
    async def create_branch(self, name: str) -> ActionResult:
        pass

    @abstractmethod
    async def commit(self, message: str) -> ActionResult:
        pass

    @abstractmethod
    async def push(self) -> ActionResult:
        pass

    @abstractmethod
    async def raise_pull_request(self, title: str, body: str, base: Optional[str] = None) -> ActionResult:
        pass


class ProjectLoader(ABC):
    @abstractmethod
    async def load(self, owner: str, name: str, branch: str) -> Project:
        pass


class InMemoryProject(Project):
    """Project held entirely in memory; VCS operations are recorded, not sent"""

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        owner: str = "owner",
        name: str = "repo",
        branch: str = "master",
    ):
        super().__init__(owner, name, branch)
        self.files: Dict[str, str] = dict(files or {})
        self.commits: List[str] = []
        self.pushed: List[str] = []
        self.pull_requests: List[Dict[str, Optional[str]]] = []
        self.fail_on: Dict[str, str] = {}

    @classmethod
    def of(cls, *files: "FileSpec", **kwargs) -> "InMemoryProject":
        return cls({f.path: f.content for f in files}, **kwargs)

    def paths(self) -> List[str]:
        return list(self.files)

    async def _read(self, path: str) -> str:
        return self.files[path]

    def content_of(self, path: str) -> Optional[str]:
        return self._changes.get(path, self.files.get(path))

    async def create_branch(self, name: str) -> ActionResult:
        if "create_branch" in self.fail_on:
            return ActionResult.failed(self.fail_on["create_branch"])
        self.branch = name
        return ActionResult.ok(name)

    async def commit(self, message: str) -> ActionResult:
        if "commit" in self.fail_on:
            return ActionResult.failed(self.fail_on["commit"])
        if not self._changes:
            return ActionResult.failed("nothing to commit")
        self.files.update(self._changes)
        self._changes = {}
        self.commits.append(message)
        return ActionResult.ok()

    async def push(self) -> ActionResult:
        if "push" in self.fail_on:
            return ActionResult.failed(self.fail_on["push"])
        self.pushed.append(self.branch)
        return ActionResult.ok(self.branch)

    async def raise_pull_request(self, title: str, body: str, base: Optional[str] = None) -> ActionResult:
        if "raise_pull_request" in self.fail_on:
            return ActionResult.failed(self.fail_on["raise_pull_request"])
        self.pull_requests.append(
            {"title": title, "body": body, "head": self.branch, "base": base or self.base_branch}
        )
        return ActionResult.ok(f"https://example.invalid/{self.full_name}/pull/{len(self.pull_requests)}")


@dataclass
class FileSpec:
    path: str
    content: str = field(default="")
