# backend/xrayfix/vcs/__init__.py
from xrayfix.vcs.project import ActionResult, FileSpec, InMemoryProject, Project, ProjectLoader
from xrayfix.vcs.github import GitHubProject, GitHubProjectLoader

__all__ = [
    "ActionResult",
    "FileSpec",
    "InMemoryProject",
    "Project",
    "ProjectLoader",
    "GitHubProject",
    "GitHubProjectLoader",
]
