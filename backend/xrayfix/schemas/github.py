# backend/xrayfix/schemas/github.py
"""GitHub git data and pull request responses"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class _GitHubModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GitObject(_GitHubModel):
    sha: str = Field(min_length=1)


class GitRef(_GitHubModel):
    target: GitObject = Field(alias="object")


class GitCommit(_GitHubModel):
    sha: Optional[str] = None
    tree: GitObject


class TreeEntry(_GitHubModel):
    path: str
    sha: str
    type: str
    mode: str = "100644"


class GitTree(_GitHubModel):
    sha: Optional[str] = None
    tree: List[TreeEntry] = []
    truncated: bool = False


class GitBlob(_GitHubModel):
    content: str = ""
    encoding: Optional[str] = None


class PullRequest(_GitHubModel):
    number: Optional[int] = None
    html_url: str = Field(min_length=1)
