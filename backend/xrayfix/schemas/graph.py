# backend/xrayfix/schemas/graph.py
"""Commit -> build -> repository linkage returned by the graph queries"""
import json
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from xrayfix.core.exceptions import PayloadError


class _GraphModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Channel(_GraphModel):
    channel_id: str = Field(alias="channelId")
    name: Optional[str] = None


class Repo(_GraphModel):
    owner: str
    name: str
    channels: List[Channel] = []

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def default_channel(self) -> Optional[Channel]:
        return self.channels[0] if self.channels else None


class Push(_GraphModel):
    branch: str


class Build(_GraphModel):
    build_id: Optional[str] = Field(default=None, alias="buildId")
    name: Optional[str] = None
    data: Optional[str] = None
    repo: Repo
    push: Optional[Push] = None

    @property
    def build_dir(self) -> str:
        """``buildDir`` from the JSON build-info blob, empty when absent"""
        if not self.data:
            return ""
        try:
            info = json.loads(self.data)
        except ValueError as e:
            raise PayloadError(f"Build {self.build_id} carries malformed build info: {e}") from e
        if not isinstance(info, dict):
            return ""
        return info.get("buildDir") or ""


class Commit(_GraphModel):
    sha: Optional[str] = None
    builds: List[Build] = []


class CommitQueryResult(_GraphModel):
    commits: List[Commit] = Field(default=[], alias="Commit")

    def first_build(self) -> Optional[Build]:
        if not self.commits or not self.commits[0].builds:
            return None
        return self.commits[0].builds[0]
