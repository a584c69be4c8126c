# backend/xrayfix/schemas/repository.py
"""Artifactory repository configuration and build info"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class RepositoryConfig(BaseModel):
    """Remote repository configuration; only the exclusion list is edited"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    key: Optional[str] = None
    excludes_pattern: Optional[str] = Field(default="", alias="excludesPattern")

    def exclusions(self) -> List[str]:
        if not self.excludes_pattern:
            return []
        return [p for p in self.excludes_pattern.split(",") if p]

    def with_exclusions(self, patterns: List[str]) -> "RepositoryConfig":
        return self.model_copy(update={"excludes_pattern": ",".join(patterns)})

    def payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class BuildInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    number: Optional[str] = None
    vcs_revision: Optional[str] = Field(default=None, alias="vcsRevision")


class BuildInfoResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    build_info: BuildInfo = Field(alias="buildInfo")
