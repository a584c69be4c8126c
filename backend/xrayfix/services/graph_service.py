# backend/xrayfix/services/graph_service.py
"""
Commit/build graph queries.
"""
import re
from typing import Any, Dict, Optional

from xrayfix.core.config import settings
from xrayfix.core.exceptions import RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.schemas import parse_payload
from xrayfix.schemas.graph import CommitQueryResult
from xrayfix.services.http import RemoteService

_REPO_FIELDS = """
      repo {
        owner
        name
        channels {
          channelId
          name
        }
      }
      push {
        branch
      }"""

FIND_BUILD_FOR_COMMIT = """
query findBuildForCommit($sha: String!, $buildId: String!) {
  Commit(sha: $sha) {
    sha
    builds(buildId: $buildId) {
      buildId
      name
      data%s
    }
  }
}
""" % _REPO_FIELDS

FIND_BUILDS_FOR_COMMIT = """
query findBuildsForCommit($sha: String!, $branch: String!) {
  Commit(sha: $sha) {
    sha
    builds(push: {branch: $branch}) {
      buildId
      name
      data%s
    }
  }
}
""" % _REPO_FIELDS


class GraphService(RemoteService):
    service_name = "graph"

    def __init__(self, url: Optional[str] = None, token: Optional[str] = None, **kwargs: Any):
        token = token if token is not None else settings.GRAPHQL_TOKEN
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        super().__init__(url or settings.GRAPHQL_URL, headers=headers, **kwargs)

    async def query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        body = await self.post_json("", {"query": query, "variables": variables})
        body = body or {}
        if body.get("errors"):
            messages = "; ".join(str(e.get("message", e)) for e in body["errors"])
            raise RemoteCallError(self.service_name, f"query failed: {messages}")
        return body.get("data") or {}

    async def find_build_for_commit(self, sha: str, build_id: str) -> CommitQueryResult:
        data = await self.query(
            FIND_BUILD_FOR_COMMIT,
            {"sha": sha, "buildId": f"^.*{re.escape(build_id)}$"},
        )
        result = parse_payload(CommitQueryResult, data, "findBuildForCommit")
        logger.info(f"Found {len(result.commits)} commit(s) for {sha} and build {build_id}")
        return result

    async def find_builds_for_commit(self, sha: str, branch: str) -> CommitQueryResult:
        data = await self.query(
            FIND_BUILDS_FOR_COMMIT,
            {"sha": sha, "branch": f"^.*{re.escape(branch)}$"},
        )
        result = parse_payload(CommitQueryResult, data, "findBuildsForCommit")
        logger.info(f"Found {len(result.commits)} commit(s) for {sha} on {branch}")
        return result
