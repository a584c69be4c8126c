# backend/xrayfix/core/constants.py
from enum import Enum


class IssueProvider(str, Enum):
    """Who authored an Xray issue"""
    ATOMIST = "Atomist"
    JFROG = "JFrog"


# Issues raised by this service (CreateNewXrayIssue) carry this provider and are
# routed to chat notifications instead of remediation.
INTERNAL_PROVIDER = IssueProvider.ATOMIST
INTERNAL_SOURCE_ID = "atomist"

BUILD_ID_DELIMITER = ":"
COMPONENT_ID_PREFIX = "gav://"


class OutcomeCode(str, Enum):
    SUCCESS = "success"
    NOOP = "noop"
    FAILURE = "failure"


class RemediationStage(str, Enum):
    NORMALIZE = "normalize"
    NOTIFY = "notify"
    GATE = "gate"
    RESOLVE_BUILD = "resolve_build"
    RESOLVE_COMMIT = "resolve_commit"
    FETCH_VIOLATIONS = "fetch_violations"
    LOAD_PROJECT = "load_project"
    CREATE_BRANCH = "create_branch"
    PATCH = "patch"
    COMMIT = "commit"
    PUSH = "push"
    RAISE_PR = "raise_pr"


class CommandName(str, Enum):
    BLOCK_DOWNLOAD = "BlockArtifactoryDownload"
    UNBLOCK_DOWNLOAD = "UnblockArtifactoryDownload"
    IGNORE_VIOLATION = "IgnoreViolationForProject"
    UNIGNORE_VIOLATION = "UnIgnoreViolationForProject"
    CREATE_ISSUE = "CreateNewXrayIssue"


COMMAND_TAGS = ["artifactory", "security", "artifacts", "jfrog"]
