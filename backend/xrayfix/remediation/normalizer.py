"""
Violation normalization.

A single newly-detected issue is reported against every historical build of a
job; only the most recent build per job matters for remediation.
"""
from typing import Dict, List

from xrayfix.core.identifiers import build_name_of, parse_build_id
from xrayfix.core.logging import logger
from xrayfix.schemas.violation import ImpactedArtifact, Violation


def latest_builds_only(violation: Violation) -> Violation:
    """
    Keep only the latest impacted build per build name.

    Applies only when the violation carries exactly one issue; otherwise the
    violation is returned unchanged. Raises BuildIdentifierError when a build
    number is not numeric.
    """
    if len(violation.issues) != 1:
        logger.info("Not removing duplicate builds...")
        return violation

    issue = violation.issues[0]
    latest: Dict[str, ImpactedArtifact] = {}
    for artifact in issue.impacted_artifacts:
        name = build_name_of(artifact.display_name)
        number = parse_build_id(artifact.display_name).number
        current = latest.get(name)
        if current is None or number >= parse_build_id(current.display_name).number:
            latest[name] = artifact

    artifacts: List[ImpactedArtifact] = list(latest.values())
    if len(artifacts) != len(issue.impacted_artifacts):
        logger.info(
            f"Reduced {len(issue.impacted_artifacts)} impacted build(s) to {len(artifacts)}"
        )
    return violation.model_copy(
        update={"issues": [issue.model_copy(update={"impacted_artifacts": artifacts})]}
    )


def is_internal_issue(violation: Violation) -> bool:
    """A single issue authored by this service rather than the scanner"""
    return len(violation.issues) == 1 and violation.issues[0].is_internal
