from typing import List

from xrayfix.core.constants import COMPONENT_ID_PREFIX
from xrayfix.core.logging import logger
from xrayfix.remediation.models import FixEntry
from xrayfix.schemas.summary import BuildSummary


def fixes_for_dependency(violations: BuildSummary, group: str, artifact: str, version: str) -> List[FixEntry]:
    """
    First reported fix for an exact coordinate.

    Issues and their components are scanned in order; the first component whose
    id is ``gav://group:artifact:version`` and that lists a fixed version wins.
    At most one FixEntry is returned even when several issues apply.
    """
    dep = f"{group}:{artifact}:{version}"
    component_id = f"{COMPONENT_ID_PREFIX}{dep}"

    if not violations.issues:
        logger.warning(f"Found no issues for {dep}")
        return []

    for issue in violations.issues:
        if not issue.components:
            logger.warning(f"Found no components for {dep} in issue {issue.issue_id or issue.summary}")
            continue
        for component in issue.components:
            if component.component_id == component_id and component.fixed_versions:
                logger.info(f"Found fix for {dep}: {component.fixed_versions[0]}")
                return [
                    FixEntry(
                        id=issue.vulnerability_id,
                        summary=issue.summary,
                        fix_version=component.fixed_versions[0],
                    )
                ]

    logger.info(f"No fix reported for {dep}")
    return []
