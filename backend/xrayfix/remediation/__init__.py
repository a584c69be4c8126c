"""
Xray violation remediation.

Core components:
- normalizer: reduce a violation to the latest build per job
- extractor: find Gradle dependency declarations and attach reported fixes
- fix_resolver: first reported fix for a coordinate
- rewriter: rewrite declaration versions in place
- orchestrator: resolve build -> commit -> repository and land a pull request
- notifier: chat notification path for internally-authored issues

Usage:
    from xrayfix.remediation import RemediationOrchestrator

    outcome = await orchestrator.handle_violation(violation)
    print(outcome.code, outcome.message)
"""

from .models import BuildFile, Dependency, FixEntry, RemediationOutcome
from .notifier import IssueNotifier
from .orchestrator import RemediationOrchestrator, generate_body

__all__ = [
    "BuildFile",
    "Dependency",
    "FixEntry",
    "RemediationOutcome",
    "IssueNotifier",
    "RemediationOrchestrator",
    "generate_body",
]
