# tests/test_fix_resolver.py
"""
Fix resolution tests
Tests: exact coordinate match, first fix wins, missing data
"""

from xrayfix.remediation.fix_resolver import fixes_for_dependency
from xrayfix.schemas.summary import BuildSummary

from conftest import summary_issue


def summary(*issues) -> BuildSummary:
    return BuildSummary.model_validate({"issues": list(issues)})


class TestFixesForDependency:
    """Test fix lookup against the build summary"""

    def test_exact_match_returns_first_fixed_version(self):
        fixes = fixes_for_dependency(
            summary(summary_issue(fixed_versions=["4.1", "4.2"])), "junit", "junit", "4.0"
        )

        assert len(fixes) == 1
        assert fixes[0].fix_version == "4.1"
        assert fixes[0].id == "CVE-123"
        assert fixes[0].summary == "CVE-123 fixes blah blah"

    def test_first_matching_issue_wins(self):
        fixes = fixes_for_dependency(
            summary(
                summary_issue(fixed_versions=["4.1"], cve="CVE-1"),
                summary_issue(fixed_versions=["4.12"], cve="CVE-2"),
            ),
            "junit", "junit", "4.0",
        )

        assert [f.id for f in fixes] == ["CVE-1"]

    def test_first_matching_component_within_issue_wins(self):
        issue = summary_issue()
        issue["components"] = [
            {"component_id": "gav://junit:junit:4.0", "fixed_versions": ["4.1"]},
            {"component_id": "gav://junit:junit:4.0", "fixed_versions": ["4.13.2"]},
        ]

        fixes = fixes_for_dependency(summary(issue), "junit", "junit", "4.0")

        assert len(fixes) == 1
        assert fixes[0].fix_version == "4.1"

    def test_other_version_does_not_match(self):
        assert fixes_for_dependency(summary(summary_issue()), "junit", "junit", "4.11") == []

    def test_component_without_fixed_versions_skipped(self):
        fixes = fixes_for_dependency(
            summary(summary_issue(fixed_versions=[]), summary_issue(fixed_versions=["4.2"], cve="CVE-9")),
            "junit", "junit", "4.0",
        )

        assert fixes[0].fix_version == "4.2"
        assert fixes[0].id == "CVE-9"

    def test_no_issues(self):
        assert fixes_for_dependency(BuildSummary.model_validate({}), "junit", "junit", "4.0") == []
        assert fixes_for_dependency(summary(), "junit", "junit", "4.0") == []

    def test_issue_without_components(self):
        issue = summary_issue()
        issue["components"] = None

        assert fixes_for_dependency(summary(issue), "junit", "junit", "4.0") == []

    def test_issue_id_used_when_no_cve(self):
        issue = summary_issue()
        issue["cves"] = []

        fixes = fixes_for_dependency(summary(issue), "junit", "junit", "4.0")

        assert fixes[0].id == "XRAY-1"
