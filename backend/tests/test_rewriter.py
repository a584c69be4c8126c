# tests/test_rewriter.py
"""
Dependency rewriting tests
Tests: in-place version updates, untouched files, missing files and declarations
"""

import pytest

from xrayfix.core.exceptions import BuildFileNotFoundError, DependencyNotFoundError
from xrayfix.remediation.extractor import coordinate_patterns, gradle_dependencies
from xrayfix.remediation.models import BuildFile, Dependency, FixEntry
from xrayfix.remediation.rewriter import update_dependency, update_gradle_dependencies
from xrayfix.schemas.summary import BuildSummary
from xrayfix.vcs.project import FileSpec, InMemoryProject

from conftest import JFROG_PROJECT_EXAMPLE, MAP_NOTATION, STRING_NOTATION, summary_issue

JUNIT_FIX = BuildSummary.model_validate({"issues": [summary_issue()]})


class TestUpdateDependency:
    """Test text level rewriting"""

    def test_string_notation_updated_in_place(self):
        content, matched = update_dependency(
            STRING_NOTATION, "junit", "junit", "4.0", "4.1", *coordinate_patterns("junit", "junit")
        )

        assert matched == 1
        assert content == STRING_NOTATION.replace("'junit:junit:4.0'", "'junit:junit:4.1'")

    def test_map_notation_updated_in_place(self):
        content, matched = update_dependency(
            MAP_NOTATION, "junit", "junit", "4.0", "4.1", *coordinate_patterns("junit", "junit")
        )

        assert matched == 1
        assert content == MAP_NOTATION.replace("version: '4.0'", "version: '4.1'")

    def test_only_named_coordinate_changes(self):
        content, _ = update_dependency(
            JFROG_PROJECT_EXAMPLE,
            "org.apache.struts", "struts2-core", "2.3.14", "[2.3.15.1,2.3.16)",
            *coordinate_patterns("org.apache.struts", "struts2-core"),
        )

        assert "version: '[2.3.15.1,2.3.16)'" in content
        assert "version: '1.3.7'" in content
        assert "version: '4.11'" in content

    def test_regex_metacharacters_in_group_are_literal(self):
        content, matched = update_dependency(
            "compile 'orgXapache:lib:1.0'", "org.apache", "lib", "1.0", "2.0",
            *coordinate_patterns("org.apache", "lib"),
        )

        assert matched == 0
        assert content == "compile 'orgXapache:lib:1.0'"


class TestUpdateGradleDependencies:
    """Test project level rewriting"""

    @pytest.mark.asyncio
    async def test_rewrites_files_regardless_of_location(self):
        project = InMemoryProject.of(
            FileSpec("stuff/build.gradle", STRING_NOTATION),
            FileSpec("build.gradle", MAP_NOTATION),
        )
        files = await gradle_dependencies(project, "", JUNIT_FIX)

        changed = await update_gradle_dependencies(project, files)

        assert sorted(changed) == ["build.gradle", "stuff/build.gradle"]
        assert "'junit:junit:4.1'" in project.content_of("stuff/build.gradle")
        assert "version: '4.1'" in project.content_of("build.gradle")
        assert "4.0" not in project.content_of("build.gradle")

    @pytest.mark.asyncio
    async def test_no_fixes_leaves_project_clean(self):
        project = InMemoryProject({"build.gradle": STRING_NOTATION})
        files = await gradle_dependencies(project, "", BuildSummary.model_validate({"issues": []}))

        assert await update_gradle_dependencies(project, files) == []
        assert project.is_dirty is False

    @pytest.mark.asyncio
    async def test_missing_build_file(self):
        project = InMemoryProject({})
        files = [BuildFile(path="build.gradle", dependencies=[])]

        with pytest.raises(BuildFileNotFoundError, match="Could not find file: build.gradle in project"):
            await update_gradle_dependencies(project, files)

    @pytest.mark.asyncio
    async def test_dependency_no_longer_declared(self):
        project = InMemoryProject({"build.gradle": STRING_NOTATION})
        dep = Dependency("org.other", "lib", "1.0", [FixEntry("CVE-1", "bad", "1.1")])

        with pytest.raises(DependencyNotFoundError):
            await update_gradle_dependencies(project, [BuildFile("build.gradle", [dep])])
