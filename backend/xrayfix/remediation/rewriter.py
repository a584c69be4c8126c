"""
In-place version rewriting of Gradle dependency declarations.

Only the old version token inside each matched declaration is replaced, so
quotes, separators and the rest of the file stay byte-identical.
"""
import re
from typing import List, Tuple

from xrayfix.core.exceptions import BuildFileNotFoundError, DependencyNotFoundError
from xrayfix.core.logging import logger
from xrayfix.remediation.extractor import coordinate_patterns
from xrayfix.remediation.models import BuildFile
from xrayfix.vcs.project import Project


def update_dependency(
    content: str,
    group: str,
    artifact: str,
    from_version: str,
    to_version: str,
    *patterns: "re.Pattern[str]",
    path: str = "<text>",
) -> Tuple[str, int]:
    """
    Replace ``from_version`` with ``to_version`` in every declaration matching
    ``patterns``. Returns the new content and the number of declarations matched.
    """
    matched = 0

    def _replace(match: "re.Match[str]") -> str:
        nonlocal matched
        matched += 1
        logger.info(
            f"Found match for {group}:{artifact}:{from_version} in {path}, updating to {to_version}"
        )
        return match.group(0).replace(from_version, to_version, 1)

    for pattern in patterns:
        content = pattern.sub(_replace, content)
    return content, matched


async def update_gradle_dependencies(project: Project, files: List[BuildFile]) -> List[str]:
    """
    Apply every resolved fix to its build file. Returns the paths that changed.

    Raises BuildFileNotFoundError when a listed file is missing from the project,
    and DependencyNotFoundError when a dependency extracted from a file no longer
    matches any declaration in it.
    """
    changed = []
    for build_file in files:
        logger.info(f"Processing file {build_file.path}")
        original = await project.get_content(build_file.path)
        if original is None:
            raise BuildFileNotFoundError(build_file.path)

        content = original
        for dep in build_file.dependencies:
            for fix in dep.fixes:
                content, matched = update_dependency(
                    content,
                    dep.group,
                    dep.artifact,
                    dep.version,
                    fix.fix_version,
                    *coordinate_patterns(dep.group, dep.artifact),
                    path=build_file.path,
                )
                if not matched:
                    raise DependencyNotFoundError(build_file.path, dep.coordinate)

        if content != original:
            await project.set_content(build_file.path, content)
            changed.append(build_file.path)
    return changed
