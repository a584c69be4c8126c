"""
Gradle dependency extraction.

Two declaration notations are recognised:

- quoted coordinates, ``'group:artifact:version'`` (single or double quotes)
- map notation, ``group: 'g', name: 'a', version: 'v'`` in that field order

Both patterns capture ``(group, artifact, version)`` as groups 1-3. They are
built with a wildcard for extraction and with an escaped, concrete coordinate
for rewriting.
"""
import re
from typing import List, Optional

from xrayfix.core.config import settings
from xrayfix.core.logging import logger
from xrayfix.remediation.fix_resolver import fixes_for_dependency
from xrayfix.remediation.models import BuildFile, Dependency
from xrayfix.schemas.summary import BuildSummary
from xrayfix.vcs.project import Project, build_file_glob

ANY = r"\S+?"
_QUOTE = "[\"']"


def string_pattern(group: str = ANY, artifact: str = ANY) -> "re.Pattern[str]":
    """``'group:artifact:version'``"""
    return re.compile(rf"{_QUOTE}({group}):({artifact}):(.*?){_QUOTE}", re.M)


def map_pattern(group: str = ANY, artifact: str = ANY) -> "re.Pattern[str]":
    """``group: 'g', name: 'a', version: 'v'``"""
    return re.compile(
        rf"group\s*:\s*{_QUOTE}({group}){_QUOTE}\s*,"
        rf"\s*name\s*:\s*{_QUOTE}({artifact}){_QUOTE}\s*,"
        rf"\s*version\s*:\s*{_QUOTE}(.*?){_QUOTE}",
        re.M,
    )


def coordinate_patterns(group: str, artifact: str) -> List["re.Pattern[str]"]:
    """Both notations, pinned to one group and artifact"""
    g, a = re.escape(group), re.escape(artifact)
    return [string_pattern(g, a), map_pattern(g, a)]


def _extract(content: str, pattern: "re.Pattern[str]", violations: BuildSummary) -> List[Dependency]:
    deps = []
    # finditer starts a fresh scan on every call
    for match in pattern.finditer(content):
        group, artifact, version = match.group(1), match.group(2), match.group(3)
        if not version:
            continue
        deps.append(
            Dependency(
                group=group,
                artifact=artifact,
                version=version,
                fixes=fixes_for_dependency(violations, group, artifact, version),
            )
        )
    return deps


def extract_dependencies(content: str, violations: BuildSummary, path: str = "<text>") -> List[Dependency]:
    """Every declaration in ``content`` in either notation, with any applicable fix"""
    logger.info(f"Extracting dependencies from: {path}")
    deps = _extract(content, map_pattern(), violations) + _extract(content, string_pattern(), violations)
    logger.info(f"Found {len(deps)} deps in {path}")
    return deps


async def gradle_dependencies(
    project: Project,
    build_dir: str,
    violations: BuildSummary,
    file_glob: Optional[str] = None,
) -> List[BuildFile]:
    """Dependencies of every build descriptor under ``build_dir``"""
    pattern = build_file_glob(build_dir, file_glob or settings.BUILD_FILE_GLOB)
    paths = project.find_files(pattern)
    logger.info(f"Looking at: {len(paths)} build file(s) matching {pattern}")

    files = []
    for path in paths:
        content = await project.get_content(path)
        files.append(BuildFile(path=path, dependencies=extract_dependencies(content or "", violations, path)))
    return files
