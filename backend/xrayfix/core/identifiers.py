# backend/xrayfix/core/identifiers.py
"""
Build identifier parsing.

Xray reports impacted builds as ``<buildName>:<buildNumber>``; the commit graph
stores builds as ``<provider>:<env>:<buildName>:<buildNumber>``. Both are parsed
here with the field count and the numeric build number validated.
"""

import re
from dataclasses import dataclass

from xrayfix.core.constants import BUILD_ID_DELIMITER
from xrayfix.core.exceptions import BuildIdentifierError

_BUILD_NUMBER = re.compile(r"^\d+$")


@dataclass(frozen=True)
class BuildIdentity:
    build_name: str
    build_number: str

    @property
    def number(self) -> int:
        return int(self.build_number)

    def __str__(self) -> str:
        return f"{self.build_name}{BUILD_ID_DELIMITER}{self.build_number}"


def _parse(build_id: str, fields: int, grammar: str) -> BuildIdentity:
    if not isinstance(build_id, str) or not build_id:
        raise BuildIdentifierError(f"Empty build identifier, expected {grammar}")

    parts = build_id.split(BUILD_ID_DELIMITER)
    if len(parts) != fields:
        raise BuildIdentifierError(
            f"Build identifier {build_id!r} has {len(parts)} fields, expected {grammar}"
        )

    build_name, build_number = parts[-2], parts[-1]
    if not build_name:
        raise BuildIdentifierError(f"Build identifier {build_id!r} has an empty build name")
    if not _BUILD_NUMBER.match(build_number):
        raise BuildIdentifierError(
            f"Build identifier {build_id!r} has non-numeric build number {build_number!r}"
        )
    return BuildIdentity(build_name=build_name, build_number=build_number)


def parse_build_id(build_id: str) -> BuildIdentity:
    """Parse an event build identifier, ``name:number``"""
    return _parse(build_id, 2, "name:number")


def parse_graph_build_id(build_id: str) -> BuildIdentity:
    """Parse a commit-graph build identifier, ``provider:env:name:number``"""
    return _parse(build_id, 4, "provider:env:name:number")


def build_name_of(display_name: str) -> str:
    """Portion of a build display name before the build-number delimiter"""
    return display_name.split(BUILD_ID_DELIMITER)[0]
