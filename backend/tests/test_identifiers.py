# tests/test_identifiers.py
"""
Build identifier tests
Tests: event build ids, graph build ids, rejection of malformed ids
"""

import pytest

from xrayfix.core.exceptions import BuildIdentifierError
from xrayfix.core.identifiers import build_name_of, parse_build_id, parse_graph_build_id


class TestParseBuildId:
    """Test name:number parsing"""

    def test_valid_build_id(self):
        identity = parse_build_id("myjob:42")

        assert identity.build_name == "myjob"
        assert identity.build_number == "42"
        assert identity.number == 42
        assert str(identity) == "myjob:42"

    @pytest.mark.parametrize("build_id", ["", "myjob", "a:b:c", "myjob:abc", ":42", "myjob:"])
    def test_malformed_build_ids_rejected(self, build_id):
        with pytest.raises(BuildIdentifierError):
            parse_build_id(build_id)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_build_id("nonsense")


class TestParseGraphBuildId:
    """Test provider:env:name:number parsing"""

    def test_valid_graph_build_id(self):
        identity = parse_graph_build_id("jenkins:prod:myjob:42")

        assert identity.build_name == "myjob"
        assert identity.build_number == "42"

    def test_event_shaped_id_rejected(self):
        with pytest.raises(BuildIdentifierError):
            parse_graph_build_id("myjob:42")

    def test_non_numeric_number_rejected(self):
        with pytest.raises(BuildIdentifierError):
            parse_graph_build_id("jenkins:prod:myjob:latest")


def test_build_name_of():
    assert build_name_of("myjob:42") == "myjob"
    assert build_name_of("myjob") == "myjob"
