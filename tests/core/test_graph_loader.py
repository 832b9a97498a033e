"""Tests for loading execution graphs from TOML and JSON files."""

import json

import pytest

from flowtable.graph import NodeRole, execution_from_dict, load_execution
from flowtable.graph.deserializer import parse_graph_text
from flowtable.table import FlowGraphTable

FORK_JOIN_TOML = """\
heads = ["D"]

[[nodes]]
id = "S"
role = "start"
label = "Parallel"

[[nodes]]
id = "B1"
parents = ["S"]
status = "SUCCESS"

[[nodes]]
id = "B2"
parents = ["S"]

[[nodes]]
id = "E"
role = "end"
start = "S"
parents = ["B1", "B2"]

[[nodes]]
id = "D"
parents = ["E"]
"""


class TestParseGraphText:
    def test_toml_is_unwrapped_to_plain_python(self):
        data = parse_graph_text(FORK_JOIN_TOML, "toml")

        assert type(data) is dict
        assert data["heads"] == ["D"]
        assert data["nodes"][0] == {"id": "S", "role": "start", "label": "Parallel"}

    def test_json(self):
        data = parse_graph_text('{"nodes": [{"id": "A"}]}', "json")
        assert data == {"nodes": [{"id": "A"}]}

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported graph format"):
            parse_graph_text("", "yaml")


class TestExecutionFromDict:
    def test_roles_parents_and_pairing(self):
        execution = execution_from_dict(parse_graph_text(FORK_JOIN_TOML))

        end = execution.find_by_id("E")
        assert end.role is NodeRole.END
        assert end.start is execution.find_by_id("S")
        assert [p.id for p in end.parents] == ["B1", "B2"]
        assert [n.id for n in execution.current_heads()] == ["D"]

    def test_extra_keys_become_content(self):
        execution = execution_from_dict(parse_graph_text(FORK_JOIN_TOML))

        b1 = execution.find_by_id("B1")
        assert b1.get_all_content() == {"status": "SUCCESS"}
        assert execution.find_by_id("S").get_all_content() == {}

    def test_heads_default_to_current_tips(self):
        execution = execution_from_dict({"nodes": [{"id": "A"}, {"id": "B", "parents": ["A"]}]})

        assert [n.id for n in execution.current_heads()] == ["B"]

    def test_missing_id(self):
        with pytest.raises(ValueError, match="#2 is missing an 'id'"):
            execution_from_dict({"nodes": [{"id": "A"}, {"parents": ["A"]}]})

    def test_nodes_must_be_a_list(self):
        with pytest.raises(ValueError, match="must be a list"):
            execution_from_dict({"nodes": {"id": "A"}})

    def test_forward_reference_is_rejected(self):
        with pytest.raises(KeyError, match="Parent node 'B' not found"):
            execution_from_dict({"nodes": [{"id": "A", "parents": ["B"]}, {"id": "B"}]})

    def test_unknown_head(self):
        with pytest.raises(KeyError, match="Head node 'Z' not found"):
            execution_from_dict({"heads": ["Z"], "nodes": [{"id": "A"}]})

    def test_empty_document(self):
        execution = execution_from_dict({})
        assert execution.node_count() == 0
        assert execution.current_heads() == []


class TestLoadExecution:
    def test_load_toml_file(self, tmp_path):
        path = tmp_path / "run.toml"
        path.write_text(FORK_JOIN_TOML)

        table = FlowGraphTable(load_execution(path))
        table.build()

        assert [(r.node.id, r.depth) for r in table.rows] == [
            ("S", 0),
            ("B2", 1),
            ("B1", 1),
            ("D", 0),
        ]

    def test_load_json_file(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(
            json.dumps(
                {
                    "nodes": [
                        {"id": "A"},
                        {"id": "B", "parents": ["A"]},
                    ]
                }
            )
        )

        execution = load_execution(path)

        assert [n.id for n in execution.all_nodes()] == ["A", "B"]
