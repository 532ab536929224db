import json

import pytest

from neoedit.errors import GainOutOfRangeError, InvalidOperationError, SerializationError
from neoedit.graph import EditGraph, EditNode
from neoedit.ops import Gain, Mute


def test_node_hash_is_deterministic():
    op = Gain(0, 6.0)
    a = EditNode.create(op, None, "t")
    b = EditNode.create(op, None, "t")
    assert a.hash == b.hash
    assert len(a.hash) == 32


def test_node_hash_differs_with_parent():
    op = Gain(0, 6.0)
    a = EditNode.create(op, None, "t")
    b = EditNode.create(op, bytes([1]) * 32, "t")
    assert a.hash != b.hash


def test_node_hash_differs_with_op():
    a = EditNode.create(Gain(0, 6.0), None, "t")
    b = EditNode.create(Gain(0, 3.0), None, "t")
    assert a.hash != b.hash


def test_root_hash_uses_zero_parent():
    op = Mute(3)
    assert EditNode.compute_hash(None, op) == EditNode.compute_hash(bytes(32), op)


def test_node_dict_round_trip():
    node = EditNode.create(Gain(2, -3.0), bytes([7]) * 32, "when")
    node.description = "cut"
    again = EditNode.from_dict(node.to_dict())
    assert again == node


def test_graph_empty():
    g = EditGraph()
    assert g.head() is None
    assert g.nodes() == ()


def test_graph_add_and_head():
    g = EditGraph()
    h = g.add_op(Mute(0), "mute vocals")
    assert g.head().hash == h
    assert len(g.nodes()) == 1
    assert g.head().parent_hash is None
    assert g.head().description == "mute vocals"
    assert g.head().timestamp == "2026-01-01T00:00:00Z"


def test_graph_parent_linkage():
    g = EditGraph()
    h1 = g.add_op(Mute(0))
    g.add_op(Gain(1, 3.0))
    assert g.nodes()[1].parent_hash == h1


def test_graph_ops_for_stem():
    g = EditGraph()
    g.add_op(Mute(0))
    g.add_op(Gain(1, 3.0))
    g.add_op(Gain(0, -6.0))
    assert g.ops_for_stem(0) == [Mute(0), Gain(0, -6.0)]
    assert len(g.ops_for_stem(1)) == 1
    assert g.ops_for_stem(2) == []


def test_graph_rejects_invalid_op():
    g = EditGraph()
    with pytest.raises(GainOutOfRangeError):
        g.add_op(Gain(0, 100.0))
    assert g.nodes() == ()


def test_graph_validate_ok():
    g = EditGraph()
    g.add_op(Mute(0))
    g.add_op(Gain(0, 3.0))
    assert g.validate() is None
    assert len(g) == 2


def test_graph_json_round_trip():
    g = EditGraph()
    g.add_op(Mute(0), "mute")
    g.add_op(Gain(1, -3.0))
    g2 = EditGraph.from_json(g.to_json())
    assert len(g2.nodes()) == 2
    assert g2.nodes()[0].hash == g.nodes()[0].hash
    assert g2.nodes()[1].hash == g.nodes()[1].hash
    assert g2.nodes()[0].description == "mute"
    g2.validate()
    assert g2.nodes() == g.nodes()


def test_validate_detects_tampered_hash():
    g = EditGraph()
    g.add_op(Mute(0))
    data = json.loads(g.to_json())
    data["nodes"][0]["hash"][0] ^= 1
    tampered = EditGraph.from_json(json.dumps(data))
    with pytest.raises(InvalidOperationError, match="node 0 hash mismatch"):
        tampered.validate()


def test_validate_detects_broken_linkage():
    g = EditGraph([EditNode.create(Mute(0), None, "t"), EditNode.create(Mute(1), None, "t")])
    with pytest.raises(InvalidOperationError, match="node 1 parent hash does not match node 0"):
        g.validate()


def test_validate_rejects_root_with_parent():
    g = EditGraph([EditNode.create(Mute(0), bytes([1]) * 32, "t")])
    with pytest.raises(InvalidOperationError, match="root node must not have a parent hash"):
        g.validate()


def test_validate_rejects_invalid_op():
    g = EditGraph([EditNode.create(Gain(0, 100.0), None, "t")])
    with pytest.raises(GainOutOfRangeError):
        g.validate()


@pytest.mark.parametrize(
    "text",
    ["not json", "[]", "{}", '{"nodes": [{"hash": [1, 2]}]}'],
)
def test_from_json_rejects_bad_input(text):
    with pytest.raises(SerializationError):
        EditGraph.from_json(text)