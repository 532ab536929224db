"""The edit graph: a hash-linked chain of non-destructive edit operations."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field

from neoedit.errors import InvalidOperationError, SerializationError
from neoedit.hashing import Blake3
from neoedit.ops import EditOp

_ROOT_PARENT = bytes(32)
_TIMESTAMP = "2026-01-01T00:00:00Z"


def _hash_to_json(value):
    return None if value is None else list(value)


def _hash_from_json(value, name):
    if not isinstance(value, list):
        raise SerializationError(f"invalid type for `{name}`: expected an array of 32 bytes")
    if len(value) != 32:
        raise SerializationError(f"invalid length {len(value)} for `{name}`, expected 32")
    if any(isinstance(b, bool) or not isinstance(b, int) or not 0 <= b <= 255 for b in value):
        raise SerializationError(f"invalid byte in `{name}`")
    return bytes(value)


def _check_hash(value, name):
    if not isinstance(value, (bytes, bytearray)) or len(value) != 32:
        raise ValueError(f"{name} must be 32 bytes")
    return bytes(value)


@dataclass
class EditNode:
    """One operation in the graph, identified by a BLAKE3 hash of parent and op."""

    hash: bytes
    parent_hash: "bytes | None"
    operation: EditOp
    timestamp: str
    description: "str | None" = field(default=None)

    def __post_init__(self):
        self.hash = _check_hash(self.hash, "hash")
        if self.parent_hash is not None:
            self.parent_hash = _check_hash(self.parent_hash, "parent_hash")

    @classmethod
    def create(cls, op, parent_hash, timestamp):
        """Build a node for ``op`` under ``parent_hash``, computing its hash."""
        return cls(cls.compute_hash(parent_hash, op), parent_hash, op, timestamp)

    @staticmethod
    def compute_hash(parent_hash, op):
        """Hash the parent hash (zeros for a root) followed by the op's JSON."""
        hasher = Blake3(_ROOT_PARENT if parent_hash is None else bytes(parent_hash))
        hasher.update(op.to_json_bytes())
        return hasher.digest()

    def to_dict(self):
        """Return the JSON-ready mapping form of the node."""
        return {
            "hash": _hash_to_json(self.hash),
            "parent_hash": _hash_to_json(self.parent_hash),
            "operation": self.operation.to_dict(),
            "timestamp": self.timestamp,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data):
        """Build a node from its mapping form."""
        if not isinstance(data, Mapping):
            raise SerializationError("invalid type: expected an edit node object")
        for name in ("hash", "operation", "timestamp"):
            if name not in data:
                raise SerializationError(f"missing field `{name}`")
        parent = data.get("parent_hash")
        timestamp = data["timestamp"]
        if not isinstance(timestamp, str):
            raise SerializationError("invalid type for `timestamp`: expected a string")
        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise SerializationError("invalid type for `description`: expected a string")
        return cls(
            hash=_hash_from_json(data["hash"], "hash"),
            parent_hash=None if parent is None else _hash_from_json(parent, "parent_hash"),
            operation=EditOp.from_dict(data["operation"]),
            timestamp=timestamp,
            description=description,
        )


class EditGraph:
    """Edit operations appended in order, each node linked to the previous one."""

    def __init__(self, nodes=()):
        self._nodes = list(nodes)

    def __len__(self):
        return len(self._nodes)

    def add_op(self, op, description=None):
        """Validate ``op``, append it as the new head and return its hash."""
        op.validate()
        head = self.head()
        node = EditNode.create(op, None if head is None else head.hash, _TIMESTAMP)
        node.description = description
        self._nodes.append(node)
        return node.hash

    def head(self):
        """Return the most recently added node, or None."""
        return self._nodes[-1] if self._nodes else None

    def nodes(self):
        """Return all nodes, oldest first."""
        return tuple(self._nodes)

    def ops_for_stem(self, stem_id):
        """Return the operations that target ``stem_id``, in insertion order."""
        return [node.operation for node in self._nodes if node.operation.stem_id == stem_id]

    def to_json(self):
        """Serialize the graph to pretty-printed JSON."""
        return json.dumps(
            {"nodes": [node.to_dict() for node in self._nodes]}, indent=2, ensure_ascii=False
        )

    @classmethod
    def from_json(cls, text):
        """Deserialize a graph from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerializationError(str(exc)) from exc
        if not isinstance(data, dict):
            raise SerializationError("invalid type: expected an edit graph object")
        if "nodes" not in data:
            raise SerializationError("missing field `nodes`")
        if not isinstance(data["nodes"], list):
            raise SerializationError("invalid type for `nodes`: expected an array")
        return cls(EditNode.from_dict(item) for item in data["nodes"])

    def validate(self):
        """Check every op, every node hash and the parent links."""
        previous = None
        for index, node in enumerate(self._nodes):
            node.operation.validate()
            expected = EditNode.compute_hash(node.parent_hash, node.operation)
            if node.hash != expected:
                raise InvalidOperationError(
                    f"node {index} hash mismatch: expected {expected.hex()}, "
                    f"got {node.hash.hex()}"
                )
            if previous is None:
                if node.parent_hash is not None:
                    raise InvalidOperationError("root node must not have a parent hash")
            elif node.parent_hash != previous.hash:
                raise InvalidOperationError(
                    f"node {index} parent hash does not match node {index - 1}"
                )
            previous = node