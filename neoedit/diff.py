"""Diffs between edit histories, and applying them as patches."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field

from neoedit.errors import SerializationError
from neoedit.ops import EditOp


@dataclass
class EditDiff:
    """Operations added and removed between two histories, plus the shared count."""

    added_ops: list = field(default_factory=list)
    removed_ops: list = field(default_factory=list)
    common_ops: int = 0

    def __post_init__(self):
        self.added_ops = list(self.added_ops)
        self.removed_ops = list(self.removed_ops)
        count = self.common_ops
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"common_ops must be a non-negative integer, got {count!r}")

    def to_dict(self):
        """Return the JSON-ready mapping form of the diff."""
        return {
            "added_ops": [op.to_dict() for op in self.added_ops],
            "removed_ops": [op.to_dict() for op in self.removed_ops],
            "common_ops": self.common_ops,
        }

    @classmethod
    def from_dict(cls, data):
        """Build a diff from its mapping form."""
        if not isinstance(data, Mapping):
            raise SerializationError("invalid type: expected an edit diff object")
        for name in ("added_ops", "removed_ops", "common_ops"):
            if name not in data:
                raise SerializationError(f"missing field `{name}`")
        for name in ("added_ops", "removed_ops"):
            if not isinstance(data[name], list):
                raise SerializationError(f"invalid type for `{name}`: expected an array")
        count = data["common_ops"]
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise SerializationError(
                "invalid type for `common_ops`: expected a non-negative integer"
            )
        return cls(
            added_ops=[EditOp.from_dict(item) for item in data["added_ops"]],
            removed_ops=[EditOp.from_dict(item) for item in data["removed_ops"]],
            common_ops=count,
        )

    def to_json(self):
        """Serialize the diff to pretty-printed JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text):
        """Deserialize a diff from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerializationError(str(exc)) from exc
        return cls.from_dict(data)


def compute_diff(history_a, history_b):
    """Compare the flattened operations of two histories.

    Operations shared as a common prefix are counted; everything after the
    prefix in ``history_a`` is removed and everything after it in
    ``history_b`` is added.
    """
    ops_a = history_a.all_ops()
    ops_b = history_b.all_ops()
    prefix = 0
    for op_a, op_b in zip(ops_a, ops_b):
        if op_a != op_b:
            break
        prefix += 1
    return EditDiff(
        added_ops=ops_b[prefix:],
        removed_ops=ops_a[prefix:],
        common_ops=prefix,
    )


def apply_patch(history, diff, message):
    """Commit the diff's added operations onto ``history`` and return the hash.

    Removed operations are not undone.
    """
    return history.commit(list(diff.added_ops), message, None)