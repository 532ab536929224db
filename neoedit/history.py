"""Git-like commit history grouping edit operations into hash-linked commits."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field

from neoedit.errors import InvalidOperationError, NothingToRevertError, SerializationError
from neoedit.graph import _check_hash, _hash_from_json, _hash_to_json
from neoedit.hashing import Blake3
from neoedit.ops import EditOp, ops_to_json_bytes

_ROOT_PARENT = bytes(32)
_TIMESTAMP = "2026-01-01T00:00:00Z"


def _optional_str(data, name):
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise SerializationError(f"invalid type for `{name}`: expected a string")
    return value


@dataclass
class EditCommit:
    """A group of edit operations with a message, identified by a BLAKE3 hash."""

    hash: bytes
    parent: "bytes | None"
    edit_ops: list
    message: str
    timestamp: str
    author: "str | None" = field(default=None)

    def __post_init__(self):
        self.hash = _check_hash(self.hash, "hash")
        if self.parent is not None:
            self.parent = _check_hash(self.parent, "parent")
        self.edit_ops = list(self.edit_ops)

    @classmethod
    def create(cls, ops, message, parent=None, author=None):
        """Build a commit of ``ops`` under ``parent``, computing its hash."""
        ops = list(ops)
        message = str(message)
        return cls(
            hash=cls.compute_hash(parent, ops, message),
            parent=parent,
            edit_ops=ops,
            message=message,
            timestamp=_TIMESTAMP,
            author=author,
        )

    @staticmethod
    def compute_hash(parent, ops, message):
        """Hash the parent (zeros for a root), the ops' JSON and the message."""
        hasher = Blake3(_ROOT_PARENT if parent is None else bytes(parent))
        hasher.update(ops_to_json_bytes(ops))
        hasher.update(message.encode("utf-8"))
        return hasher.digest()

    def to_dict(self):
        """Return the JSON-ready mapping form of the commit."""
        return {
            "hash": _hash_to_json(self.hash),
            "parent": _hash_to_json(self.parent),
            "ops": [op.to_dict() for op in self.edit_ops],
            "message": self.message,
            "timestamp": self.timestamp,
            "author": self.author,
        }

    @classmethod
    def from_dict(cls, data):
        """Build a commit from its mapping form."""
        if not isinstance(data, Mapping):
            raise SerializationError("invalid type: expected an edit commit object")
        for name in ("hash", "ops", "message", "timestamp"):
            if name not in data:
                raise SerializationError(f"missing field `{name}`")
        if not isinstance(data["ops"], list):
            raise SerializationError("invalid type for `ops`: expected an array")
        for name in ("message", "timestamp"):
            if not isinstance(data[name], str):
                raise SerializationError(f"invalid type for `{name}`: expected a string")
        parent = data.get("parent")
        return cls(
            hash=_hash_from_json(data["hash"], "hash"),
            parent=None if parent is None else _hash_from_json(parent, "parent"),
            edit_ops=[EditOp.from_dict(item) for item in data["ops"]],
            message=data["message"],
            timestamp=data["timestamp"],
            author=_optional_str(data, "author"),
        )


class EditHistory:
    """A linear chain of commits, oldest first, with a head pointer."""

    def __init__(self):
        self._commits = []
        self._head = None

    def __len__(self):
        return len(self._commits)

    def commit(self, ops, message, author=None):
        """Validate ``ops``, record them as a new commit and return its hash."""
        ops = list(ops)
        for op in ops:
            op.validate()
        new_commit = EditCommit.create(ops, message, self._head, author)
        self._commits.append(new_commit)
        self._head = new_commit.hash
        return new_commit.hash

    def head(self):
        """Return the most recent commit, or None."""
        return self._commits[-1] if self._commits else None

    def log(self):
        """Return every commit, oldest first."""
        return tuple(self._commits)

    def find_commit(self, commit_hash):
        """Return the commit with ``commit_hash``, or None."""
        return next((c for c in self._commits if c.hash == commit_hash), None)

    def revert(self):
        """Drop the most recent commit."""
        if not self._commits:
            raise NothingToRevertError()
        self._commits.pop()
        self._head = self._commits[-1].hash if self._commits else None

    def all_ops(self):
        """Return every operation in commit order, then in order within a commit."""
        return [op for c in self._commits for op in c.edit_ops]

    def ops_for_stem(self, stem_id):
        """Return the operations that target ``stem_id``, in commit order."""
        return [op for op in self.all_ops() if op.stem_id == stem_id]

    def to_json(self):
        """Serialize the history to pretty-printed JSON."""
        return json.dumps(
            {
                "commits": [c.to_dict() for c in self._commits],
                "head": _hash_to_json(self._head),
            },
            indent=2,
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, text):
        """Deserialize a history from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerializationError(str(exc)) from exc
        if not isinstance(data, dict):
            raise SerializationError("invalid type: expected an edit history object")
        if "commits" not in data:
            raise SerializationError("missing field `commits`")
        if not isinstance(data["commits"], list):
            raise SerializationError("invalid type for `commits`: expected an array")
        history = cls()
        history._commits = [EditCommit.from_dict(item) for item in data["commits"]]
        head = data.get("head")
        history._head = None if head is None else _hash_from_json(head, "head")
        return history

    def validate(self):
        """Check every op, every commit hash, the parent links and the head."""
        previous = None
        for index, entry in enumerate(self._commits):
            for op in entry.edit_ops:
                op.validate()
            expected = EditCommit.compute_hash(entry.parent, entry.edit_ops, entry.message)
            if entry.hash != expected:
                raise InvalidOperationError(f"commit {index} hash mismatch")
            if previous is None:
                if entry.parent is not None:
                    raise InvalidOperationError("first commit must not have a parent")
            elif entry.parent != previous.hash:
                raise InvalidOperationError(
                    f"commit {index} parent hash does not match commit {index - 1}"
                )
            previous = entry
        last = self._commits[-1].hash if self._commits else None
        if self._head != last:
            raise InvalidOperationError("head pointer does not match last commit")