# neoedit

Non-destructive edit records for multi-stem audio. Edits are kept as a chain
of operations linked by BLAKE3 hashes instead of being baked into the audio,
so they can be validated, serialized to JSON, grouped into commits, reverted
and diffed.

## Installation

```
pip install .
```

The package needs nothing outside the Python standard library (3.10 or later).
BLAKE3 is implemented in `neoedit.hashing` (`Blake3`, `blake3_digest`).

## Edit operations

Operations live in `neoedit.ops`. Each one is a frozen dataclass that targets
a stem by `stem_id` (an integer 0–255):

| Operation     | Parameters                          | Limits checked by `validate()` |
|---------------|-------------------------------------|--------------------------------|
| `Trim`        | `start_s`, `end_s`                  | both ≥ 0, `start_s < end_s`    |
| `Gain`        | `db`                                | within ±60 dB                  |
| `Eq`          | `freq_hz`, `gain_db`, `q`           | 20 Hz ≤ `freq_hz` ≤ 20 kHz     |
| `Fade`        | `fade_in_s`, `fade_out_s`           | both ≥ 0                       |
| `Mute`        | —                                   | —                              |
| `Pan`         | `position`                          | −1.0 … 1.0                     |
| `Reverse`     | —                                   | —                              |
| `TimeStretch` | `factor`                            | > 0                            |

`EditOp.validate()` returns the operation, or raises a subclass of
`neoedit.errors.EditError` such as `GainOutOfRangeError`,
`InvalidTrimRangeError`, `PanOutOfRangeError`, `EqFreqOutOfRangeError` or
`InvalidOperationError`.

```python
from neoedit.ops import EditOp, Gain, Trim
from neoedit.errors import GainOutOfRangeError

Trim(stem_id=0, start_s=2.5, end_s=180.0).validate()
try:
    Gain(stem_id=0, db=100.0).validate()
except GainOutOfRangeError as err:
    print(err)   # gain out of range: 100 dB (max ±60 dB)

data = Gain(stem_id=1, db=3.0).to_dict()   # {"type": "gain", "stem_id": 1, "db": 3.0}
assert EditOp.from_dict(data) == Gain(stem_id=1, db=3.0)
```

Malformed mappings passed to `from_dict` raise `SerializationError`.

## Edit graph

`neoedit.graph.EditGraph` appends operations one after another; each
`EditNode` stores the hash of its parent and its own hash over the parent hash
and the operation's JSON.

```python
from neoedit.graph import EditGraph
from neoedit.ops import Mute, Gain

graph = EditGraph()
graph.add_op(Mute(stem_id=0), "mute vocals")
graph.add_op(Gain(stem_id=1, db=-3.0), None)

graph.validate()                  # checks ops, hashes and parent links
restored = EditGraph.from_json(graph.to_json())
print(len(restored.ops_for_stem(0)))   # 1
```

## Version history

`neoedit.history.EditHistory` groups operations into `EditCommit`s, each
hashed over its parent, its operations and its message.

```python
from neoedit.history import EditHistory
from neoedit.ops import Mute, Gain

history = EditHistory()
first = history.commit([Mute(stem_id=0)], "initial", "alice")
history.commit([Gain(stem_id=2, db=3.0)], "boost", None)

for commit in history.log():
    print(commit.hash.hex()[:12], commit.message)

history.revert()                   # drop the newest commit
assert history.head().hash == first
assert history.find_commit(first).message == "initial"
```

`revert()` on an empty history raises `NothingToRevertError`. `to_json()`,
`from_json()` and `validate()` work as for the graph, and `validate()` also
checks that the head pointer matches the last commit.

## Diff and patch

```python
from neoedit.diff import compute_diff, apply_patch
from neoedit.history import EditHistory
from neoedit.ops import Mute, Pan

a = EditHistory()
a.commit([Mute(stem_id=0)], "init", None)
b = EditHistory()
b.commit([Mute(stem_id=0)], "init", None)
b.commit([Pan(stem_id=1, position=-0.5)], "pan left", None)

diff = compute_diff(a, b)
print(diff.common_ops, len(diff.added_ops), len(diff.removed_ops))   # 1 1 0
apply_patch(a, diff, "take changes from B")
```

The diff compares the flattened operation lists by common prefix: what
follows the prefix in the first history is removed, what follows it in the
second is added. `apply_patch` only adds a commit holding the added
operations; removed operations are not undone. `EditDiff` round-trips through
`to_json()` / `from_json()`.

## Plugin and WebAssembly descriptors

`neoedit.plugin.neo_plugin_descriptors()` returns descriptors for the player,
encoder and spatial panner plugins; `neoedit.plugin.player_parameters()`
returns the player's 33 automation parameters (master volume plus volume,
mute, solo and pan for eight stems). `neoedit.wasm.WasmConfig` holds default
WebAssembly build settings (browser target, no SIMD, no threads, 256 pages).
These are data only.

## What this package does not do

It records, validates, hashes and versions edits, but it does not render
them: there is no function that applies operations to PCM samples, and no
audio is read or written. Node and commit timestamps are a fixed placeholder
value. There is no command-line tool.

## Running the tests

```
pip install ".[test]"
pytest
```