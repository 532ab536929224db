"""BLAKE3 hashing (32-byte output) used for node and commit identities."""

import struct

_MASK = 0xFFFFFFFF
_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)
_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)

_CHUNK_START = 1 << 0
_CHUNK_END = 1 << 1
_PARENT = 1 << 2
_ROOT = 1 << 3

_BLOCK_LEN = 64
_CHUNK_LEN = 1024
_OUT_LEN = 32


def _rotr(value, shift):
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _g(s, a, b, c, d, mx, my):
    s[a] = (s[a] + s[b] + mx) & _MASK
    s[d] = _rotr(s[d] ^ s[a], 16)
    s[c] = (s[c] + s[d]) & _MASK
    s[b] = _rotr(s[b] ^ s[c], 12)
    s[a] = (s[a] + s[b] + my) & _MASK
    s[d] = _rotr(s[d] ^ s[a], 8)
    s[c] = (s[c] + s[d]) & _MASK
    s[b] = _rotr(s[b] ^ s[c], 7)


def _round(s, m):
    _g(s, 0, 4, 8, 12, m[0], m[1])
    _g(s, 1, 5, 9, 13, m[2], m[3])
    _g(s, 2, 6, 10, 14, m[4], m[5])
    _g(s, 3, 7, 11, 15, m[6], m[7])
    _g(s, 0, 5, 10, 15, m[8], m[9])
    _g(s, 1, 6, 11, 12, m[10], m[11])
    _g(s, 2, 7, 8, 13, m[12], m[13])
    _g(s, 3, 4, 9, 14, m[14], m[15])


def _compress(cv, block_words, counter, block_len, flags):
    state = [
        *cv,
        *_IV[:4],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    message = list(block_words)
    for round_number in range(7):
        _round(state, message)
        if round_number < 6:
            message = [message[i] for i in _PERMUTATION]
    low, high = state[:8], state[8:]
    return [a ^ b for a, b in zip(low, high)] + [b ^ c for b, c in zip(high, cv)]


def _words(block):
    return struct.unpack("<16I", bytes(block).ljust(_BLOCK_LEN, b"\0"))


class _Output:
    __slots__ = ("cv", "block_words", "counter", "block_len", "flags")

    def __init__(self, cv, block_words, counter, block_len, flags):
        self.cv = cv
        self.block_words = block_words
        self.counter = counter
        self.block_len = block_len
        self.flags = flags

    def chaining_value(self):
        return tuple(
            _compress(self.cv, self.block_words, self.counter, self.block_len, self.flags)[:8]
        )

    def root_bytes(self):
        words = _compress(self.cv, self.block_words, 0, self.block_len, self.flags | _ROOT)
        return struct.pack("<16I", *words)[:_OUT_LEN]


def _parent_output(left, right, key, flags):
    return _Output(key, (*left, *right), 0, _BLOCK_LEN, _PARENT | flags)


class _ChunkState:
    __slots__ = ("cv", "counter", "flags", "buffer", "blocks_compressed")

    def __init__(self, key, counter, flags):
        self.cv = key
        self.counter = counter
        self.flags = flags
        self.buffer = bytearray()
        self.blocks_compressed = 0

    def __len__(self):
        return _BLOCK_LEN * self.blocks_compressed + len(self.buffer)

    def _start_flag(self):
        return _CHUNK_START if self.blocks_compressed == 0 else 0

    def update(self, data):
        while data:
            if len(self.buffer) == _BLOCK_LEN:
                self.cv = tuple(
                    _compress(
                        self.cv,
                        _words(self.buffer),
                        self.counter,
                        _BLOCK_LEN,
                        self.flags | self._start_flag(),
                    )[:8]
                )
                self.blocks_compressed += 1
                self.buffer.clear()
            take = min(_BLOCK_LEN - len(self.buffer), len(data))
            self.buffer += data[:take]
            data = data[take:]

    def output(self):
        return _Output(
            self.cv,
            _words(self.buffer),
            self.counter,
            len(self.buffer),
            self.flags | self._start_flag() | _CHUNK_END,
        )


class Blake3:
    """Incremental BLAKE3 hasher producing 32-byte digests."""

    def __init__(self, data=b""):
        self._key = _IV
        self._flags = 0
        self._stack = []
        self._chunk = _ChunkState(self._key, 0, self._flags)
        if data:
            self.update(data)

    def update(self, data):
        """Feed more bytes into the hash."""
        view = memoryview(data).cast("B")
        while view:
            if len(self._chunk) == _CHUNK_LEN:
                chunk_cv = self._chunk.output().chaining_value()
                total_chunks = self._chunk.counter + 1
                self._push_chunk(chunk_cv, total_chunks)
                self._chunk = _ChunkState(self._key, total_chunks, self._flags)
            take = min(_CHUNK_LEN - len(self._chunk), len(view))
            self._chunk.update(view[:take])
            view = view[take:]

    def _push_chunk(self, cv, total_chunks):
        while total_chunks & 1 == 0:
            cv = _parent_output(self._stack.pop(), cv, self._key, self._flags).chaining_value()
            total_chunks >>= 1
        self._stack.append(cv)

    def digest(self):
        """Return the 32-byte digest of everything fed so far."""
        output = self._chunk.output()
        for left in reversed(self._stack):
            output = _parent_output(left, output.chaining_value(), self._key, self._flags)
        return output.root_bytes()

    def hexdigest(self):
        """Return the digest as lower-case hexadecimal."""
        return self.digest().hex()


def blake3_digest(data):
    """Return the 32-byte BLAKE3 digest of ``data``."""
    return Blake3(data).digest()