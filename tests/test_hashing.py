import pytest

from neoedit.hashing import Blake3, blake3_digest


def _pattern(length):
    return bytes(i % 251 for i in range(length))


def test_empty_input_digest():
    assert (
        blake3_digest(b"").hex()
        == "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"
    )


def test_abc_digest():
    assert (
        Blake3(b"abc").hexdigest()
        == "6437b3ac38465133ffb63b75273a8db548c558465d79db03fd359c6cd5bd9d85"
    )


def test_digest_is_32_bytes():
    assert len(blake3_digest(_pattern(5000))) == 32


def test_hexdigest_matches_digest():
    hasher = Blake3(b"some bytes")
    assert hasher.hexdigest() == hasher.digest().hex()


def test_digest_does_not_consume_state():
    hasher = Blake3(b"abc")
    first = hasher.digest()
    assert hasher.digest() == first
    hasher.update(b"d")
    assert hasher.digest() == blake3_digest(b"abcd")


@pytest.mark.parametrize("length", [1, 63, 64, 65, 1023, 1024, 1025, 2048, 2049, 3072, 4097])
@pytest.mark.parametrize("piece", [1, 7, 64, 100, 1024])
def test_incremental_matches_one_shot(length, piece):
    data = _pattern(length)
    hasher = Blake3()
    for start in range(0, length, piece):
        hasher.update(data[start:start + piece])
    assert hasher.digest() == blake3_digest(data)


def test_different_inputs_give_different_digests():
    digests = {blake3_digest(_pattern(n)) for n in (0, 1, 64, 65, 1024, 1025, 2048)}
    assert len(digests) == 7


def test_trailing_zero_byte_changes_digest():
    assert blake3_digest(b"\0" * 1024) != blake3_digest(b"\0" * 1025)


def test_accepts_bytearray_and_memoryview():
    data = _pattern(300)
    expected = blake3_digest(data)
    assert blake3_digest(bytearray(data)) == expected
    assert blake3_digest(memoryview(data)) == expected


def test_rejects_text():
    with pytest.raises(TypeError):
        Blake3().update("text")