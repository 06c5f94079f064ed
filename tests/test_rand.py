# pylint: disable=protected-access,missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import collections
import threading

import pytest

from rsacore import rand
from rsacore.errors import RandomSourceError


def test_uniform_int_masks_and_rejects(scripted):
    # upper=5 needs 3 bits: 0xFF -> 7 (reject), 0x0D -> 5 (reject), 0xF3 -> 3
    src = scripted(b"\xff", b"\x0d", b"\xf3")
    assert src.uniform_int(5) == 3
    assert src.calls == [1, 1, 1]


def test_uniform_int_power_of_two(scripted):
    src = scripted(b"\xff")
    assert src.uniform_int(256) == 255
    src = scripted(b"\x01\x00")
    assert src.uniform_int(257) == 256


def test_uniform_int_single_value(scripted):
    src = scripted(b"")
    assert src.uniform_int(1) == 0
    assert src.calls == [0]


@pytest.mark.parametrize("upper", [0, -1, -2**70])
def test_uniform_int_validates(upper, scripted):
    with pytest.raises(ValueError):
        scripted().uniform_int(upper)


def test_uniform_int_distribution():
    counts = collections.Counter(rand.uniform_int(6) for _ in range(6000))
    assert set(counts) == set(range(6))
    for v in counts.values():
        assert 800 < v < 1200


@pytest.mark.parametrize("bits", [1, 7, 8, 9, 64, 521])
def test_randbits_exact(bits):
    for _ in range(20):
        assert rand.default().randbits_exact(bits).bit_length() == bits


def test_randbits_exact_validates():
    with pytest.raises(ValueError):
        rand.default().randbits_exact(0)


def test_entropy_stream_lazy_open(tmp_path):
    src_file = tmp_path / "entropy"
    src_file.write_bytes(bytes(range(8)))
    stream = rand.EntropyStream(str(src_file))
    assert stream._src is None
    assert stream.read(3) == b"\x00\x01\x02"
    assert stream._src is not None
    assert stream.read(5) == b"\x03\x04\x05\x06\x07"
    stream.close()
    assert stream._src is None
    assert stream.read(2) == b"\x00\x01"
    stream.close()


def test_entropy_stream_runs_dry(tmp_path):
    src_file = tmp_path / "entropy"
    src_file.write_bytes(b"\xaa" * 4)
    stream = rand.EntropyStream(str(src_file))
    with pytest.raises(RandomSourceError):
        stream.read(5)
    stream.close()


def test_entropy_stream_missing(tmp_path):
    stream = rand.EntropyStream(str(tmp_path / "nothing_here"))
    with pytest.raises(RandomSourceError) as exc:
        stream.read(1)
    assert isinstance(exc.value.__cause__, OSError)


def test_entropy_stream_read_error(mocker, tmp_path):
    stream = rand.EntropyStream(str(tmp_path / "unused"))
    stream._src = mocker.Mock(readinto=mocker.Mock(side_effect=OSError("gone")))
    with pytest.raises(RandomSourceError):
        stream.read(4)


def test_entropy_stream_short_reads_complete(mocker, tmp_path):
    stream = rand.EntropyStream(str(tmp_path / "unused"))

    def one_byte(view):
        view[0] = 0x42
        return 1

    stream._src = mocker.Mock(readinto=mocker.Mock(side_effect=one_byte))
    assert stream.read(3) == b"\x42\x42\x42"
    assert stream._src.readinto.call_count == 3


def test_entropy_stream_serializes_reads(tmp_path):
    content = bytes(range(256)) * 16
    src_file = tmp_path / "entropy"
    src_file.write_bytes(content)
    stream = rand.EntropyStream(str(src_file))
    chunks = []
    lock = threading.Lock()

    def worker():
        for _ in range(16):
            chunk = stream.read(16)
            with lock:
                chunks.append(chunk)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    stream.close()
    # Every chunk must be one contiguous 16 byte slice of the stream.
    expected = {content[i:i + 16] for i in range(0, 256, 16)}
    assert len(chunks) == 128
    assert all(chunk in expected for chunk in chunks)


def test_default_is_shared():
    assert rand.default() is rand.default()
    assert len(rand.read(33)) == 33
