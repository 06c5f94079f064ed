"""Cryptographically secure random source used by every other module.

The source is an explicit object so callers (and tests) can inject their own. `EntropyStream` reads from the operating
system entropy device, opening it lazily and serializing reads behind a lock. A single shared instance is available
through `default()`; consumers fall back to it only when no source is passed in.

Typical usage example:

    rng = EntropyStream()
    key = rng.read(32)
    idx = rng.uniform_int(1000)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import abc
import io
import logging
import threading

from rsacore.errors import RandomSourceError

URANDOM = "/dev/urandom"

logger = logging.getLogger(__name__)


class RandomSource(abc.ABC):
    """Interface of a secure random byte source.

    Subclasses only need to provide `read`; the integer helpers are derived from it.
    """

    @abc.abstractmethod
    def read(self, size: int) -> bytes:
        """Return exactly `size` secure random bytes.

        Raises:
            RandomSourceError: If the underlying source fails.
        """

    def uniform_int(self, upper: int) -> int:
        """Draw an integer uniformly from `[0, upper)`.

        Uses masking followed by rejection sampling, so there is no modulo bias for bounds that are not a power of two.

        Args:
            upper: Exclusive upper bound. Must be positive.

        Returns:
            The sampled integer.

        Raises:
            ValueError: If `upper` is not positive.
        """
        if upper <= 0:
            raise ValueError("upper must be > 0")
        nbits = (upper - 1).bit_length()
        mask = (1 << nbits) - 1
        while True:
            candidate = int.from_bytes(self.read((nbits + 7) // 8), byteorder="big") & mask
            if candidate < upper:
                return candidate

    def randbits_exact(self, bits: int) -> int:
        """Draw a random integer of exactly `bits` bits (top bit set)."""
        if bits < 1:
            raise ValueError("bits must be >= 1")
        raw = int.from_bytes(self.read((bits + 7) // 8), byteorder="big")
        return (raw & ((1 << bits) - 1)) | (1 << (bits - 1))


class EntropyStream(RandomSource):
    """Random source backed by the operating system entropy device.

    The device is opened on first use. Reads are serialized so that concurrent callers never interleave partial reads.

    Attributes:
        path: Location of the entropy device.
    """

    def __init__(self, path: str = URANDOM) -> None:
        self.path = path
        self._src: io.RawIOBase | None = None
        self._lock = threading.Lock()

    def read(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must be >= 0")
        buf = bytearray(size)
        view = memoryview(buf)
        with self._lock:
            if self._src is None:
                try:
                    self._src = open(self.path, "rb", buffering=0)  # pylint: disable=consider-using-with
                except OSError as exc:
                    raise RandomSourceError(f"Cannot open entropy source {self.path}.") from exc
                logger.debug("Opened entropy source %s", self.path)
            got = 0
            while got < size:
                try:
                    n = self._src.readinto(view[got:])
                except OSError as exc:
                    raise RandomSourceError(f"Reading entropy source {self.path} failed.") from exc
                if not n:
                    raise RandomSourceError(f"Entropy source {self.path} ran dry.")
                got += n
        return bytes(buf)

    def close(self) -> None:
        """Release the device handle. A later read reopens it."""
        with self._lock:
            if self._src is not None:
                self._src.close()
                self._src = None


_DEFAULT = EntropyStream()


def default() -> RandomSource:
    """Returns the process-wide shared entropy stream."""
    return _DEFAULT


def read(size: int) -> bytes:
    """Read `size` bytes from the shared entropy stream."""
    return _DEFAULT.read(size)


def uniform_int(upper: int) -> int:
    """Draw from `[0, upper)` using the shared entropy stream."""
    return _DEFAULT.uniform_int(upper)
