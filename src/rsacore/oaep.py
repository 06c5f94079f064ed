"""Optimal Asymmetric Encryption Padding and its supporting primitives.

Implements MGF1 and the OAEP encoding step of PKCS#1 v2.2 independently of any key, so the padding can be used (and
tested) against any target block length. Decoding evaluates every check before failing, and fails with a single
undifferentiated error.

Typical usage example:

    em = oaep_encode(b"Hi there!", b"label", 127, "sha256")
    m = oaep_decode(em, b"label", "sha256")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib
import hmac
from math import ceil
from typing import Callable

from pyasn1.type import univ
from pyasn1_modules import rfc4055
from pyasn1_modules import rfc8017

from rsacore import rand
from rsacore.errors import DecodingError
from rsacore.errors import EncodingError

DEFAULT_HASH = "sha256"

HASH_TLL = {
    "sha256": (hashlib.sha256, rfc8017.id_sha256, 32, 2**61 - 1),
    "sha384": (hashlib.sha384, rfc8017.id_sha384, 48, 2**125 - 1),
    "sha512": (hashlib.sha512, rfc8017.id_sha512, 64, 2**125 - 1),
}

HASH_OID = {
    rfc8017.id_sha256: ("sha256", rfc4055.rSAES_OAEP_SHA256_Identifier),
    rfc8017.id_sha384: ("sha384", rfc4055.rSAES_OAEP_SHA384_Identifier),
    rfc8017.id_sha512: ("sha512", rfc4055.rSAES_OAEP_SHA512_Identifier),
}


def hash_size(hashf: str) -> int:
    """Digest size in bytes of the named hash function."""
    return hash_params(hashf)[2]


def hash_params(hashf: str) -> tuple[Callable, univ.ObjectIdentifier, int, int]:
    """Look up the `HASH_TLL` entry for a hash name.

    Raises:
        ValueError: If the hash function is not supported.
    """
    try:
        return HASH_TLL[hashf]
    except KeyError:
        raise ValueError(f"Unsupported hash function: {hashf}") from None


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a string, using a fixed-length byte representation.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes, left padded with zeros.

    Raises:
        OverflowError: If `msg` does not fit in `fixedlen` bytes.
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def xorbytes(a: bytes, b: bytes) -> bytes:
    """XOR bitwise for bytes.

    Requires two byte strings of equal length.
    """
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


def mgf1(mgfseed: bytes, masklen: int, hashf: str = DEFAULT_HASH) -> bytes:
    """The PKCS#1 v2.2 Mask Generation Function 1.

    Concatenates Hash(seed || counter) for a big-endian 32-bit counter starting at zero and truncates the result.

    Args:
        mgfseed: Seed for mask generation
        masklen: Intended length of mask
        hashf: Hash function name (see `HASH_TLL`)

    Returns:
        The mask in form of bytes of length masklen.

    Raises:
        ValueError: If mask too long for the combination of values.
    """
    fun, _, hlen, _ = hash_params(hashf)
    if masklen > 2**32 * hlen:
        raise ValueError("Mask too long for the specified hash function")
    t = b""
    for cnt in range(ceil(masklen / hlen)):
        t += fun(mgfseed + integer_to_bytes(cnt, 4)).digest()
    return t[:masklen]


def oaep_encode(message: bytes,
                label: bytes,
                target_len: int,
                hashf: str = DEFAULT_HASH,
                rng: rand.RandomSource | None = None) -> bytes:
    """Pads a message into a `target_len` byte OAEP block.

    Args:
        message: Message to be encoded.
        label: Label bound into the encoding. Must be passed identically to `oaep_decode`.
        target_len: Length of the encoded block.
        hashf: Hash function name (see `HASH_TLL`).
        rng: Random source for the seed. Defaults to the shared entropy stream.

    Returns:
        maskedSeed || maskedDB, exactly `target_len` bytes.

    Raises:
        EncodingError: If label or message are too long for the block and hash function.
    """
    fun, _, hlen, hcap = hash_params(hashf)
    if len(label) > hcap:
        raise EncodingError("Label too long for the specified hash function")
    if len(message) > target_len - 2 * hlen - 1:
        raise EncodingError("Message too long for the specified hash function")
    rng = rng or rand.default()
    lh = fun(label).digest()
    pad = b"\x00" * (target_len - len(message) - 2 * hlen - 1)
    db: bytes = lh + pad + b"\x01" + message
    seed = rng.read(hlen)
    mdb = xorbytes(db, mgf1(seed, len(db), hashf))
    mseed = xorbytes(seed, mgf1(mdb, hlen, hashf))
    return mseed + mdb


def oaep_decode(encoded: bytes, label: bytes, hashf: str = DEFAULT_HASH) -> bytes:
    """Recovers the message from an OAEP block.

    Args:
        encoded: maskedSeed || maskedDB as produced by `oaep_encode`.
        label: The label used during encoding.
        hashf: Hash function name (see `HASH_TLL`).

    Returns:
        The original message.

    Raises:
        DecodingError: On any malformed block, wrong label, or missing separator. The error is identical in all cases.
    """
    fun, _, hlen, hcap = hash_params(hashf)
    if len(encoded) < 2 * hlen + 1 or len(label) > hcap:
        raise DecodingError("Decoding error.")
    mseed, mdb = encoded[:hlen], encoded[hlen:]
    seed = xorbytes(mseed, mgf1(mdb, hlen, hashf))
    db = xorbytes(mdb, mgf1(seed, len(mdb), hashf))
    valid = hmac.compare_digest(db[:hlen], fun(label).digest())
    mrkr = None
    for by in range(hlen, len(db)):
        if db[by] == 1 and mrkr is None:
            mrkr = by
        if db[by] > 1 and mrkr is None:
            valid = False
    if mrkr is None or not valid:
        raise DecodingError("Decoding error.")
    return db[mrkr + 1:]
