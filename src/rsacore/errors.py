"""Exceptions raised across rsacore.

Every error derives from `RSAError`. Most also derive from the builtin exception a caller would naturally catch for
that situation, so `except ValueError` around an encryption call keeps working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all rsacore errors."""


class RandomSourceError(RSAError):
    """The entropy device could not be opened or read. Never retried."""


class InvalidKeySizeError(RSAError, ValueError):
    """Requested modulus size is below the supported minimum."""


class KeyGenerationError(RSAError, RuntimeError):
    """Key generation produced a result that breaks its own invariants."""


class MessageTooLargeError(RSAError, ValueError):
    """Plaintext does not fit into the OAEP capacity of the key."""


class CipherTextLengthError(RSAError, ValueError):
    """Ciphertext length differs from the key byte length."""


class EncodingError(RSAError, ValueError):
    """OAEP encoding preconditions were violated."""


class DecodingError(RSAError, ValueError):
    """OAEP decoding failed.

    Deliberately carries no detail about which check failed.
    """


class DecryptionError(RSAError, RuntimeError):
    """Decryption failed. Carries no detail about the cause."""


class KeyWipedError(RSAError, RuntimeError):
    """A private operation was requested on a key whose secret components were wiped."""
