"""A from-scratch RSA cryptosystem.

Provides RSA key generation with exact modulus sizes, RSAES-OAEP encryption, blinded CRT decryption, key export to
PKCS#1/PKCS#8 and, under the hood, a Solovay-Strassen primality engine fed by an injectable secure random source.

Typical usage example:

    pk = RSAPrivKey.generate(2048)
    c = pk.pub.encrypt(b"Hi there!", b"label")
    r = pk.decrypt(c, b"label")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore.errors import CipherTextLengthError
from rsacore.errors import DecodingError
from rsacore.errors import DecryptionError
from rsacore.errors import EncodingError
from rsacore.errors import InvalidKeySizeError
from rsacore.errors import KeyGenerationError
from rsacore.errors import KeyWipedError
from rsacore.errors import MessageTooLargeError
from rsacore.errors import RandomSourceError
from rsacore.errors import RSAError
from rsacore.keygen import generate_key
from rsacore.keygen import generate_primes
from rsacore.oaep import oaep_decode
from rsacore.oaep import oaep_encode
from rsacore.primes import is_prime
from rsacore.primes import jacobi
from rsacore.rand import EntropyStream
from rsacore.rand import RandomSource
from rsacore.rsa import RSAPrivKey
from rsacore.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "RSAPrivKey",
    "RSAPubKey",
    "RandomSource",
    "EntropyStream",
    "generate_key",
    "generate_primes",
    "is_prime",
    "jacobi",
    "oaep_encode",
    "oaep_decode",
    "RSAError",
    "RandomSourceError",
    "InvalidKeySizeError",
    "KeyGenerationError",
    "KeyWipedError",
    "MessageTooLargeError",
    "CipherTextLengthError",
    "EncodingError",
    "DecodingError",
    "DecryptionError",
]
