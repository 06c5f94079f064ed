# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from rsacore import __main__ as cli
from rsacore import rsa as rsau


@pytest.fixture(scope="module")
def keyfiles(tmp_path_factory):
    base = tmp_path_factory.mktemp("keys")
    priv, pub = base / "key.pem", base / "key.pub"
    cli.main(["keygen", "-P", str(priv), "-p", str(pub), "--keysize", "768"])
    return priv, pub


def test_keygen_writes_keys(keyfiles):
    priv, pub = keyfiles
    key = rsau.RSAPrivKey.import_key(priv)
    assert key.bits == 768
    assert rsau.RSAPubKey.import_key(pub).mod == key.mod


def test_keygen_refuses_overwrite(keyfiles):
    priv, pub = keyfiles
    with pytest.raises(SystemExit):
        cli.main(["keygen", "-P", str(priv), "-p", str(pub), "--keysize", "768"])


def test_encrypt_decrypt(keyfiles, capsys, tmp_path):
    priv, pub = keyfiles
    capsys.readouterr()
    cli.main(["encrypt", "-p", str(pub), "--message", "Hi there!", "--label", "tag"])
    sealed = capsys.readouterr().out.strip()
    cipher_file = tmp_path / "cipher.txt"
    cipher_file.write_text(sealed, encoding="ascii")
    cli.main(["decrypt", "-P", str(priv), "--message", f"P:{cipher_file}", "--label", "tag"])
    assert capsys.readouterr().out.strip() == "Hi there!"


def test_decrypt_wrong_label(keyfiles, capsys):
    priv, pub = keyfiles
    cli.main(["encrypt", "-p", str(pub), "--message", "Hi there!", "--label", "tag"])
    sealed = capsys.readouterr().out.strip()
    with pytest.raises(SystemExit):
        cli.main(["decrypt", "-P", str(priv), "--message", sealed, "--label", "tah"])
    assert "Decryption Failed!" in capsys.readouterr().err


def test_requires_subcommand():
    with pytest.raises(SystemExit):
        cli.main([])


def test_encrypt_message_too_long(keyfiles, capsys):
    _, pub = keyfiles
    capsys.readouterr()
    with pytest.raises(SystemExit):
        cli.main(["encrypt", "-p", str(pub), "--message", "A" * 100])
    assert "Message too long" in capsys.readouterr().err
