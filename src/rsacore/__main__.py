"""The Command Line Interface for the utility.

Thin argparse front end over key generation, sealing and unsealing. Every argument is required up front; there is no
interactive prompting.

Typical usage example:

    rsacore keygen -P key.pem -p key.pub --keysize 2048
    rsacore encrypt -p key.pub --message "Hi there!" --label tag
    OR
    python -m rsacore decrypt -P key.pem --message P:cipher.txt --label tag
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsacore
from rsacore import oaep


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "keygen": HelpData("Key generation utility."),
    "encrypt": HelpData("Encryption utility."),
    "decrypt": HelpData("Decryption utility."),
    "public_key": HelpData("Location of the public key file.", pathlib.Path),
    "private_key": HelpData("Location of the private key file.", pathlib.Path),
    "message": HelpData("Message or path to file containing payload. If Path start with `P:`"),
    "label": HelpData("Encrypted payload label. Used to verify during decryption.", default=""),
    "encoding": HelpData("Payload encoding.", choices=["utf-8", "utf-16", "ascii"], default="utf-8"),
    "keysize": HelpData("Key size (in bits).", int, default=2048),
    "sha": HelpData("Specific SHA algorithm to use", choices=list(oaep.HASH_TLL), default=oaep.DEFAULT_HASH),
    "overwrite": HelpData("Overwrite specified destination files if they exist."),
}


def _arg(parser: argparse.ArgumentParser, name: str, *flags: str, required: bool = False) -> None:
    helper = help_dict[name]
    parser.add_argument(*flags,
                        dest=name,
                        type=helper.format,
                        choices=helper.choices,
                        default=helper.default,
                        required=required,
                        help=helper.description)


pubkey = argparse.ArgumentParser(add_help=False)
_arg(pubkey, "public_key", "--public_key", "-p", required=True)
privkey = argparse.ArgumentParser(add_help=False)
_arg(privkey, "private_key", "--private_key", "-P", required=True)
payloads = argparse.ArgumentParser(add_help=False)
_arg(payloads, "message", "--message", "-m", required=True)
_arg(payloads, "label", "--label", "-l")
_arg(payloads, "encoding", "--encoding", "-e")

corep = argparse.ArgumentParser(prog="rsacore")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsacore.__version__}")
corep.add_argument("--verbose", action="store_true", help="Log key generation progress to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
_arg(keygen, "keysize", "--keysize", "-k")
keygen.add_argument("--overwrite", "-o", action="store_true", help=help_dict["overwrite"].description)
encrypt = commands.add_parser("encrypt", parents=[pubkey, payloads], help=help_dict["encrypt"].description)
_arg(encrypt, "sha", "--sha", "-s")
decrypt = commands.add_parser("decrypt", parents=[privkey, payloads], help=help_dict["decrypt"].description)


def check_message(mess: str, enc: str) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        with open(mess[2:], "r", encoding=enc) as f:
            mess = f.read()
    return mess


def main(argv: list[str] | None = None) -> None:
    """Command line entry point."""
    args = corep.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    match args.subcommand:
        case "keygen":
            if not args.overwrite and (args.private_key.exists() or args.public_key.exists()):
                print("Destination private or public key already exists!", file=sys.stderr)
                sys.exit(1)
            with rsacore.RSAPrivKey.generate(args.keysize) as rpk:
                rpk.export(args.private_key)
                rpk.pub.export(args.public_key)
            print("Key pair generated!")
        case "encrypt":
            message = check_message(args.message, args.encoding)
            rpu = rsacore.RSAPubKey.import_key(args.public_key)
            try:
                ciph = rpu.seal(message.encode(args.encoding), args.label.encode(args.encoding), args.sha)
            except rsacore.MessageTooLargeError:
                print("Message too long for this key!", file=sys.stderr)
                sys.exit(1)
            print(ciph.decode("ascii"))
        case "decrypt":
            message = check_message(args.message, "ascii")
            with rsacore.RSAPrivKey.import_key(args.private_key) as rpk:
                try:
                    clear = rpk.unseal(message.strip().encode("ascii"), args.label.encode(args.encoding))
                except rsacore.DecryptionError:
                    print("Decryption Failed!", file=sys.stderr)
                    sys.exit(1)
            print(clear.decode(args.encoding))


if __name__ == "__main__":
    main()
