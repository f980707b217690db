"""The Command Line Interface for the converter, including Interactive elements.

A hybrid CLI/ICLI that asks for whatever the command line left out, unless running non-interactively. Advanced
arguments silently take their defaults unless advanced mode is enabled.

Typical usage example:

    rsaconvert pub -i key.pem -o key.pub.pem
    OR
    python -m rsaconvert der2pem -n -i key.der -o key.pem -l "PUBLIC KEY"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import pathlib
import sys
import typing

import rsaconvert
from rsaconvert import keys
from rsaconvert import pem


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Convert.",
            choices=["der2pem", "pem2der", "wrap", "unwrap", "pub", "wrap-private", "unwrap-private"],
        ),
    "der2pem":
        HelpData("Armor a DER file as PEM."),
    "pem2der":
        HelpData("Strip the PEM armor of a file."),
    "wrap":
        HelpData("Wrap a PKCS#1 public key into a SubjectPublicKeyInfo."),
    "unwrap":
        HelpData("Extract the PKCS#1 public key of a SubjectPublicKeyInfo."),
    "pub":
        HelpData("Derive the SubjectPublicKeyInfo public key of a PKCS#1 private key."),
    "wrap-private":
        HelpData("Wrap a PKCS#1 private key into PKCS#8."),
    "unwrap-private":
        HelpData("Extract the PKCS#1 private key of a PKCS#8 key."),
    "input":
        HelpData(
            description="Location of the input file.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="Location of the output file.",
            format=pathlib.Path,
        ),
    "label":
        HelpData(
            description="PEM label, the text between BEGIN/END and the dashes.",
            format=str,
            advanced=True,
            default=pem.DEFAULT_LABEL,
        ),
    "form":
        HelpData(description="Whether keys are read and written as PEM or raw DER.", choices=["pem", "der"],
                 default="pem"),
    "mode":
        HelpData(description="Validation mode. Strict rejects non-RSA algorithms and unexpected versions.",
                 choices=["lenient", "strict"],
                 advanced=True,
                 default="lenient"),
    "overwrite":
        HelpData(
            description="Overwrite specified destination file if it exists?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "der2pem": ("input", "output", "label"),
    "pem2der": ("input", "output", "label"),
    "wrap": ("input", "output", "form"),
    "unwrap": ("input", "output", "form", "mode"),
    "pub": ("input", "output", "form", "mode"),
    "wrap-private": ("input", "output", "form"),
    "unwrap-private": ("input", "output", "form", "mode"),
}

# Subcommand: (transform, input PEM label, output PEM label, takes a validation mode)
transforms: dict[str, tuple[typing.Callable, str, str, bool]] = {
    "wrap": (keys.wrap_public_key, "RSA PUBLIC KEY", "PUBLIC KEY", False),
    "unwrap": (keys.unwrap_public_key, "PUBLIC KEY", "RSA PUBLIC KEY", True),
    "pub": (keys.private_to_public, "RSA PRIVATE KEY", "PUBLIC KEY", True),
    "wrap-private": (keys.wrap_private_key, "RSA PRIVATE KEY", "PRIVATE KEY", False),
    "unwrap-private": (keys.unwrap_private_key, "PRIVATE KEY", "RSA PRIVATE KEY", True),
}

files = argparse.ArgumentParser(add_help=False)
files.add_argument("--input", "-i", type=help_dict["input"].format, help=help_dict["input"].description)
files.add_argument("--output", "-o", type=help_dict["output"].format, help=help_dict["output"].description)
files.add_argument("--overwrite", "-O", action="store_const", const="Y", help=help_dict["overwrite"].description)
label = argparse.ArgumentParser(add_help=False)
label.add_argument("--label", "-l", type=help_dict["label"].format, help=help_dict["label"].description)
form = argparse.ArgumentParser(add_help=False)
form.add_argument("--form", "-f", choices=help_dict["form"].choices, help=help_dict["form"].description)
validation = argparse.ArgumentParser(add_help=False)
validation.add_argument("--mode", "-m", choices=help_dict["mode"].choices, help=help_dict["mode"].description)
corep = argparse.ArgumentParser(prog="rsaconvert")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsaconvert.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

for name in ("der2pem", "pem2der"):
    commands.add_parser(name, parents=[files, label], help=help_dict[name].description)
for name, (_, _, _, validates) in transforms.items():
    commands.add_parser(name, parents=[files, form, validation] if validates else [files, form],
                        help=help_dict[name].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def load_key(file: pathlib.Path, keyform: str, pem_label: str) -> bytes:
    """Read key bytes, unarmoring them if the file is PEM."""
    if keyform == "pem":
        return pem.read_pem(file, pem_label)
    return file.read_bytes()


def store_key(file: pathlib.Path, data: bytes, keyform: str, pem_label: str) -> None:
    """Write key bytes, armoring them if the file is PEM."""
    if keyform == "pem":
        pem.write_pem(file, data, pem_label)
    else:
        file.write_bytes(data)


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Convert!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    if args.output.exists():
        rs = getattr(args, "overwrite", None)
        if rs is None:
            rs = choice_handler("overwrite", pstatus, pspr)
        if rs == "N":
            print("Destination file already exists!")
            return
    try:
        match args.subcommand:
            case "der2pem":
                pem.write_pem(args.output, args.input.read_bytes(), args.label)
            case "pem2der":
                args.output.write_bytes(pem.read_pem(args.input, args.label))
            case _:
                transform, in_label, out_label, validates = transforms[args.subcommand]
                payload = load_key(args.input, args.form, in_label)
                if validates:
                    result = transform(payload, keys.Validation(args.mode))
                else:
                    result = transform(payload)
                store_key(args.output, result, args.form, out_label)
    except rsaconvert.KeyFormatError as exc:
        print(f"Conversion failed! {exc}")
        sys.exit(1)
    pspr("\nConversion complete!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
