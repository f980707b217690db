"""PEM armoring of DER encoded key material.

Handles the textual framing of keys: base64 bodies wrapped at 64 characters between `-----BEGIN <label>-----` and
`-----END <label>-----` lines. Parsing is strict, the whole text must have exactly the shape produced by
`convert_der_to_pem` for the same label, otherwise a `MalformedPEM` naming the problem is raised.

Typical usage example:

    pem = convert_der_to_pem(der, "PUBLIC KEY")
    der = convert_pem_to_der(pem, "PUBLIC KEY")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import pathlib
import re

from rsaconvert.errors import MalformedPEM

DEFAULT_LABEL = "RSA PUBLIC KEY"
LINE_WIDTH = 64

_BASE64_CHARS = "A-Za-z0-9+/="
_BODY_LINE = re.compile(f"[{_BASE64_CHARS}]*")


def _delimiters(label: str) -> tuple[str, str]:
    return f"-----BEGIN {label}-----", f"-----END {label}-----"


def _pem_pattern(label: str) -> re.Pattern:
    """Builds the anchored PEM pattern for a label.

    The body group is optional so that the empty body line written for an empty payload is accepted.
    """
    head, foot = _delimiters(label)
    body = f"(?:[{_BASE64_CHARS}]{{{LINE_WIDTH}}}\n)*[{_BASE64_CHARS}]{{1,{LINE_WIDTH}}}"
    return re.compile(f"{re.escape(head)}\n({body})?\n{re.escape(foot)}\n")


def _diagnose(pem: str, label: str) -> str:
    """Explains why `pem` does not match the PEM pattern for `label`."""
    head, foot = _delimiters(label)
    if not pem.startswith(head + "\n"):
        return f"missing header line {head!r}"
    if not pem.endswith("\n" + foot + "\n"):
        return f"missing footer line {foot!r}"
    region = pem[len(head) + 1:len(pem) - len(foot) - 1]
    if not region.endswith("\n"):
        return "missing body line"
    lines = region[:-1].split("\n")
    for no, line in enumerate(lines, start=1):
        if not _BODY_LINE.fullmatch(line):
            return f"illegal characters on body line {no}"
    for no, line in enumerate(lines[:-1], start=1):
        if len(line) != LINE_WIDTH:
            return f"illegal length {len(line)} of body line {no}"
    return f"illegal length {len(lines[-1])} of body line {len(lines)}"


def convert_der_to_pem(der: bytes, label: str = DEFAULT_LABEL) -> str:
    """Armors DER bytes as PEM text.

    Args:
        der: The DER encoded structure.
        label: The PEM label, e.g. "PUBLIC KEY".

    Returns:
        The PEM text, every line (including the last) terminated by a newline.
    """
    head, foot = _delimiters(label)
    payload = base64.b64encode(der).decode("ascii")
    body = "\n".join(payload[i:i + LINE_WIDTH] for i in range(0, len(payload), LINE_WIDTH))
    return f"{head}\n{body}\n{foot}\n"


def convert_pem_to_der(pem: str, label: str = DEFAULT_LABEL) -> bytes:
    """Strips the PEM armor from a text, returning the DER bytes.

    Args:
        pem: The PEM text.
        label: The PEM label the text must carry.

    Returns:
        The decoded DER bytes.

    Raises:
        MalformedPEM: If the text does not have the exact PEM shape for `label` or its body is not valid base64.
    """
    match = _pem_pattern(label).fullmatch(pem)
    if match is None:
        raise MalformedPEM(label, _diagnose(pem, label))
    body = (match.group(1) or "").replace("\n", "")
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as exc:
        raise MalformedPEM(label, f"invalid base64 body ({exc})") from exc


def read_pem(file: pathlib.Path, label: str = DEFAULT_LABEL) -> bytes:
    """Reads a PEM encoded file.

    Args:
        file: The file to read.
        label: The PEM label the file must carry.

    Returns:
        The DER bytes held by the file.

    Raises:
        MalformedPEM: If the file content is not a single PEM block for `label`.
    """
    try:
        with open(file, "r", encoding="ascii") as f:
            text = f.read()
    except UnicodeDecodeError as exc:
        raise MalformedPEM(label, f"illegal characters, byte {exc.object[exc.start]:#04x} is not ASCII") from exc
    return convert_pem_to_der(text, label)


def write_pem(file: pathlib.Path, der: bytes, label: str = DEFAULT_LABEL) -> None:
    """Writes DER bytes to a PEM encoded file.

    Args:
        file: The file to write.
        der: The DER bytes to armor.
        label: The PEM label to use.
    """
    with open(file, "w", encoding="ascii", newline="\n") as f:
        f.write(convert_der_to_pem(der, label))
