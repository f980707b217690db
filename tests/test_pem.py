# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pathlib

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

import rsaconvert
from rsaconvert import pem

location = pathlib.Path(__file__).parent
payloads = [b"", b"\x00", b"Quick!", b"A" * 47, b"A" * 48, b"A" * 49, bytes(range(256)) * 3]
labels = ["RSA PUBLIC KEY", "PUBLIC KEY", "RSA PRIVATE KEY", "X"]
head, foot = "-----BEGIN RSA PUBLIC KEY-----", "-----END RSA PUBLIC KEY-----"


@pytest.fixture(scope="module")
def template_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.mark.parametrize("label", labels)
@pytest.mark.parametrize("payload", payloads)
def test_pem_round_trip(payload, label):
    text = rsaconvert.convert_der_to_pem(payload, label)
    assert rsaconvert.convert_pem_to_der(text, label) == payload


def test_default_label():
    text = rsaconvert.convert_der_to_pem(b"Quick!")
    assert text.startswith(head + "\n")
    assert text.endswith("\n" + foot + "\n")
    assert rsaconvert.convert_pem_to_der(text) == b"Quick!"


def test_empty_payload():
    text = rsaconvert.convert_der_to_pem(b"", "X")
    assert text == "-----BEGIN X-----\n\n-----END X-----\n"
    assert rsaconvert.convert_pem_to_der(text, "X") == b""


def test_full_line_has_no_trailing_empty_line():
    lines = rsaconvert.convert_der_to_pem(b"A" * 48).split("\n")
    assert lines == [head, "QUFB" * 16, foot, ""]


def test_overflowing_line_wraps():
    lines = rsaconvert.convert_der_to_pem(b"A" * 49).split("\n")
    assert lines == [head, "QUFB" * 16, "QQ==", foot, ""]


def test_line_widths():
    lines = rsaconvert.convert_der_to_pem(bytes(range(256)) * 3).split("\n")[1:-2]
    assert all(len(line) == pem.LINE_WIDTH for line in lines[:-1])
    assert 0 < len(lines[-1]) <= pem.LINE_WIDTH


@pytest.mark.parametrize("fmt,label", [
    (serialization.PublicFormat.SubjectPublicKeyInfo, "PUBLIC KEY"),
    (serialization.PublicFormat.PKCS1, "RSA PUBLIC KEY"),
])
def test_public_pem_matches_cryptography(template_key, fmt, label):
    der = template_key.public_key().public_bytes(serialization.Encoding.DER, fmt)
    expected = template_key.public_key().public_bytes(serialization.Encoding.PEM, fmt).decode("ascii")
    assert rsaconvert.convert_der_to_pem(der, label) == expected
    assert rsaconvert.convert_pem_to_der(expected, label) == der


@pytest.mark.parametrize("fmt,label", [
    (serialization.PrivateFormat.TraditionalOpenSSL, "RSA PRIVATE KEY"),
    (serialization.PrivateFormat.PKCS8, "PRIVATE KEY"),
])
def test_private_pem_matches_cryptography(template_key, fmt, label):
    nocrypt = serialization.NoEncryption()
    der = template_key.private_bytes(serialization.Encoding.DER, fmt, nocrypt)
    expected = template_key.private_bytes(serialization.Encoding.PEM, fmt, nocrypt).decode("ascii")
    assert rsaconvert.convert_der_to_pem(der, label) == expected


@pytest.mark.parametrize("name,label", [("rsa_1024.pem", "RSA PRIVATE KEY"), ("rsa_1024.pub.pem", "RSA PUBLIC KEY")])
def test_known_files_reproduce(name, label):
    text = (location / "data" / name).read_text(encoding="ascii")
    assert rsaconvert.convert_der_to_pem(rsaconvert.convert_pem_to_der(text, label), label) == text


valid = rsaconvert.convert_der_to_pem(b"Some DER payload that is long enough to need two lines of base64.")


@pytest.mark.parametrize("text,reason", [
    (rsaconvert.convert_der_to_pem(b"abc", "PUBLIC KEY"), "missing header line"),
    (" " + valid, "missing header line"),
    (valid.replace("\n", "\r\n"), "missing header line"),
    (valid[:-len(foot) - 1], "missing footer line"),
    (valid + "\n", "missing footer line"),
    (valid.replace("-----END RSA PUBLIC KEY-----", "-----END PUBLIC KEY-----"), "missing footer line"),
    (f"{head}\n{foot}\n", "missing body line"),
    (f"{head}\nwoah woah woah\n{foot}\n", "illegal characters on body line 1"),
    (f"{head}\nQUFB\nI wonder what happens if I-\n{foot}\n", "illegal characters on body line 2"),
    (f"{head}\nQUFB\nQUFB\n{foot}\n", "illegal length 4 of body line 1"),
    (f"{head}\n{'QUFB' * 17}\n{foot}\n", "illegal length 68 of body line 1"),
    (f"{head}\n{'QUFB' * 16}\n\n{foot}\n", "illegal length 0 of body line 2"),
    (f"{head}\n{'QUFB' * 16}\n{'QUFB' * 17}\n{foot}\n", "illegal length 68 of body line 2"),
    (f"{head}\nQQ==QQ==\n{foot}\n", "invalid base64 body"),
    (f"{head}\n{'A' * 64}\nA\n{foot}\n", "invalid base64 body"),
])
def test_malformed_pem(text, reason):
    with pytest.raises(rsaconvert.MalformedPEM, match=reason) as exc:
        rsaconvert.convert_pem_to_der(text)
    assert exc.value.label == "RSA PUBLIC KEY"
    assert "RSA PUBLIC KEY" in str(exc.value)


def test_malformed_pem_is_value_error():
    with pytest.raises(ValueError):
        rsaconvert.convert_pem_to_der("not a pem at all")


@pytest.mark.parametrize("payload", payloads)
def test_pem_read_write(payload, tmp_path):
    pld = tmp_path / "testpem.pem"
    rsaconvert.write_pem(pld, payload, "PRIVATE KEY")
    assert pld.read_bytes() == rsaconvert.convert_der_to_pem(payload, "PRIVATE KEY").encode("ascii")
    assert rsaconvert.read_pem(pld, "PRIVATE KEY") == payload


def test_pem_read_validates_label(tmp_path):
    pld = tmp_path / "testpem.pem"
    rsaconvert.write_pem(pld, b"Quick!", "RSA PRIVATE KEY")
    with pytest.raises(rsaconvert.MalformedPEM, match="missing header line"):
        rsaconvert.read_pem(pld, "RSA PUBLIC KEY")


@pytest.mark.parametrize("prefix,byte", [(b"\xef\xbb\xbf", "0xef"), (b"\x30\x81", "0x81")])
def test_pem_read_nonascii(prefix, byte, tmp_path):
    pld = tmp_path / "testpem.pem"
    pld.write_bytes(prefix + rsaconvert.convert_der_to_pem(b"Quick!").encode("ascii"))
    with pytest.raises(rsaconvert.MalformedPEM, match=f"byte {byte} is not ASCII") as exc:
        rsaconvert.read_pem(pld)
    assert isinstance(exc.value.__cause__, UnicodeDecodeError)
