"""Transforms between the DER structures RSA keys travel in.

Wraps PKCS#1 public keys into SubjectPublicKeyInfo and back, derives the SubjectPublicKeyInfo public key of a PKCS#1
private key, and does the same wrapping for private keys with PKCS#8 PrivateKeyInfo. All functions take and return
whole DER byte strings.

By default decoding is lenient: any algorithm identifier with NULL parameters is unwrapped and the private key version
is not looked at. `Validation.STRICT` turns those (and negative integers or unused BIT STRING bits) into errors.

Typical usage example:

    spki = private_to_public(pkcs1_private_der)
    pkcs1_public_der = unwrap_public_key(spki, Validation.STRICT)
    n, e = decode_public_key(pkcs1_public_der)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import logging
import typing

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import univ

from rsaconvert import schemas
from rsaconvert.errors import MalformedASN1

logger = logging.getLogger(__name__)

_PRIVATE_FIELDS = ("version", "modulus", "publicExponent", "privateExponent", "prime1", "prime2", "exponent1",
                   "exponent2", "coefficient")


class Validation(enum.Enum):
    """How much of a decoded structure is checked beyond its shape."""
    LENIENT = "lenient"
    STRICT = "strict"


class PublicNumbers(typing.NamedTuple):
    n: int
    e: int


class PrivateNumbers(typing.NamedTuple):
    """The integers of a PKCS#1 private key, in their encoding order."""
    version: int
    n: int
    e: int
    d: int
    p: int
    q: int
    dp: int
    dq: int
    qinv: int

    @property
    def public(self) -> PublicNumbers:
        return PublicNumbers(self.n, self.e)


def _decode(substrate: bytes, spec: univ.Sequence) -> univ.Sequence:
    """Decodes a whole DER structure against `spec`.

    Raises:
        MalformedASN1: If decoding fails or bytes are left over after the structure.
    """
    name = type(spec).__name__
    try:
        value, rest = decoder.decode(bytes(substrate), asn1Spec=spec)
    except error.PyAsn1Error as exc:
        raise MalformedASN1(name, str(exc)) from exc
    if rest:
        raise MalformedASN1(name, f"{len(rest)} trailing bytes after the structure")
    return value


def _unsigned(value: univ.Integer, field: str, schema: str, mode: Validation) -> int:
    """Reads an INTEGER as unsigned.

    A negative value is replaced by the unsigned big-endian reading of its two's complement octets.
    """
    number = int(value)
    if number >= 0:
        return number
    if mode is Validation.STRICT:
        raise MalformedASN1(schema, f"negative {field}")
    logger.debug("Reading negative %s of %s as unsigned", field, schema)
    size = ((-number - 1).bit_length() + 8) // 8
    return number + (1 << (8 * size))


def _check_version(version: int, schema: str, mode: Validation) -> None:
    if version == 0:
        return
    if mode is Validation.STRICT:
        raise MalformedASN1(schema, f"unsupported version {version}")
    logger.debug("Accepting %s with version %d", schema, version)


def _check_algorithm(algid: schemas.RSAAlgorithmIdentifier, schema: str, mode: Validation) -> None:
    if algid["algorithm"] == schemas.RSA_ENCRYPTION:
        return
    if mode is Validation.STRICT:
        raise MalformedASN1(schema, f"algorithm {algid['algorithm']} is not rsaEncryption")
    logger.debug("Accepting %s with algorithm %s", schema, algid["algorithm"])


def encode_public_key(n: int, e: int) -> bytes:
    """Encodes a PKCS#1 RSAPublicKey.

    Args:
        n: The modulus.
        e: The public exponent.

    Returns:
        The DER encoded public key.
    """
    keydata = schemas.PKCS1PublicKey()
    keydata["modulus"] = n
    keydata["publicExponent"] = e
    return encoder.encode(keydata)


def decode_public_key(pkcs1_public_der: bytes, mode: Validation = Validation.LENIENT) -> PublicNumbers:
    """Decodes a PKCS#1 RSAPublicKey.

    Args:
        pkcs1_public_der: The DER encoded public key.
        mode: Validation mode.

    Returns:
        The modulus and public exponent.

    Raises:
        MalformedASN1: If the bytes are not a PKCS#1 public key.
    """
    keydata = _decode(pkcs1_public_der, schemas.PKCS1PublicKey())
    return PublicNumbers(_unsigned(keydata["modulus"], "modulus", "PKCS1PublicKey", mode),
                         _unsigned(keydata["publicExponent"], "publicExponent", "PKCS1PublicKey", mode))


def encode_private_key(numbers: PrivateNumbers) -> bytes:
    """Encodes a PKCS#1 RSAPrivateKey from its nine integers."""
    keydata = schemas.PKCS1PrivateKey()
    for field, value in zip(_PRIVATE_FIELDS, numbers, strict=True):
        keydata[field] = value
    return encoder.encode(keydata)


def decode_private_key(pkcs1_private_der: bytes, mode: Validation = Validation.LENIENT) -> PrivateNumbers:
    """Decodes a PKCS#1 RSAPrivateKey.

    Args:
        pkcs1_private_der: The DER encoded private key.
        mode: Validation mode. Strict mode requires version 0.

    Returns:
        The nine integers of the key.

    Raises:
        MalformedASN1: If the bytes are not a PKCS#1 private key, or fail strict validation.
    """
    keydata = _decode(pkcs1_private_der, schemas.PKCS1PrivateKey())
    numbers = PrivateNumbers(*(_unsigned(keydata[field], field, "PKCS1PrivateKey", mode) for field in _PRIVATE_FIELDS))
    _check_version(numbers.version, "PKCS1PrivateKey", mode)
    return numbers


def wrap_public_key(pkcs1_public_der: bytes) -> bytes:
    """Wraps a PKCS#1 public key into a SubjectPublicKeyInfo.

    The payload is not decoded: whatever bytes are given become the BIT STRING content verbatim.

    Args:
        pkcs1_public_der: The DER encoded PKCS#1 public key.

    Returns:
        The DER encoded SubjectPublicKeyInfo.
    """
    spki = schemas.SPKIWrapper()
    spki["algorithm"] = schemas.rsa_algorithm()
    spki["subjectPublicKey"] = schemas.bit_string(schemas.BitStringPayload(0, bytes(pkcs1_public_der)))
    return encoder.encode(spki)


def unwrap_public_key(spki_der: bytes, mode: Validation = Validation.LENIENT) -> bytes:
    """Extracts the PKCS#1 public key from a SubjectPublicKeyInfo.

    Args:
        spki_der: The DER encoded SubjectPublicKeyInfo.
        mode: Validation mode. Strict mode requires the rsaEncryption algorithm and no unused bits.

    Returns:
        The BIT STRING payload, unchanged.

    Raises:
        MalformedASN1: If the bytes are not a SubjectPublicKeyInfo, or fail strict validation.
    """
    spki = _decode(spki_der, schemas.SPKIWrapper())
    _check_algorithm(spki["algorithm"], "SPKIWrapper", mode)
    payload = schemas.bit_string_payload(spki["subjectPublicKey"])
    if payload.unused:
        if mode is Validation.STRICT:
            raise MalformedASN1("SPKIWrapper", f"{payload.unused} unused bits in subjectPublicKey")
        logger.debug("Ignoring %d unused bits in subjectPublicKey", payload.unused)
    return payload.data


def private_to_public(pkcs1_private_der: bytes, mode: Validation = Validation.LENIENT) -> bytes:
    """Derives the SubjectPublicKeyInfo public key of a PKCS#1 private key.

    Args:
        pkcs1_private_der: The DER encoded PKCS#1 private key.
        mode: Validation mode, see `decode_private_key`.

    Returns:
        The DER encoded SubjectPublicKeyInfo of the matching public key.

    Raises:
        MalformedASN1: If the bytes are not a PKCS#1 private key, or fail strict validation.
    """
    numbers = decode_private_key(pkcs1_private_der, mode)
    return wrap_public_key(encode_public_key(numbers.n, numbers.e))


def wrap_private_key(pkcs1_private_der: bytes) -> bytes:
    """Wraps a PKCS#1 private key into a PKCS#8 PrivateKeyInfo. The payload is not decoded."""
    pkinfo = schemas.PKCS8Wrapper()
    pkinfo["version"] = 0
    pkinfo["privateKeyAlgorithm"] = schemas.rsa_algorithm()
    pkinfo["privateKey"] = bytes(pkcs1_private_der)
    return encoder.encode(pkinfo)


def unwrap_private_key(pkcs8_der: bytes, mode: Validation = Validation.LENIENT) -> bytes:
    """Extracts the PKCS#1 private key from a PKCS#8 PrivateKeyInfo.

    Args:
        pkcs8_der: The DER encoded PrivateKeyInfo.
        mode: Validation mode. Strict mode requires version 0 and the rsaEncryption algorithm.

    Returns:
        The OCTET STRING payload, unchanged.

    Raises:
        MalformedASN1: If the bytes are not a PrivateKeyInfo, or fail strict validation.
    """
    pkinfo = _decode(pkcs8_der, schemas.PKCS8Wrapper())
    _check_version(int(pkinfo["version"]), "PKCS8Wrapper", mode)
    _check_algorithm(pkinfo["privateKeyAlgorithm"], "PKCS8Wrapper", mode)
    return pkinfo["privateKey"].asOctets()
