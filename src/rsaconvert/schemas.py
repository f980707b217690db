"""ASN.1 schemas of the RSA key structures.

The schemas are plain `pyasn1` sequence types, defined once and instantiated per encode/decode call. Field names
follow RFC 8017 and RFC 5280 as `pyasn1-modules` spells them, but the shapes are fixed to what RSA keys use here:
two-prime private keys only, and an algorithm identifier whose parameters are an explicit NULL.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import typing

from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

RSA_ENCRYPTION = rfc8017.rsaEncryption


class BitStringPayload(typing.NamedTuple):
    """A BIT STRING as its payload octets and the number of unused bits in the final octet."""
    unused: int
    data: bytes


class PKCS1PrivateKey(univ.Sequence):
    """RSAPrivateKey, without the multi-prime extension."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("version", univ.Integer()),
        namedtype.NamedType("modulus", univ.Integer()),
        namedtype.NamedType("publicExponent", univ.Integer()),
        namedtype.NamedType("privateExponent", univ.Integer()),
        namedtype.NamedType("prime1", univ.Integer()),
        namedtype.NamedType("prime2", univ.Integer()),
        namedtype.NamedType("exponent1", univ.Integer()),
        namedtype.NamedType("exponent2", univ.Integer()),
        namedtype.NamedType("coefficient", univ.Integer()),
    )


class PKCS1PublicKey(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("modulus", univ.Integer()),
        namedtype.NamedType("publicExponent", univ.Integer()),
    )


class RSAAlgorithmIdentifier(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("algorithm", univ.ObjectIdentifier()),
        namedtype.NamedType("parameters", univ.Null()),
    )


class SPKIWrapper(univ.Sequence):
    """SubjectPublicKeyInfo carrying a PKCS#1 public key in its BIT STRING."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("algorithm", RSAAlgorithmIdentifier()),
        namedtype.NamedType("subjectPublicKey", univ.BitString()),
    )


class PKCS8Wrapper(univ.Sequence):
    """PrivateKeyInfo carrying a PKCS#1 private key in its OCTET STRING. Attributes are not supported."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("version", univ.Integer()),
        namedtype.NamedType("privateKeyAlgorithm", RSAAlgorithmIdentifier()),
        namedtype.NamedType("privateKey", univ.OctetString()),
    )


def rsa_algorithm() -> RSAAlgorithmIdentifier:
    """Builds the rsaEncryption algorithm identifier with NULL parameters."""
    algid = RSAAlgorithmIdentifier()
    algid["algorithm"] = RSA_ENCRYPTION
    algid["parameters"] = univ.Null("")
    return algid


def bit_string(payload: BitStringPayload) -> univ.BitString:
    """Converts a payload into a BIT STRING, dropping `payload.unused` trailing bits of the last octet."""
    return univ.BitString.fromOctetString(payload.data, padding=payload.unused)


def bit_string_payload(value: univ.BitString) -> BitStringPayload:
    """Splits a BIT STRING into its payload octets and unused bit count.

    The unused bits are returned as zero bits at the end of the last octet, the way DER stores them.
    """
    unused = -len(value) % 8
    data = (value.asInteger() << unused).to_bytes((len(value) + unused) // 8, "big")
    return BitStringPayload(unused, data)
