"""Conversions of RSA key material between DER, PEM, PKCS#1, SubjectPublicKeyInfo and PKCS#8.

Provides PEM armoring of DER bytes, the ASN.1 schemas of the RSA key structures, and transforms between them: wrapping
a PKCS#1 public key into a SubjectPublicKeyInfo and back, deriving the public key of a PKCS#1 private key, and wrapping
PKCS#1 private keys into PKCS#8.

Typical usage example:

    spki = private_to_public(convert_pem_to_der(pem_text, "RSA PRIVATE KEY"))
    print(convert_der_to_pem(spki, "PUBLIC KEY"))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaconvert.errors import KeyFormatError
from rsaconvert.errors import MalformedASN1
from rsaconvert.errors import MalformedPEM
from rsaconvert.keys import decode_private_key
from rsaconvert.keys import decode_public_key
from rsaconvert.keys import encode_private_key
from rsaconvert.keys import encode_public_key
from rsaconvert.keys import private_to_public
from rsaconvert.keys import PrivateNumbers
from rsaconvert.keys import PublicNumbers
from rsaconvert.keys import unwrap_private_key
from rsaconvert.keys import unwrap_public_key
from rsaconvert.keys import Validation
from rsaconvert.keys import wrap_private_key
from rsaconvert.keys import wrap_public_key
from rsaconvert.pem import convert_der_to_pem
from rsaconvert.pem import convert_pem_to_der
from rsaconvert.pem import read_pem
from rsaconvert.pem import write_pem
from rsaconvert.schemas import PKCS1PublicKey

__version__ = "0.1.0"
__all__ = [
    "convert_der_to_pem",
    "convert_pem_to_der",
    "read_pem",
    "write_pem",
    "wrap_public_key",
    "unwrap_public_key",
    "private_to_public",
    "wrap_private_key",
    "unwrap_private_key",
    "encode_public_key",
    "decode_public_key",
    "encode_private_key",
    "decode_private_key",
    "PublicNumbers",
    "PrivateNumbers",
    "Validation",
    "PKCS1PublicKey",
    "KeyFormatError",
    "MalformedPEM",
    "MalformedASN1",
]
