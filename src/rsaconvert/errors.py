"""Exceptions raised when key material does not have the expected shape."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class KeyFormatError(ValueError):
    """Base class for malformed PEM or DER key material."""


class MalformedPEM(KeyFormatError):
    """PEM text does not match the header/body/footer shape for a label.

    Attributes:
        label: The PEM label that was expected.
        reason: What was wrong with the text.
    """

    def __init__(self, label: str, reason: str) -> None:
        super().__init__(f"Malformed PEM for label {label!r}: {reason}")
        self.label = label
        self.reason = reason


class MalformedASN1(KeyFormatError):
    """A byte string does not decode against the expected ASN.1 schema.

    Attributes:
        schema: Name of the schema the bytes were decoded against.
        reason: What was wrong with the bytes.
    """

    def __init__(self, schema: str, reason: str) -> None:
        super().__init__(f"Malformed {schema} structure: {reason}")
        self.schema = schema
        self.reason = reason
