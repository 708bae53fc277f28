#!/usr/bin/env python3
"""
Data models for the Cyber Management System

This module contains the Pydantic BaseModel classes for users and devices, and
the delimited-line codec used by the text files they are persisted to.

Lines are ``id,field,...`` with no escaping. A free-text value holding a comma
shifts every following field on reload, so such records do not survive a
round trip; see ``unsafe_fields``.
"""

from typing import ClassVar, List, Tuple, Type, TypeVar

from pydantic import BaseModel, Field

DELIMITER = ","

R = TypeVar("R", bound="Record")


class RecordFormatError(ValueError):
    """Raised when a delimited line cannot be decoded into a record."""


class Record(BaseModel):
    """Base class for records stored one per line."""

    FIELDS: ClassVar[Tuple[str, ...]] = ("id",)

    id: int = Field(description="Identifier, unique within its collection")

    def to_line(self) -> str:
        """Encode the record as a delimited line (no trailing newline)."""
        return DELIMITER.join(str(getattr(self, name)) for name in self.FIELDS)

    @classmethod
    def from_line(cls: Type[R], line: str) -> R:
        """Decode a delimited line.

        The last field takes the remainder of the line, so extra commas end up
        in it rather than making the line invalid.

        Raises:
            RecordFormatError: Too few fields or a non-integer id.
        """
        line = line.rstrip("\r\n")
        parts = line.split(DELIMITER, len(cls.FIELDS) - 1)
        if len(parts) != len(cls.FIELDS):
            raise RecordFormatError(
                f"expected {len(cls.FIELDS)} fields, got {len(parts)}"
            )
        digits = parts[0][1:] if parts[0].startswith("-") else parts[0]
        if not (digits.isascii() and digits.isdigit()):
            raise RecordFormatError(f"invalid id: {parts[0]!r}")
        record_id = int(parts[0])
        values = dict(zip(cls.FIELDS[1:], parts[1:]))
        return cls(id=record_id, **values)

    def unsafe_fields(self) -> List[str]:
        """Names of free-text fields that contain the delimiter."""
        return [
            name for name in self.FIELDS[1:] if DELIMITER in str(getattr(self, name))
        ]


class User(Record):
    FIELDS: ClassVar[Tuple[str, ...]] = ("id", "username", "role")

    username: str
    role: str = Field(description="Free-text role (e.g. admin, analyst)")

    def describe(self) -> str:
        return f"ID: {self.id}, Username: {self.username}, Role: {self.role}"


class Device(Record):
    FIELDS: ClassVar[Tuple[str, ...]] = ("id", "name", "ip", "status")

    name: str
    ip: str
    status: str = Field(description="Free-text status (e.g. active, inactive)")

    def describe(self) -> str:
        return (
            f"ID: {self.id}, Name: {self.name}, IP: {self.ip}, Status: {self.status}"
        )
