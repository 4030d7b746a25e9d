"""Deterministic resource ID generation."""

from __future__ import annotations

import zlib


def gen_id(name: str) -> str:
    """Derive a resource ID from a name.

    The ID is the CRC-32 (IEEE) checksum of the UTF-8 encoded name as
    lowercase hexadecimal, without zero padding. An empty name yields an
    empty ID.

    Args:
        name: Resource name (e.g. a composed "namespace_object_rule" string).

    Returns:
        Hexadecimal ID string.
    """
    if not name:
        return ""
    return format(zlib.crc32(name.encode("utf-8")), "x")
