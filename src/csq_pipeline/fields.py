"""Tokenizer for the delimited text carried in consequence records.

bcftools/csq packs one prediction per transcript into a pipe-delimited
string and several predictions into one comma-separated INFO value. All
positional access goes through these helpers instead of offset arithmetic.
"""

from typing import Iterable, Sequence

FIELD_SEP = "|"
TERM_SEP = "&"
VERSION_SEP = "."


def split_fields(text: str, sep: str = FIELD_SEP) -> list[str]:
    """Split a delimited record into its fields.

    An empty string is a record with zero fields, not one empty field.
    """
    if text == "":
        return []
    return text.split(sep)


def join_fields(fields: Iterable[str], sep: str = FIELD_SEP) -> str:
    """Join fields back into a delimited record."""
    return sep.join(fields)


def field_at(fields: Sequence[str], index: int, default: str = "") -> str:
    """Return the field at a position, or ``default`` past the end."""
    if 0 <= index < len(fields):
        return fields[index]
    return default


def split_terms(value: str) -> list[str]:
    """Split an ``&``-joined multi-value field, dropping empty terms."""
    return [term for term in value.split(TERM_SEP) if term]


def unversioned(identifier: str) -> str:
    """Strip the version suffix from a stable identifier.

    ``ENST00000456328.2`` -> ``ENST00000456328``. Identifiers without a
    version are returned unchanged.
    """
    return identifier.split(VERSION_SEP, 1)[0]
