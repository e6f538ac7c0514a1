"""Core type definitions for decoded workflow documents.

This module defines the value types produced by the YAML decoder and
consumed by the AST builder. The decoded document is an untyped tree;
the builder never probes it ad hoc and instead classifies every node
into one of four kinds (mapping, sequence, scalar, null) before acting.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from enum import StrEnum
from typing import Any

#: Scalars represent atomic values produced by the YAML decoder.
type Scalar = date | datetime | str | bytes | int | float | bool

#: A value is any decoded YAML node: a scalar, a sequence of values,
#: a mapping of values, or null.
type Value = Scalar | Sequence['Value'] | Mapping[str, 'Value'] | None

#: A raw value represents any Python object received from the decoder
#: prior to classification.
type RawValue = Any

MAPPINGS = (dict,)
SCALARS = (date, datetime, str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set)


class NodeKind(StrEnum):
    """Kinds of nodes found in a decoded document tree."""

    MAPPING = 'mapping'
    SEQUENCE = 'sequence'
    SCALAR = 'scalar'
    NULL = 'null'


def classify(value: RawValue) -> NodeKind:
    """Classify a decoded value into its node kind.

    Args:
        value: Decoded value.

    Returns:
        The node kind of the value.

    Raises:
        TypeError: If the value was not produced by a YAML decoder.
    """
    if value is None:
        return NodeKind.NULL

    if isinstance(value, MAPPINGS):
        return NodeKind.MAPPING

    if isinstance(value, SEQUENCES):
        return NodeKind.SEQUENCE

    if isinstance(value, SCALARS):
        return NodeKind.SCALAR

    raise TypeError(f'{value!r} has unsupported type')


def is_missing(value: RawValue) -> bool:
    """Check whether a field value counts as not provided.

    An absent key, an explicit null and an empty string are all treated
    as a missing value for required fields.

    Args:
        value: Decoded value or `None` for an absent key.

    Returns:
        True if the value is missing.
    """
    return value is None or value == ''


def as_list(value: RawValue) -> list[Value]:
    """Wrap a scalar into a single-element list.

    Sequences are copied as lists, any other value is wrapped.

    Args:
        value: Decoded value.

    Returns:
        A new list.
    """
    match classify(value):
        case NodeKind.SEQUENCE:
            return list(value)
        case _:
            return [value]
