"""YAML decoder adapter.

This module turns raw workflow text into a generic tree of mappings,
sequences, scalars and null values using PyYAML.

PyYAML implements YAML 1.1, where `on`, `off`, `yes` and `no` are
booleans. Workflow documents rely on `on` being a plain key, so the
loader defined here resolves booleans the YAML 1.2 way and accepts only
`true` and `false`.
"""

from re import X
from re import compile as regexp
from typing import TYPE_CHECKING

from yaml import SafeLoader, YAMLError, load

from cerber_ci.errors import DecodeError

if TYPE_CHECKING:
    from io import TextIOBase

if TYPE_CHECKING:
    from cerber_ci.values import RawValue

BOOL_TAG = 'tag:yaml.org,2002:bool'

BOOL_PATTERN = regexp(r'''^(?:true|True|TRUE
                            |false|False|FALSE)$''', X)


class WorkflowLoader(SafeLoader):
    """Safe YAML loader with YAML 1.2 boolean resolution."""

    yaml_implicit_resolvers = {
        first: [
            (tag, pattern)
            for tag, pattern in resolvers
            if tag != BOOL_TAG
        ]
        for first, resolvers in SafeLoader.yaml_implicit_resolvers.items()
    }


WorkflowLoader.add_implicit_resolver(BOOL_TAG, BOOL_PATTERN, list('tTfF'))


def decode(content: 'TextIOBase | str', source_file: str | None = None) -> 'RawValue':
    """Decode a YAML document into a generic tree.

    The stream must hold a single document. An empty document
    decodes to `None`.

    Args:
        content: YAML content as a string or file-like object.
        source_file: Optional name of the source file, for messages.

    Returns:
        Decoded document tree.

    Raises:
        DecodeError: If the content is not valid YAML.
    """
    try:
        return load(content, Loader=WorkflowLoader)  # noqa: S506

    except YAMLError as base:
        raise DecodeError.from_yaml_error(base, filename=source_file) from base
