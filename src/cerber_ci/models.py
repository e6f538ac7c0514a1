"""Base Pydantic models for AST elements.

This module defines the foundational model classes used by all AST nodes
and result structures. Nodes are immutable snapshots: once the builder
returns them they are owned by the caller and never modified.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all AST elements.

    Design principles enforced by this model:
        - Immutability: nodes cannot be modified after creation.
        - Strict schema: unknown or extra attributes are rejected.
        - Binary values serialize to base64 in JSON output.

    All AST and result models must inherit from this class.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
        ser_json_bytes='base64',
    )


class SourceLocation(SchemaModel):
    """Position of an element in a source document.

    Lines and columns are one-based. Locations are used for diagnostics
    only and never affect the semantics of a node.
    """

    line: int = Field(
        ge=1,
        title='Line number',
        description='One-based line number in the source document.',
    )

    column: int = Field(
        ge=1,
        title='Column number',
        description='One-based column number in the source document.',
    )

    file: str | None = Field(
        default=None,
        title='Source file',
        description='Name of the originating file, if known.',
    )


class ASTNode(SchemaModel):
    """Common shape of every AST node.

    Concrete nodes narrow `type` to a literal discriminator identifying
    the node kind.
    """

    type: str

    location: SourceLocation | None = Field(
        default=None,
        title='Source location',
        description=(
            'Position of the node in the source document. '
            'May be absent when unavailable.'
        ),
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored,
          so unrelated environment variables never break configuration.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
