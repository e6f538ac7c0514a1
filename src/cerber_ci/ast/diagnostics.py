"""Diagnostics and parse results.

A diagnostic is a structured record of a parsing or validation finding.
Diagnostics are collected per parse call by a `Diagnostics` accumulator
and returned alongside the AST in a `ParseResult`.
"""

from typing import Literal

from pydantic import Field

from cerber_ci.models import SchemaModel, SourceLocation

from .nodes import Workflow  # noqa: TC001

#: Severity of a diagnostic.
#: `warning` is reserved for soft findings and never blocks strict parsing.
type Severity = Literal['error', 'warning']


class Diagnostic(SchemaModel):
    """A single parsing or validation finding."""

    message: str = Field(
        title='Message',
        description='Human-readable description of the finding.',
    )

    severity: Severity = Field(
        default='error',
        title='Severity',
    )

    location: SourceLocation | None = None

    def __str__(self) -> str:
        """String representation."""
        if self.location is None:
            return f'{self.severity}: {self.message}'

        return (
            f'{self.location.file or '<unicode string>'}:'
            f'{self.location.line}:{self.location.column}: '
            f'{self.severity}: {self.message}'
        )


class ParseResult(SchemaModel):
    """Outcome of a non-throwing parse.

    The AST is `None` only when the input could not be decoded or did
    not decode to a mapping. Otherwise it holds the fullest AST the
    builder could construct, even when diagnostics were emitted.
    """

    ast: Workflow | None = None

    diagnostics: list[Diagnostic] = Field(
        default_factory=list,
        title='Diagnostics',
        description='Findings in the order they were detected.',
    )

    @property
    def errors(self) -> list[Diagnostic]:
        """Diagnostics with `error` severity."""
        return [item for item in self.diagnostics if item.severity == 'error']

    @property
    def warnings(self) -> list[Diagnostic]:
        """Diagnostics with `warning` severity."""
        return [item for item in self.diagnostics if item.severity == 'warning']

    @property
    def ok(self) -> bool:
        """Whether an AST was built without error diagnostics."""
        return self.ast is not None and not self.errors


class Diagnostics:
    """Append-only accumulator of diagnostics for a single parse call.

    An accumulator is created by the builder for every call and threaded
    through each construction step. It must never be shared between calls.
    """

    def __init__(self) -> None:
        """Initialize an empty accumulator."""
        self._items: list[Diagnostic] = []

    def __len__(self) -> int:
        """Number of collected diagnostics."""
        return len(self._items)

    def error(self, message: str, location: SourceLocation | None = None) -> None:
        """Record an `error` diagnostic.

        Args:
            message: Human-readable description of the finding.
            location: Optional source location.
        """
        self._items.append(Diagnostic(message=message, severity='error', location=location))

    def warning(self, message: str, location: SourceLocation | None = None) -> None:
        """Record a `warning` diagnostic.

        Args:
            message: Human-readable description of the finding.
            location: Optional source location.
        """
        self._items.append(Diagnostic(message=message, severity='warning', location=location))

    def collect(self) -> list[Diagnostic]:
        """Return a copy of the collected diagnostics in detection order."""
        return list(self._items)
