"""Core exception hierarchy.

This module defines the error types raised by the library: decoding
failures reported by the YAML adapter and the failures raised by the
strict parsing entry point when diagnostics block a workflow.
"""

from os import linesep
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

if TYPE_CHECKING:
    from yaml import YAMLError

if TYPE_CHECKING:
    from cerber_ci.ast import Diagnostic

FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None

    #: Zero-based line number in the source file.
    line_num: int | None
    #: Zero-based column number in the source file.
    column_num: int | None


class ErrorFormatter:
    """Utility class for formatting workflow errors.

    Produces human-readable messages with optional source location.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        return message + linesep + cls.get_location_string(context, indent=FORMAT_INDENT)

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line
            and column when available.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            line_num += 1
            message += f', line {line_num}'
            if (column_num := context.get('column_num')) is not None:
                column_num += 1
                message += f', column {column_num}'

        return message

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input.

        Args:
            indent: Indentation as string or number of spaces.

        Returns:
            A string consisting of spaces or the provided string.
        """
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class WorkflowError(Exception, ErrorFormatter):
    """Base exception for all cerber-ci errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None,
                 diagnostics: 'Iterable[Diagnostic]' = ()) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Optional error context with location data.
            diagnostics: Diagnostics that caused the error, if any.
        """
        self.message = message
        self.context = context
        self.diagnostics = tuple(diagnostics)

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)


class DecodeError(WorkflowError):
    """Error raised when a document is not valid YAML."""

    @classmethod
    def from_yaml_error(cls, error: 'YAMLError',
                        filename: str | None = None) -> 'Self':
        """Create a decode error from a YAML parsing failure.

        The message is the decoder's own message. Positional information
        is preserved when the decoder provides a problem mark.

        Args:
            error: Exception raised by the YAML parser.
            filename: Optional name of the source file.

        Returns:
            DecodeError representing the YAML parsing failure.
        """
        error_context = ErrorContext(filename=filename)
        if mark := getattr(error, 'problem_mark', None):
            error_context['line_num'] = mark.line
            error_context['column_num'] = mark.column

        return cls(str(error), context=error_context)


class DiagnosticsError(WorkflowError):
    """Base error carrying the diagnostics that blocked parsing."""

    #: Heading line of the formatted message.
    heading: str = 'Workflow has errors:'

    @classmethod
    def from_diagnostics(cls, diagnostics: 'Iterable[Diagnostic]',
                         filename: str | None = None) -> 'Self':
        """Create an error joining diagnostic messages.

        Args:
            diagnostics: Diagnostics to report, in detection order.
            filename: Optional name of the source file.

        Returns:
            Error whose message lists every diagnostic on its own line.
        """
        diagnostics = tuple(diagnostics)
        message = '\n'.join((
            cls.heading,
            *(item.message for item in diagnostics),
        ))

        context = None
        if filename:
            context = ErrorContext(filename=filename)

        return cls(message, context=context, diagnostics=diagnostics)


class ParseFailure(DiagnosticsError):
    """Error raised when no AST could be built at all.

    The input either is not valid YAML or does not decode to a mapping.
    """

    heading = 'Failed to parse workflow:'


class ValidationFailure(DiagnosticsError):
    """Error raised when an AST was built but has error diagnostics."""

    heading = 'Workflow has critical errors:'
