"""Workflow parser and strict entry point.

This module joins the YAML decoder adapter and the AST builder. The
`WorkflowParser` never raises for malformed workflows: decode failures
and structural findings are both reported as diagnostics. The strict
`parse_or_throw` function is the only place turning diagnostics into
exceptions.
"""

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from cerber_ci.ast import Diagnostics, ParseResult
from cerber_ci.errors import DecodeError, ParseFailure, ValidationFailure
from cerber_ci.settings import ParserSettings, get_settings

from .builder import WorkflowBuilder
from .loader import decode

if TYPE_CHECKING:
    from io import TextIOBase
    from os import PathLike

if TYPE_CHECKING:
    from cerber_ci.ast import Workflow

logger = getLogger(__name__)


class WorkflowParser(WorkflowBuilder):
    """Parser of YAML workflow documents into typed ASTs.

    The parser holds only immutable settings, so one instance may be
    used concurrently by any number of callers.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        """Initialize the parser.

        Args:
            settings: Optional settings. Resolved from the environment
                on first use when omitted.
        """
        self._settings = settings

    @property
    def settings(self) -> ParserSettings:
        """Settings of the parser.

        Only reading files needs them, so parsing text never touches
        the environment.
        """
        if self._settings is None:
            self._settings = get_settings()

        return self._settings

    def parse(self, content: 'TextIOBase | str',
              source_file: str | None = None) -> ParseResult:
        """Parse a YAML workflow document.

        Args:
            content: YAML content as a string or file-like object.
            source_file: Optional name of the originating file.

        Returns:
            Parse result. On a decode failure the AST is `None` and the
            only diagnostic carries the decoder's message.
        """
        try:
            tree = decode(content, source_file)

        except DecodeError as error:
            logger.debug('Failed to decode workflow %s', source_file or '<string>')
            report = Diagnostics()
            report.error(f'YAML parse error: {error.message}')
            return ParseResult(ast=None, diagnostics=report.collect())

        return self.build(tree, source_file)

    def parse_file(self, path: 'str | PathLike[str]') -> ParseResult:
        """Parse a workflow file.

        The file is read with the configured encoding and its path is
        used as the source file of the result.

        Args:
            path: Path to the workflow file.

        Returns:
            Parse result.

        Raises:
            OSError: If the file can not be read.
        """
        path = Path(path)

        return self.parse(
            path.read_text(encoding=self.settings.encoding),
            source_file=path.as_posix(),
        )


def parse_or_throw(content: 'TextIOBase | str',
                   source_file: str | None = None) -> 'Workflow':
    """Parse a workflow and return its AST directly.

    Warnings never block parsing. Callers that need diagnostics should
    use `WorkflowParser.parse` instead.

    Args:
        content: YAML content as a string or file-like object.
        source_file: Optional name of the originating file.

    Returns:
        Workflow AST.

    Raises:
        ParseFailure: If no AST could be built, with all diagnostics.
        ValidationFailure: If the AST has error diagnostics, with the
            error diagnostics only.
    """
    result = WorkflowParser().parse(content, source_file)

    if result.ast is None:
        raise ParseFailure.from_diagnostics(result.diagnostics, filename=source_file)

    if errors := result.errors:
        raise ValidationFailure.from_diagnostics(errors, filename=source_file)

    return result.ast


#: Alias of `parse_or_throw`.
parse_workflow = parse_or_throw
