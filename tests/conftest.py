"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from cerber_ci.core import WorkflowParser
from cerber_ci.settings import ParserSettings

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def parser() -> WorkflowParser:
    """Provide a parser with default settings.

    Settings are passed explicitly so that `CERBER_*` variables of the
    surrounding environment do not affect tests.
    """
    return WorkflowParser(ParserSettings(encoding='utf-8', log_level='WARNING'))


@pytest.fixture
def minimal_workflow() -> str:
    """Provide the smallest valid workflow document."""
    return (
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - run: echo test\n'
    )


@pytest.fixture
def workflow_file(tmp_path: 'Path') -> 'Callable[..., Path]':
    """Provide a factory writing workflow files to a temporary directory.

    Returns:
        A callable accepting the file content and an optional name and
        returning the path of the written file.
    """
    def write(content: str, name: str = 'workflow.yml', encoding: str = 'utf-8') -> 'Path':
        """Write a workflow file.

        Args:
            content: File content.
            name: File name within the temporary directory.
            encoding: Text encoding of the file.

        Returns:
            Path of the written file.
        """
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return write
