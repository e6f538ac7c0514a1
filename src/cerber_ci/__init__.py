"""Typed AST parser for YAML-based CI workflow definitions.

The `cerber_ci` package converts GitHub Actions style workflow documents
into immutable, strongly-typed syntax trees of triggers, jobs and steps.

Key features:
- best-effort AST building that collects diagnostics for missing or
  malformed fields instead of failing on the first problem;
- a strict entry point distinguishing undecodable input from invalid
  workflows;
- a JSON Schema of the AST and a command-line interface.

Expressions such as `${{ ... }}` are stored as opaque strings; workflows
are never executed and referenced actions are never fetched.
"""

from .ast import Diagnostic, Diagnostics, Job, ParseResult, Severity, Step, Strategy, Trigger, Workflow
from .core import WorkflowBuilder, WorkflowParser, parse_or_throw, parse_workflow
from .errors import DecodeError, ParseFailure, ValidationFailure, WorkflowError
from .models import ASTNode, SourceLocation

__version__ = '2.0.0a1'

#: Semantic version of the package.
VERSION = '2.0.0-alpha.1'

__all__ = (
    'VERSION',
    'ASTNode',
    'DecodeError',
    'Diagnostic',
    'Diagnostics',
    'Job',
    'ParseFailure',
    'ParseResult',
    'Severity',
    'SourceLocation',
    'Step',
    'Strategy',
    'Trigger',
    'ValidationFailure',
    'Workflow',
    'WorkflowBuilder',
    'WorkflowError',
    'WorkflowParser',
    '__version__',
    'parse_or_throw',
    'parse_workflow',
)
