"""Typed workflow AST.

Immutable Pydantic models describing a parsed CI workflow (triggers,
jobs, steps) and the diagnostics collected while building it.
"""

from .diagnostics import Diagnostic, Diagnostics, ParseResult, Severity
from .nodes import Job, Step, Strategy, Trigger, Workflow

__all__ = (
    'Diagnostic',
    'Diagnostics',
    'Job',
    'ParseResult',
    'Severity',
    'Step',
    'Strategy',
    'Trigger',
    'Workflow',
)
