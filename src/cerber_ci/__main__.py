"""Command-line utilities for cerber-ci.

Provides commands to check workflow files for diagnostics, dump their
AST as JSON, and print the JSON Schema of the AST.
"""

from logging import basicConfig
from pathlib import Path

from click import Path as PathParam
from click import Context, argument, echo, group, pass_context

from cerber_ci.core import WorkflowParser
from cerber_ci.jsonschema import SchemaGenerator
from cerber_ci.settings import get_settings

InputFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)


@group(help='Command-line utilities for CI workflow parsing.')
@pass_context
def cli(ctx: Context) -> None:
    """Root CLI group for cerber-ci tools."""
    settings = get_settings()
    basicConfig(level=settings.log_level)

    ctx.obj = WorkflowParser(settings)


@cli.command(
    name='check',
    help='Report diagnostics of workflow files.',
)
@argument('files', type=InputFilepath, nargs=-1, required=True)
@pass_context
def check_files(ctx: Context, files: tuple[Path, ...]) -> None:
    """Parse workflow files and print their diagnostics.

    Exits with status 1 when any file has errors.

    Args:
        ctx: Click context holding the parser.
        files: Workflow files to check.
    """
    parser: WorkflowParser = ctx.obj
    failed = False

    for path in files:
        result = parser.parse_file(path)
        for diagnostic in result.diagnostics:
            echo(f'{path.as_posix()}: {diagnostic.severity}: {diagnostic.message}')
        if not result.ok:
            failed = True

    if failed:
        ctx.exit(1)


@cli.command(
    name='dump',
    help='Print the AST of a workflow file as JSON.',
)
@argument('file', type=InputFilepath)
@pass_context
def dump_file(ctx: Context, file: Path) -> None:
    """Parse a workflow file and print its AST.

    Diagnostics are written to standard error. Exits with status 1 when
    no AST could be built.

    Args:
        ctx: Click context holding the parser.
        file: Workflow file to dump.
    """
    parser: WorkflowParser = ctx.obj
    result = parser.parse_file(file)

    for diagnostic in result.diagnostics:
        echo(f'{file.as_posix()}: {diagnostic.severity}: {diagnostic.message}', err=True)

    if result.ast is None:
        ctx.exit(1)

    echo(result.ast.model_dump_json(indent=4, warnings=False))


@cli.command(
    name='schema',
    help='Print the JSON Schema of workflow ASTs to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(SchemaGenerator.make_schema())


if __name__ == '__main__':
    cli()
