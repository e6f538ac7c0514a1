"""Workflow AST node models.

Nodes mirror the structure of a GitHub Actions workflow: a root
`Workflow` with one `Trigger` and an ordered mapping of `Job` nodes,
each holding an ordered list of `Step` nodes.

Attribute names are Python identifiers; the translation from hyphenated
source keys lives in `cerber_ci.core.fields`. Expressions such as
`${{ github.ref }}` are kept as opaque strings.
"""

from typing import Literal

from pydantic import Field

from cerber_ci.models import ASTNode, SchemaModel
from cerber_ci.values import Value  # noqa: TC001

#: Environment variables mapping.
type Environment = dict[str, Value]


class Trigger(ASTNode):
    """Events and filters that cause a workflow to run (`on:`).

    A bare string, a list of strings and a mapping of event names all
    normalize to this shape.
    """

    type: Literal['trigger'] = 'trigger'

    events: list[str] = Field(
        default_factory=list,
        title='Events',
        description='Ordered list of distinct event names.',
    )

    branches: list[str] | None = Field(
        default=None,
        title='Branch filters',
    )

    tags: list[str] | None = Field(
        default=None,
        title='Tag filters',
    )

    paths: list[str] | None = Field(
        default=None,
        title='Path filters',
    )


class Step(ASTNode):
    """Single unit of execution within a job.

    A step either runs an inline command (`run`) or references an
    external action (`uses`). A step with both is accepted as is.
    """

    type: Literal['step'] = 'step'

    id: str | None = None
    name: str | None = None

    uses: str | None = Field(
        default=None,
        title='Action reference',
        description='Reference to a reusable external action.',
    )

    run: str | None = Field(
        default=None,
        title='Command',
        description='Inline shell command.',
    )

    with_: dict[str, Value] | None = Field(
        default=None,
        title='Action inputs',
        description='Input parameters passed to the action (`with`).',
    )

    env: Environment | None = None

    condition: str | None = Field(
        default=None,
        title='Condition',
        description='Unevaluated conditional-execution guard (`if`).',
    )

    continue_on_error: bool | None = None


class Strategy(SchemaModel):
    """Job strategy block.

    The matrix is kept as given; its expansion is not performed.
    """

    matrix: dict[str, Value] | None = None
    fail_fast: bool | None = None
    max_parallel: int | None = None


class Job(ASTNode):
    """Named unit of work executed on a runner."""

    type: Literal['job'] = 'job'

    id: str = Field(
        title='Job identifier',
        description='Key of the job in the `jobs` mapping.',
    )

    name: str | None = None

    runner: str | list[str] | None = Field(
        default=None,
        title='Runner',
        description='Runner specification (`runs-on`) kept as given.',
    )

    steps: list[Step] = Field(default_factory=list)

    needs: list[str] | None = Field(
        default=None,
        title='Dependencies',
        description='Identifiers of jobs this job depends on.',
    )

    condition: str | None = Field(
        default=None,
        title='Condition',
        description='Unevaluated conditional-execution guard (`if`).',
    )

    strategy: Strategy | None = None
    env: Environment | None = None
    permissions: dict[str, str] | None = None

    timeout: int | None = Field(
        default=None,
        title='Timeout',
        description='Job timeout in minutes (`timeout-minutes`).',
    )


class Workflow(ASTNode):
    """Root node of a workflow AST.

    The trigger is always present and the jobs mapping is never null,
    even when the source document omitted them.
    """

    type: Literal['workflow'] = 'workflow'

    name: str | None = None

    on: Trigger = Field(default_factory=Trigger)
    jobs: dict[str, Job] = Field(default_factory=dict)

    env: Environment | None = None
    defaults: dict[str, Value] | None = None

    concurrency: Value = Field(
        default=None,
        title='Concurrency',
        description='Opaque concurrency-control settings.',
    )
