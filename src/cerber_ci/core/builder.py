"""Workflow AST construction.

This module walks a decoded document tree and builds the typed workflow
AST, collecting diagnostics for missing or malformed fields instead of
failing on the first problem.

Building is total for any decodable input: every finding becomes a
diagnostic and traversal continues, so callers always receive the
fullest AST that could be constructed.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from cerber_ci.ast import Diagnostics, Job, ParseResult, Step, Strategy, Trigger, Workflow
from cerber_ci.models import SourceLocation
from cerber_ci.values import NodeKind, as_list, classify, is_missing

from .fields import (
    JOB_FIELDS,
    STEP_FIELDS,
    STRATEGY_FIELDS,
    TRIGGER_FILTERS,
    WORKFLOW_FIELDS,
    translate,
)

if TYPE_CHECKING:
    from cerber_ci.values import RawValue

logger = getLogger(__name__)

INVALID_INPUT_MESSAGE = 'Invalid input: expected object'
MISSING_TRIGGER_MESSAGE = "Missing required field 'on' (trigger configuration)"
INVALID_JOBS_MESSAGE = "Missing or invalid 'jobs' field"


class WorkflowBuilder:
    """Builder of workflow ASTs from decoded document trees.

    The builder is stateless: each call creates its own diagnostics
    accumulator and returns freshly constructed nodes. Values are copied
    from the tree verbatim; only the structural fields (`on`, `jobs`,
    `steps`, `needs`, `strategy`) are reshaped.
    """

    @classmethod
    def build(cls, tree: 'RawValue', source_file: str | None = None) -> ParseResult:
        """Build a workflow AST from a decoded document tree.

        Structural checks run in a fixed order: the trigger, the jobs
        mapping, then every job and its steps in document order.

        Args:
            tree: Decoded document.
            source_file: Optional name of the originating file.

        Returns:
            Parse result with the AST and the diagnostics in detection
            order. The AST is `None` if the tree is not a mapping.
        """
        report = Diagnostics()

        if classify(tree) is not NodeKind.MAPPING:
            report.error(INVALID_INPUT_MESSAGE)
            return ParseResult(ast=None, diagnostics=report.collect())

        if is_missing(tree.get('on')):
            report.error(MISSING_TRIGGER_MESSAGE)

        jobs_config = tree.get('jobs')
        if classify(jobs_config) is not NodeKind.MAPPING:
            report.error(INVALID_JOBS_MESSAGE)
            jobs_config = {}

        trigger = cls.parse_trigger(tree.get('on'))

        jobs = {}
        for job_id, job_config in jobs_config.items():
            job = cls.parse_job(str(job_id), job_config, report)
            jobs[job.id] = job

        workflow = Workflow.model_construct(
            **translate(tree, WORKFLOW_FIELDS),
            on=trigger,
            jobs=jobs,
            location=SourceLocation(line=1, column=1, file=source_file),
        )

        logger.debug('Built workflow with %d jobs and %d diagnostics',
                     len(jobs), len(report))

        return ParseResult(ast=workflow, diagnostics=report.collect())

    @classmethod
    def parse_trigger(cls, value: 'RawValue') -> Trigger:
        """Build a trigger from the `on:` value.

        A bare string, a sequence of event names and a mapping of event
        configurations are accepted. For mappings, `branches`, `tags` and
        `paths` filters are read from every event in order, so when
        several events carry the same filter the last one wins.

        Any other value yields a trigger without events.

        Args:
            value: Decoded `on` value, or `None` if absent.

        Returns:
            Trigger node.
        """
        events: list[str] = []
        filters: dict[str, list] = {}

        match classify(value):
            case NodeKind.SCALAR if isinstance(value, str) and value:
                events = [value]

            case NodeKind.SEQUENCE:
                events = [
                    str(event)
                    for event in value
                    if classify(event) is NodeKind.SCALAR
                ]

            case NodeKind.MAPPING:
                events = [str(event) for event in value]
                for event_config in value.values():
                    if classify(event_config) is not NodeKind.MAPPING:
                        continue
                    for key in TRIGGER_FILTERS:
                        if event_config.get(key) is not None:
                            filters[key] = as_list(event_config[key])

        return Trigger.model_construct(
            events=list(dict.fromkeys(events)),
            **filters,
        )

    @classmethod
    def parse_job(cls, job_id: str, value: 'RawValue', report: Diagnostics) -> Job:
        """Build a job from its configuration.

        A job body that is not a mapping is treated as an empty one.

        Args:
            job_id: Key of the job in the `jobs` mapping.
            value: Decoded job configuration.
            report: Diagnostics accumulator of the current call.

        Returns:
            Job node.
        """
        config = value if classify(value) is NodeKind.MAPPING else {}

        if is_missing(config.get('runs-on')):
            report.error(f"Job '{job_id}': missing required field 'runs-on'")

        steps = []
        match classify(config.get('steps')):
            case NodeKind.SEQUENCE:
                steps = [
                    cls.parse_step(step_config, job_id, index, report)
                    for index, step_config in enumerate(config['steps'])
                ]
            case NodeKind.NULL:
                pass
            case _:
                report.error(f"Job '{job_id}': 'steps' must be an array")

        needs = None
        if config.get('needs') is not None:
            needs = as_list(config['needs'])

        strategy = None
        if config.get('strategy') is not None:
            strategy = cls.parse_strategy(config['strategy'])

        logger.debug('Built job %r with %d steps', job_id, len(steps))

        return Job.model_construct(
            **translate(config, JOB_FIELDS),
            id=job_id,
            steps=steps,
            needs=needs,
            strategy=strategy,
        )

    @classmethod
    def parse_strategy(cls, value: 'RawValue') -> Strategy:
        """Build a strategy block.

        The matrix is copied without expansion. A strategy value that is
        not a mapping yields an empty strategy.

        Args:
            value: Decoded strategy configuration.

        Returns:
            Strategy block.
        """
        config = value if classify(value) is NodeKind.MAPPING else {}

        return Strategy.model_construct(**translate(config, STRATEGY_FIELDS))

    @classmethod
    def parse_step(cls, value: 'RawValue', job_id: str, index: int,
                   report: Diagnostics) -> Step:
        """Build a step from its configuration.

        A step must have either `uses` or `run`. Having both is accepted.
        A step that is not a mapping is treated as an empty one.

        Args:
            value: Decoded step configuration.
            job_id: Identifier of the enclosing job, for messages.
            index: Zero-based position of the step in the job.
            report: Diagnostics accumulator of the current call.

        Returns:
            Step node.
        """
        config = value if classify(value) is NodeKind.MAPPING else {}

        if is_missing(config.get('uses')) and is_missing(config.get('run')):
            report.error(f"Job '{job_id}', step {index}: must have either 'uses' or 'run'")

        return Step.model_construct(**translate(config, STEP_FIELDS))

    @classmethod
    def normalize(cls, ast: Workflow) -> Workflow:
        """Apply semantic normalization to a workflow AST.

        No normalization is performed yet; the AST is returned unchanged.

        Args:
            ast: Workflow AST.

        Returns:
            The same workflow AST.
        """
        return ast
