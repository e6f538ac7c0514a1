"""Integration tests for parsing YAML workflow documents."""

from io import StringIO
from typing import TYPE_CHECKING

import pytest

from cerber_ci.core import WorkflowParser
from cerber_ci.settings import ParserSettings

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def test_end_to_end(parser: WorkflowParser, minimal_workflow: str) -> None:
    """Parse the minimal workflow into a complete AST."""
    result = parser.parse(minimal_workflow)

    assert result.diagnostics == []
    assert result.ast is not None
    assert result.ast.on.events == ['push']
    assert list(result.ast.jobs) == ['test']
    assert result.ast.jobs['test'].runner == 'ubuntu-latest'
    assert len(result.ast.jobs['test'].steps) == 1
    assert result.ast.jobs['test'].steps[0].run == 'echo test'


def test_parse_stream(parser: WorkflowParser, minimal_workflow: str) -> None:
    """Parse a file-like object."""
    result = parser.parse(StringIO(minimal_workflow))

    assert result.ok
    assert list(result.ast.jobs) == ['test']


@pytest.mark.parametrize('content', (
    pytest.param('on: push\n', id='string'),
    pytest.param('on: [push]\n', id='flow sequence'),
    pytest.param('on:\n  - push\n', id='block sequence'),
    pytest.param('on:\n  push: {}\n', id='mapping'),
    pytest.param('on:\n  push:\n', id='mapping with null'),
))
def test_trigger_forms(content: str, parser: WorkflowParser) -> None:
    """Normalize all trigger forms to the same events."""
    result = parser.parse(content + 'jobs: {}\n')

    assert result.diagnostics == []
    assert result.ast.on.events == ['push']


def test_yaml_1_1_booleans(parser: WorkflowParser) -> None:
    """Keep YAML 1.1 boolean words as strings."""
    result = parser.parse(
        'on: push\n'
        'env:\n'
        '  ENABLED: yes\n'
        '  MODE: off\n'
        '  FLAG: true\n'
        'jobs: {}\n',
    )

    assert result.diagnostics == []
    assert result.ast.on.events == ['push']
    assert result.ast.env == {'ENABLED': 'yes', 'MODE': 'off', 'FLAG': True}


def test_simple_workflow(parser: WorkflowParser) -> None:
    """Parse a simple workflow with one job."""
    result = parser.parse(
        'name: CI\n'
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - uses: actions/checkout@v3\n'
        '      - name: Run tests\n'
        '        run: npm test\n',
    )

    assert result.diagnostics == []
    assert result.ast.name == 'CI'
    assert result.ast.on.events == ['push']
    assert list(result.ast.jobs) == ['test']


def test_multiple_jobs(parser: WorkflowParser) -> None:
    """Parse a workflow with dependent jobs."""
    result = parser.parse(
        'name: Multi-job workflow\n'
        'on: [push, pull_request]\n'
        'jobs:\n'
        '  build:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - uses: actions/checkout@v3\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    needs: build\n'
        '    steps:\n'
        '      - run: npm test\n',
    )

    assert result.diagnostics == []
    assert result.ast.on.events == ['push', 'pull_request']
    assert list(result.ast.jobs) == ['build', 'test']
    assert result.ast.jobs['test'].needs == ['build']


def test_trigger_branches(parser: WorkflowParser) -> None:
    """Parse trigger branch filters."""
    result = parser.parse(
        'on:\n'
        '  push:\n'
        '    branches:\n'
        '      - main\n'
        '      - develop\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - run: echo test\n',
    )

    assert result.diagnostics == []
    assert result.ast.on.events == ['push']
    assert result.ast.on.branches == ['main', 'develop']


def test_trigger_scalar_branch(parser: WorkflowParser) -> None:
    """Coerce a scalar branch filter to a list."""
    result = parser.parse(
        'on:\n'
        '  push:\n'
        '    branches: main\n'
        'jobs: {}\n',
    )

    assert result.ast.on.branches == ['main']


def test_step_uses(parser: WorkflowParser) -> None:
    """Parse a step referencing an action with inputs."""
    result = parser.parse(
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - name: Checkout\n'
        '        uses: actions/checkout@v3\n'
        '        with:\n'
        '          fetch-depth: 0\n',
    )

    step = result.ast.jobs['test'].steps[0]

    assert step.name == 'Checkout'
    assert step.uses == 'actions/checkout@v3'
    assert step.with_ == {'fetch-depth': 0}


def test_step_run(parser: WorkflowParser) -> None:
    """Parse a step with a multiline command and environment."""
    result = parser.parse(
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - name: Run tests\n'
        '        run: |\n'
        '          npm install\n'
        '          npm test\n'
        '        env:\n'
        '          NODE_ENV: test\n',
    )

    step = result.ast.jobs['test'].steps[0]

    assert step.name == 'Run tests'
    assert step.run == 'npm install\nnpm test\n'
    assert step.env == {'NODE_ENV': 'test'}


def test_step_condition(parser: WorkflowParser) -> None:
    """Keep step conditions as opaque strings."""
    result = parser.parse(
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - name: Deploy\n'
        "        if: github.ref == 'refs/heads/main'\n"
        '        run: npm run deploy\n'
        '        continue-on-error: true\n',
    )

    step = result.ast.jobs['test'].steps[0]

    assert step.condition == "github.ref == 'refs/heads/main'"
    assert step.continue_on_error is True


def test_job_matrix(parser: WorkflowParser) -> None:
    """Parse a matrix strategy without expansion."""
    result = parser.parse(
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    strategy:\n'
        '      matrix:\n'
        '        node: [16, 18, 20]\n'
        '        os: [ubuntu-latest, windows-latest]\n'
        '      fail-fast: false\n'
        '      max-parallel: 4\n'
        '    timeout-minutes: 15\n'
        '    steps:\n'
        '      - run: node --version\n',
    )

    job = result.ast.jobs['test']

    assert result.diagnostics == []
    assert job.strategy.matrix == {
        'node': [16, 18, 20],
        'os': ['ubuntu-latest', 'windows-latest'],
    }
    assert job.strategy.fail_fast is False
    assert job.strategy.max_parallel == 4
    assert job.timeout == 15


def test_job_permissions_and_env(parser: WorkflowParser) -> None:
    """Parse job permissions and environment."""
    result = parser.parse(
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    permissions:\n'
        '      contents: read\n'
        '      pull-requests: write\n'
        '    env:\n'
        '      NODE_ENV: production\n'
        '      API_URL: https://api.example.com\n'
        '    steps:\n'
        '      - run: echo $NODE_ENV\n',
    )

    job = result.ast.jobs['test']

    assert job.permissions == {'contents': 'read', 'pull-requests': 'write'}
    assert job.env == {'NODE_ENV': 'production', 'API_URL': 'https://api.example.com'}


def test_anchors_resolved(parser: WorkflowParser) -> None:
    """Resolve anchors and merge keys by the decoder."""
    result = parser.parse(
        'on: push\n'
        'jobs:\n'
        '  build: &defaults\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - run: make\n'
        '  test:\n'
        '    <<: *defaults\n'
        '    needs: build\n',
    )

    assert result.diagnostics == []
    assert result.ast.jobs['test'].runner == 'ubuntu-latest'
    assert result.ast.jobs['test'].steps[0].run == 'make'


def test_missing_fields(parser: WorkflowParser) -> None:
    """Report missing trigger, runner and step action."""
    result = parser.parse(
        'jobs:\n'
        '  test:\n'
        '    steps:\n'
        '      - name: Invalid step\n',
    )

    assert result.ast is not None
    assert [item.message for item in result.diagnostics] == [
        "Missing required field 'on' (trigger configuration)",
        "Job 'test': missing required field 'runs-on'",
        "Job 'test', step 0: must have either 'uses' or 'run'",
    ]


@pytest.mark.parametrize('content', (
    pytest.param('just a string\n', id='scalar'),
    pytest.param('- on: push\n- jobs: {}\n', id='sequence'),
    pytest.param('', id='empty document'),
    pytest.param('# only a comment\n', id='comment only'),
))
def test_non_object_document(content: str, parser: WorkflowParser) -> None:
    """Return no AST for documents that are not mappings."""
    result = parser.parse(content)

    assert result.ast is None
    assert [item.message for item in result.diagnostics] == [
        'Invalid input: expected object',
    ]


@pytest.mark.parametrize('content', (
    pytest.param((
        'on: push\n'
        'jobs:\n'
        '  test:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps: [\n'
        '      - run: echo "unclosed\n'
    ), id='unclosed flow'),
    pytest.param('invalid: yaml: content:', id='nested colons'),
    pytest.param('on: push\n---\non: pull_request\n', id='multiple documents'),
))
def test_invalid_yaml(content: str, parser: WorkflowParser) -> None:
    """Return no AST and the decoder message for invalid YAML."""
    result = parser.parse(content)

    assert result.ast is None
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].severity == 'error'
    assert result.diagnostics[0].message.startswith('YAML parse error: ')


def test_invalid_yaml_message(parser: WorkflowParser) -> None:
    """Carry the decoder's problem description."""
    result = parser.parse('invalid: yaml: content:')

    assert 'mapping values are not allowed here' in result.diagnostics[0].message


def test_real_world_workflow(parser: WorkflowParser) -> None:
    """Parse a typical Next.js workflow."""
    result = parser.parse(
        'name: Next.js CI\n'
        'on:\n'
        '  push:\n'
        '    branches: [main]\n'
        '  pull_request:\n'
        '    branches: [main]\n'
        'jobs:\n'
        '  build:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - uses: actions/checkout@v3\n'
        '      - name: Setup Node.js\n'
        '        uses: actions/setup-node@v3\n'
        '        with:\n'
        "          node-version: '18'\n"
        "          cache: 'npm'\n"
        '      - run: npm ci\n'
        '      - run: npm run build\n'
        '      - run: npm test\n',
    )

    assert result.diagnostics == []
    assert result.ast.name == 'Next.js CI'
    assert result.ast.on.events == ['push', 'pull_request']
    assert len(result.ast.jobs['build'].steps) == 5
    assert result.ast.jobs['build'].steps[1].with_ == {'node-version': '18', 'cache': 'npm'}


def test_docker_workflow(parser: WorkflowParser) -> None:
    """Parse a tag-triggered workflow with expressions."""
    result = parser.parse(
        'name: Docker Build\n'
        'on:\n'
        '  push:\n'
        '    tags:\n'
        "      - 'v*'\n"
        'jobs:\n'
        '  docker:\n'
        '    runs-on: ubuntu-latest\n'
        '    steps:\n'
        '      - uses: actions/checkout@v3\n'
        '      - name: Login to DockerHub\n'
        '        uses: docker/login-action@v2\n'
        '        with:\n'
        '          username: ${{ secrets.DOCKERHUB_USERNAME }}\n'
        '          password: ${{ secrets.DOCKERHUB_TOKEN }}\n'
        '      - name: Build and push\n'
        '        uses: docker/build-push-action@v4\n'
        '        with:\n'
        '          context: .\n'
        '          push: true\n'
        '          tags: user/app:latest\n',
    )

    assert result.diagnostics == []
    assert result.ast.on.tags == ['v*']
    assert len(result.ast.jobs['docker'].steps) == 3
    assert result.ast.jobs['docker'].steps[1].with_['username'] == '${{ secrets.DOCKERHUB_USERNAME }}'
    assert result.ast.jobs['docker'].steps[2].with_['push'] is True


def test_parse_file(parser: WorkflowParser, minimal_workflow: str,
                    workflow_file: 'Callable[..., Path]') -> None:
    """Parse a file and use its path as source file."""
    path = workflow_file(minimal_workflow, name='ci.yml')

    result = parser.parse_file(path)

    assert result.ok
    assert result.ast.location.file == path.as_posix()


def test_parse_file_encoding(workflow_file: 'Callable[..., Path]') -> None:
    """Read files with the configured encoding."""
    path = workflow_file(
        'name: Büild\non: push\njobs: {}\n',
        encoding='latin-1',
    )

    parser = WorkflowParser(ParserSettings(encoding='latin-1'))

    assert parser.parse_file(path).ast.name == 'Büild'


def test_parse_missing_file(parser: WorkflowParser, tmp_path: 'Path') -> None:
    """Propagate errors reading files."""
    with pytest.raises(FileNotFoundError):
        parser.parse_file(tmp_path / 'missing.yml')
