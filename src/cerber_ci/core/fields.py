"""Field mapping tables.

Each table maps a source key of the workflow document to the attribute
name of the corresponding AST node. Only fields copied verbatim are
listed here; fields that need structural handling (`on`, `jobs`,
`steps`, `needs`, `strategy`) are parsed by the builder itself.
"""

from types import MappingProxyType

#: Top-level workflow keys.
WORKFLOW_FIELDS = MappingProxyType({
    'name': 'name',
    'env': 'env',
    'defaults': 'defaults',
    'concurrency': 'concurrency',
})

#: Job-level keys.
JOB_FIELDS = MappingProxyType({
    'name': 'name',
    'runs-on': 'runner',
    'if': 'condition',
    'env': 'env',
    'permissions': 'permissions',
    'timeout-minutes': 'timeout',
})

#: Strategy block keys.
STRATEGY_FIELDS = MappingProxyType({
    'matrix': 'matrix',
    'fail-fast': 'fail_fast',
    'max-parallel': 'max_parallel',
})

#: Step-level keys.
STEP_FIELDS = MappingProxyType({
    'id': 'id',
    'name': 'name',
    'uses': 'uses',
    'run': 'run',
    'with': 'with_',
    'env': 'env',
    'if': 'condition',
    'continue-on-error': 'continue_on_error',
})

#: Trigger filter keys, read from every event configuration.
TRIGGER_FILTERS = ('branches', 'tags', 'paths')


def translate(source: dict, table: MappingProxyType) -> dict:
    """Copy fields of a source mapping under their attribute names.

    Keys absent from the source are skipped; values are copied as is.

    Args:
        source: Decoded mapping.
        table: Field mapping table.

    Returns:
        A new mapping of attribute names to values.
    """
    return {
        attribute: source[key]
        for key, attribute in table.items()
        if key in source
    }
