"""JSON Schema of the workflow AST."""

from functools import cache
from json import dumps

from pydantic.json_schema import GenerateJsonSchema

from cerber_ci.ast import Workflow


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator for the workflow AST output contract."""

    @classmethod
    @cache
    def make_schema(cls, indent: int | str | None = 4) -> str:
        """Generate the JSON Schema of workflow ASTs.

        Args:
            indent: Indentation level used for JSON formatting.

        Returns:
            Serialized JSON Schema string.
        """
        schema = {
            **Workflow.model_json_schema(
                schema_generator=cls,
                mode='serialization',
            ),
            'title': 'cerber-ci',
            'description': 'JSON Schema for cerber-ci workflow ASTs',
            '$schema': cls.schema_dialect,
        }

        return dumps(
            schema,
            ensure_ascii=False,
            sort_keys=True,
            indent=indent,
        )
