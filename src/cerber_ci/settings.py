"""Runtime configuration.

Settings are resolved from environment variables prefixed with
`CERBER_` (for example, `CERBER_ENCODING=latin-1`).
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from cerber_ci.models import SettingsModel

type LogLevel = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ParserSettings(SettingsModel):
    """Settings for reading workflow files and reporting."""

    model_config = SettingsConfigDict(env_prefix='CERBER_')

    encoding: str = Field(
        default='utf-8',
        title='File encoding',
        description='Text encoding used to read workflow files.',
    )

    log_level: LogLevel = Field(
        default='WARNING',
        title='Log level',
        description='Logging level applied by the command-line interface.',
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log level names in any case."""
        if isinstance(value, str):
            return value.strip().upper()

        return value


def get_settings() -> ParserSettings:
    """Resolve settings from the current environment."""
    return ParserSettings()
