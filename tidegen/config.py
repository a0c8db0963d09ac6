import json
import os
import time
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tidegen.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['tidegen.yaml', 'tidegen.yml']

DEFAULT_SHARED_MODULE = 'types'
DEFAULT_MODULE = 'common'
DEFAULT_REQUEST_IMPORT = '@/utils/request'


def default_output_dir() -> str:
    """Return a fresh, timestamped output directory name."""
    return str(Path('output') / f'api-{int(time.time())}')


class DocumentConfig(BaseModel):
    """Represents a single API document to be processed."""

    source: str = Field(..., description='Path or URL to the API document.')

    output: str = Field(
        default_factory=default_output_dir,
        description='Output directory for the generated code.',
    )

    force: bool = Field(
        False,
        description='Remove the output directory before writing the generated code.',
    )

    request_import: str = Field(
        DEFAULT_REQUEST_IMPORT,
        description='Module the generated functions import their `request` helper from.',
    )

    shared_module: str = Field(
        DEFAULT_SHARED_MODULE,
        description='Name of the module that holds every type declaration.',
    )

    default_module: str = Field(
        DEFAULT_MODULE, description='Module for operations without a tag.'
    )


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='TIDEGEN_')

    documents: list[DocumentConfig] = Field(
        ..., description='List of API documents to process.'
    )


def load_yaml(path: str | Path) -> dict:
    return yaml.safe_load(Path(path).read_text(encoding='utf-8'))


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text(encoding='utf-8'))


def _load_config_file(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        raise ConfigurationError('Configuration file not found', config_path=str(path))
    try:
        if path.suffix.lower() == '.json':
            return load_json(path)
        return load_yaml(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f'Configuration file could not be parsed: {e}', config_path=str(path)
        )


def _validate(data: dict, config_path: str) -> CodegenConfig:
    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(
            'Configuration must be a mapping', config_path=config_path
        )
    try:
        return CodegenConfig(**(data or {}))
    except ValidationError as e:
        raise ConfigurationError(str(e), config_path=config_path)


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file, the working directory or pyproject.toml.

    Raises:
        ConfigurationError: If no configuration can be found or it is invalid.
    """
    if path:
        return _validate(_load_config_file(path), path)

    cwd = Path(os.getcwd())

    for filename in DEFAULT_FILENAMES:
        candidate = cwd / filename
        if candidate.exists():
            return _validate(_load_config_file(candidate), str(candidate))

    pyproject_path = cwd / 'pyproject.toml'

    if pyproject_path.exists():
        import tomllib

        pyproject = tomllib.loads(pyproject_path.read_text(encoding='utf-8'))
        tools = pyproject.get('tool', {})

        if 'tidegen' in tools:
            return _validate(tools['tidegen'], str(pyproject_path))

    raise ConfigurationError('No tidegen configuration found', config_path=str(cwd))
