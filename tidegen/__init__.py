"""tidegen - Generate typed TypeScript API clients from OpenAPI documents.

tidegen reads an OpenAPI-style document and writes one interface per schema,
one request function per operation grouped into a module per tag, and the
import statements that tie them together. Output is deterministic: the same
document always yields the same files.

Quick Start:
    >>> from tidegen import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(source='./openapi.yaml', output='./src/api')
    >>> Codegen(config).generate()

CLI Usage:
    $ tidegen generate -f ./openapi.yaml -o ./src/api --force
    $ tidegen generate --config tidegen.yaml
    $ tidegen version
"""

from importlib.metadata import PackageNotFoundError, version

from tidegen.codegen.codegen import Codegen
from tidegen.codegen.schema_loader import SchemaLoader
from tidegen.codegen.types import TypeNamer
from tidegen.config import CodegenConfig, DocumentConfig, get_config
from tidegen.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    EndpointGenerationError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaValidationError,
    TidegenError,
    TypeGenerationError,
)

__all__ = [
    # Main classes
    'Codegen',
    'SchemaLoader',
    'TypeNamer',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'TidegenError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'CodeGenerationError',
    'TypeGenerationError',
    'EndpointGenerationError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = version('tidegen')
except PackageNotFoundError:
    __version__ = 'unknown'
