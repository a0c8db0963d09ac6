"""Code generation package for tidegen.

Main Components:
    - Codegen: Orchestrates loading, resolution, rendering and writing
    - TypeNamer: Computes TypeScript types for schema properties
    - OperationSynthesizer: Derives client functions from operations
    - CollisionResolver: Keeps function names unique per module
    - ModulePartitioner: Groups declarations and functions into modules
    - ImportResolver: Finds the shared types a module's functions use
    - TemplateRenderer: Formats resolved records as TypeScript

Example:
    >>> from tidegen.codegen import Codegen
    >>> from tidegen.config import DocumentConfig
    >>>
    >>> codegen = Codegen(DocumentConfig(source='./openapi.yaml', output='./client'))
    >>> codegen.generate()
"""

from tidegen.codegen.codegen import Codegen, GeneratedFile, GenerationResult
from tidegen.codegen.collisions import CollisionResolver
from tidegen.codegen.emitter import CodeEmitter, FileEmitter, StringEmitter
from tidegen.codegen.import_resolver import (
    ImportCollector,
    ImportResolver,
    ImportStatement,
    discover_used_types,
)
from tidegen.codegen.modules import Fragment, ModulePartitioner, ModuleUnit
from tidegen.codegen.operations import (
    EMPTY_REPLY,
    EMPTY_REQUEST,
    FunctionUnit,
    OperationSynthesizer,
    RequestTypeRegistry,
)
from tidegen.codegen.references import (
    build_enum_set,
    clean_ref,
    resolve_reference,
    strip_namespace,
)
from tidegen.codegen.schema_loader import SchemaLoader
from tidegen.codegen.templates import TemplateRenderer
from tidegen.codegen.types import (
    EnumDeclaration,
    ProcessedProperty,
    PropertyKind,
    PropertyType,
    SchemaDeclaration,
    TypeNamer,
    classify_property,
    resolve_type,
)

__all__ = [
    # Main codegen class
    'Codegen',
    'GeneratedFile',
    'GenerationResult',
    # References and types
    'build_enum_set',
    'clean_ref',
    'resolve_reference',
    'strip_namespace',
    'TypeNamer',
    'PropertyKind',
    'PropertyType',
    'ProcessedProperty',
    'SchemaDeclaration',
    'EnumDeclaration',
    'classify_property',
    'resolve_type',
    # Operations
    'EMPTY_REQUEST',
    'EMPTY_REPLY',
    'FunctionUnit',
    'OperationSynthesizer',
    'RequestTypeRegistry',
    'CollisionResolver',
    # Modules and imports
    'Fragment',
    'ModuleUnit',
    'ModulePartitioner',
    'ImportCollector',
    'ImportResolver',
    'ImportStatement',
    'discover_used_types',
    # Loading, rendering, emission
    'SchemaLoader',
    'TemplateRenderer',
    'CodeEmitter',
    'FileEmitter',
    'StringEmitter',
]
