"""Code generation driver for tidegen.

This module provides the Codegen class that turns a decoded API document into
TypeScript client files: a shared ``types`` module with every declaration,
one module per tag with the client functions, and a root index.

Every step that consumes an unordered mapping of the document iterates it in
sorted order first, so the same document always produces the same files.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import jinja2

from tidegen.codegen.collisions import CollisionResolver
from tidegen.codegen.emitter import CodeEmitter, FileEmitter, relative_path
from tidegen.codegen.import_resolver import (
    ImportCollector,
    ImportResolver,
    collect_used_enums,
)
from tidegen.codegen.modules import Fragment, ModulePartitioner
from tidegen.codegen.operations import (
    EMPTY_REPLY,
    EMPTY_REQUEST,
    FunctionUnit,
    OperationSynthesizer,
    RequestTypeRegistry,
)
from tidegen.codegen.references import EnumSet, build_enum_set
from tidegen.codegen.schema_loader import SchemaLoader
from tidegen.codegen.templates import TemplateRenderer
from tidegen.codegen.types import EnumDeclaration, SchemaDeclaration, TypeNamer
from tidegen.codegen.utils import sanitize_identifier
from tidegen.config import DocumentConfig
from tidegen.exceptions import (
    EndpointGenerationError,
    OutputError,
    TypeGenerationError,
)
from tidegen.openapi import OpenAPI, Operation

logger = logging.getLogger(__name__)

INDEX_ROLE = 'index'
ENUM_ROLE = 'enum'

MARKER_DECLARATIONS = (
    SchemaDeclaration(
        schema_name=EMPTY_REQUEST,
        type_name=EMPTY_REQUEST,
        alias_type='Record<string, never>',
        description='Parameters of an operation that takes no input.',
    ),
    SchemaDeclaration(
        schema_name=EMPTY_REPLY,
        type_name=EMPTY_REPLY,
        alias_type='Record<string, unknown>',
        description='Result of an operation without a declared response body.',
    ),
)


@dataclass(frozen=True)
class GeneratedFile:
    module: str | None
    role: str
    content: str

    @property
    def path(self) -> str:
        return relative_path(self.module, self.role)


@dataclass
class GenerationResult:
    """Everything produced by one generation run.

    Attributes:
        files: Rendered files, in emission order.
        declarations: Declarations of the shared module, markers included.
        enums: Enum declarations, sorted by type name.
        functions: Accepted functions per module, sorted by (name, order).
        skipped: Descriptions of units that were left out.
    """

    files: list[GeneratedFile] = field(default_factory=list)
    declarations: list[SchemaDeclaration] = field(default_factory=list)
    enums: list[EnumDeclaration] = field(default_factory=list)
    functions: dict[str, list[FunctionUnit]] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, str]:
        """Return the rendered files keyed by relative path."""
        return {file.path: file.content for file in self.files}

    def get(self, path: str) -> str | None:
        return self.as_dict().get(path)


class Codegen:
    """Generates a TypeScript client from an API document.

    Attributes:
        config: The DocumentConfig with source and output settings.
        renderer: The TemplateRenderer used for every fragment and file.

    Example:
        >>> from tidegen.config import DocumentConfig
        >>> codegen = Codegen(DocumentConfig(source='openapi.yaml', output='./client'))
        >>> result = codegen.generate()
        >>> sorted(result.as_dict())
        ['index.ts', 'team/index.ts', 'types/enum.ts', 'types/index.ts']
    """

    def __init__(
        self,
        config: DocumentConfig,
        schema_loader: SchemaLoader | None = None,
        renderer: TemplateRenderer | None = None,
    ):
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self._schema_loader = schema_loader or SchemaLoader()

    def load(self) -> OpenAPI:
        """Load the configured document.

        Raises:
            SchemaLoadError: If the source cannot be read.
            SchemaValidationError: If the source does not decode.
        """
        return self._schema_loader.load(self.config.source)

    def generate(self, emitter: CodeEmitter | None = None) -> GenerationResult:
        """Load, build and write the client."""
        document = self.load()
        result = self.build(document)
        self.emit(result, emitter or FileEmitter(self.config.output, force=self.config.force))
        return result

    def emit(self, result: GenerationResult, emitter: CodeEmitter) -> list[str]:
        """Write every generated file; a failed write skips only that file."""
        emitter.prepare()
        written = []
        for file in result.files:
            try:
                written.append(emitter.write(file.module, file.role, file.content))
            except OutputError as e:
                logger.error(str(e))
        return written

    def build(self, document: OpenAPI) -> GenerationResult:
        """Resolve and render the whole document without touching the disk."""
        result = GenerationResult()
        schemas = document.components.schemas

        # must be complete before any property type is resolved
        enum_set = build_enum_set(schemas)
        namer = TypeNamer(enum_set)
        partitioner = ModulePartitioner(
            shared_module=self.config.shared_module,
            default_module=self.config.default_module,
        )

        declarations = self._collect_schema_declarations(namer, document, result)
        request_types = RequestTypeRegistry(enum_set)
        self._collect_functions(document, request_types, partitioner, result)

        taken = {declaration.type_name for declaration in declarations}
        for declaration in request_types:
            if declaration.type_name in taken:
                logger.warning(
                    f'Request type {declaration.type_name} is already declared '
                    'by a schema; keeping the schema declaration'
                )
                continue
            declarations.append(declaration)

        rendered = self._render_declarations(declarations, partitioner, result)
        result.declarations = rendered

        exported = {declaration.type_name for declaration in rendered}
        exported.update(enum.type_name for enum in result.enums if enum.namespace is None)

        self._render_shared_files(rendered, enum_set, partitioner, result)
        self._render_api_files(exported, partitioner, result)
        self._render_index(partitioner, result)
        return result

    def _collect_schema_declarations(
        self, namer: TypeNamer, document: OpenAPI, result: GenerationResult
    ) -> list[SchemaDeclaration]:
        declarations = list(MARKER_DECLARATIONS)
        seen = {declaration.type_name for declaration in declarations}
        schemas = document.components.schemas

        for name in sorted(schemas):
            schema = schemas[name]
            if schema.is_enum:
                result.enums.append(namer.declare_enum(name, schema))
                continue

            declaration = namer.declare(name, schema)
            if declaration.type_name in seen:
                logger.warning(
                    f"Schema '{name}' resolves to the already declared type "
                    f'{declaration.type_name}; skipping it'
                )
                result.skipped.append(f'schema {name}')
                continue
            seen.add(declaration.type_name)
            declarations.append(declaration)

        result.enums.sort(key=lambda enum: enum.type_name)
        return declarations

    @staticmethod
    def _iter_operations(document: OpenAPI) -> Iterator[tuple[str, str, Operation]]:
        """Yield operations sorted by path, then by method precedence."""
        for path in sorted(document.paths):
            for method, operation in document.paths[path].operations():
                yield path, method, operation

    def _collect_functions(
        self,
        document: OpenAPI,
        request_types: RequestTypeRegistry,
        partitioner: ModulePartitioner,
        result: GenerationResult,
    ) -> None:
        synthesizer = OperationSynthesizer(
            request_types, default_module=self.config.default_module
        )
        resolver = CollisionResolver()

        for path, method, operation in self._iter_operations(document):
            unit = synthesizer.synthesize(path, method, operation)
            if unit is None:
                result.skipped.append(f'operation {method.upper()} {path}')
                continue

            if unit.module == partitioner.shared_module:
                logger.warning(
                    f"Tag '{operation.tags[0]}' clashes with the shared module; "
                    f'placing {unit.operation_id} in {partitioner.default_module}'
                )
                unit.module = partitioner.default_module

            resolver.resolve(unit)
            try:
                text = self.renderer.render_function(unit)
            except jinja2.TemplateError as e:
                error = EndpointGenerationError(unit.operation_id, method, path, cause=e)
                logger.error(str(error))
                result.skipped.append(f'operation {method.upper()} {path}')
                continue

            partitioner.add_function(unit.module, Fragment(unit.name, text, unit.order))
            result.functions.setdefault(unit.module, []).append(unit)

        for units in result.functions.values():
            units.sort(key=lambda unit: (unit.name, unit.order))

    def _render_declarations(
        self,
        declarations: list[SchemaDeclaration],
        partitioner: ModulePartitioner,
        result: GenerationResult,
    ) -> list[SchemaDeclaration]:
        rendered = []
        for declaration in declarations:
            try:
                text = self.renderer.render_declaration(declaration)
            except jinja2.TemplateError as e:
                logger.error(str(TypeGenerationError(declaration.type_name, cause=e)))
                result.skipped.append(f'schema {declaration.schema_name}')
                continue
            partitioner.add_declaration(Fragment(declaration.type_name, text))
            rendered.append(declaration)
        return rendered

    def _add_file(
        self, result: GenerationResult, module: str | None, role: str, render
    ) -> None:
        try:
            content = render()
        except jinja2.TemplateError as e:
            path = relative_path(module, role)
            logger.error(f'Failed to render {path}: {e}')
            result.skipped.append(f'file {path}')
            return
        result.files.append(GeneratedFile(module, role, content))

    def _render_shared_files(
        self,
        declarations: list[SchemaDeclaration],
        enum_set: EnumSet,
        partitioner: ModulePartitioner,
        result: GenerationResult,
    ) -> None:
        shared = partitioner.shared
        if result.enums:
            self._add_file(
                result,
                shared.name,
                ENUM_ROLE,
                lambda: self.renderer.render_enum_file(result.enums),
            )

        if shared.is_empty:
            return

        used_enums = collect_used_enums(declarations, result.enums, enum_set)
        fragments = [fragment.text for fragment in shared.sorted_declarations()]
        self._add_file(
            result,
            shared.name,
            INDEX_ROLE,
            lambda: self.renderer.render_types_file(
                fragments, used_enums, has_enums=bool(result.enums)
            ),
        )

    def _render_api_files(
        self,
        exported: set[str],
        partitioner: ModulePartitioner,
        result: GenerationResult,
    ) -> None:
        import_resolver = ImportResolver(f'../{partitioner.shared_module}', exported)

        for module in partitioner.api_modules():
            functions = module.function_texts()
            discovered = import_resolver.used_types(functions)
            referenced = import_resolver.referenced_types(
                result.functions.get(module.name, [])
            )
            if discovered != referenced:
                logger.warning(
                    f'Imports found in module {module.name} ({", ".join(discovered)}) '
                    f'differ from the types its functions use ({", ".join(referenced)})'
                )

            collector = ImportCollector()
            collector.add_import(self.config.request_import, 'request')
            for statement in import_resolver.resolve(functions):
                collector.add_imports(
                    {statement.module: statement.names}, type_only=statement.type_only
                )
            imports = collector.to_statements()
            self._add_file(
                result,
                module.name,
                INDEX_ROLE,
                lambda: self.renderer.render_module_file(imports, functions),
            )

    def _render_index(
        self, partitioner: ModulePartitioner, result: GenerationResult
    ) -> None:
        aliases = CollisionResolver()
        modules = [
            (aliases.claim(INDEX_ROLE, sanitize_identifier(module.name)), module.name)
            for module in partitioner.api_modules()
        ]
        self._add_file(
            result,
            None,
            INDEX_ROLE,
            lambda: self.renderer.render_index_file(partitioner.shared_module, modules),
        )
