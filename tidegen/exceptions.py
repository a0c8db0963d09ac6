"""Custom exceptions for tidegen.

This module defines the hierarchy of exceptions raised while loading an API
document and generating TypeScript client code from it.

Only schema loading and configuration errors are fatal. Generation and output
errors are raised for a single declaration, function or module and are logged
and skipped by the generator.
"""


class TidegenError(Exception):
    """Base exception for all tidegen errors.

    Example:
        try:
            codegen.generate()
        except TidegenError as e:
            print(f"tidegen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(TidegenError):
    """Base exception for schema-related errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to read an API document from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """The loaded content could not be decoded into the document model.

    Attributes:
        source: The source path or URL of the document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class CodeGenerationError(TidegenError):
    """Error while generating code for one unit of output.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class TypeGenerationError(CodeGenerationError):
    """A type declaration could not be rendered.

    Attributes:
        type_name: The name of the declaration being rendered.
    """

    def __init__(self, type_name: str, cause: Exception | None = None):
        self.type_name = type_name
        super().__init__(
            f"Failed to generate type '{type_name}'", context=type_name, cause=cause
        )


class EndpointGenerationError(CodeGenerationError):
    """An endpoint function could not be synthesized or rendered.

    Attributes:
        operation_id: The operationId of the endpoint.
        method: The HTTP method of the endpoint.
        path: The URL path of the endpoint.
    """

    def __init__(
        self,
        operation_id: str,
        method: str | None = None,
        path: str | None = None,
        cause: Exception | None = None,
    ):
        self.operation_id = operation_id
        self.method = method
        self.path = path
        message = f"Failed to generate endpoint '{operation_id}'"
        if method and path:
            message += f' ({method.upper()} {path})'
        super().__init__(message, context=operation_id or None, cause=cause)


class ConfigurationError(TidegenError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(TidegenError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
