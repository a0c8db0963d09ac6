"""Schema loading utilities for API documents.

This module loads API documents from local files or http(s) URLs, parses
YAML or JSON content, and decodes it into the document model. Loading either
succeeds completely or raises; a partially decoded document is never returned.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from tidegen.codegen.utils import is_url
from tidegen.exceptions import SchemaLoadError, SchemaValidationError
from tidegen.openapi import OpenAPI

logger = logging.getLogger(__name__)


class SchemaLoader:
    """Loads API documents from URLs or file paths.

    Example:
        >>> loader = SchemaLoader()
        >>> document = loader.load('./openapi.yaml')
        >>> document = loader.load('https://api.example.com/openapi.json')
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        base_path: str | Path | None = None,
    ):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
            base_path: Base path for relative file paths. Defaults to the
                current working directory.
        """
        self._http_client = http_client
        self._base_path = Path(base_path) if base_path else Path.cwd()

    def load(self, source: str) -> OpenAPI:
        """Load and decode an API document.

        Raises:
            SchemaLoadError: If the source cannot be read or parsed.
            SchemaValidationError: If the content does not decode into the
                document model.
        """
        try:
            if is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)
        except (SchemaLoadError, SchemaValidationError):
            raise
        except Exception as e:
            raise SchemaLoadError(source, cause=e)

        return self.parse(content, source)

    def parse(self, content: Any, source: str = '<memory>') -> OpenAPI:
        """Decode already-parsed content into the document model."""
        if not isinstance(content, dict):
            raise SchemaValidationError(
                source, errors=[f'expected a mapping, got {type(content).__name__}']
            )
        try:
            document = OpenAPI.model_validate(content)
        except ValidationError as e:
            raise SchemaValidationError(
                source, errors=[str(error['msg']) for error in e.errors()]
            )
        logger.debug(
            f'Loaded {source}: {len(document.paths)} paths, '
            f'{len(document.components.schemas)} schemas'
        )
        return document

    def _load_from_url(self, url: str) -> Any:
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')

            if 'json' in content_type or url.endswith('.json'):
                return json.loads(response.text)
            return yaml.safe_load(response.text)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> Any:
        path = Path(file_path)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(file_path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() == '.json':
                return json.loads(content)
            return yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(file_path), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(file_path), cause=e)
