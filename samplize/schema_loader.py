"""
Loading of schema documents for sample generation.

Documents are read from local paths, ``file://`` URIs or ``http(s)://`` URLs
and parsed as JSON or YAML. A JSON Pointer, given explicitly or as the URL
fragment, selects the schema inside the document.
"""

import json
import os
from typing import Any, Dict, Optional, Tuple
from urllib.parse import unquote, urlparse

import jsonpointer
from jsonpointer import JsonPointerException
import requests
import yaml


class SchemaPointerError(ValueError):
    """Raised when a JSON Pointer does not resolve inside a schema document."""

    def __init__(self, pointer: str, cause: Optional[Exception] = None) -> None:
        self.pointer = pointer
        self.cause = cause
        message = f"JSON pointer {pointer!r} does not resolve"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)


class SchemaLoader:
    """
    Fetches and parses schema documents.

    Attributes:
        content_cache (Dict[str, str]): Raw document content by location.
        timeout (int): Timeout in seconds for HTTP requests.
    """

    def __init__(self, timeout: int = 30) -> None:
        self.content_cache: Dict[str, str] = {}
        self.timeout = timeout

    def fetch_content(self, url: str) -> str:
        """
        Fetch content from a URL or file path.

        Args:
            url: The URL or file path to fetch content from.

        Returns:
            The content as a string.

        Raises:
            requests.RequestException: If there is an error fetching from HTTP/HTTPS.
            FileNotFoundError: If the file does not exist.
            ValueError: If the URL scheme is not supported.
        """
        if url in self.content_cache:
            return self.content_cache[url]

        parsed_url = urlparse(url)

        if parsed_url.scheme in ['http', 'https']:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            content = response.text
        elif parsed_url.scheme == 'file' or not parsed_url.scheme or (os.name == 'nt' and len(parsed_url.scheme) == 1):
            # a single letter scheme is a Windows drive
            if parsed_url.scheme == 'file':
                file_path = unquote(parsed_url.path)
                if os.name == 'nt' and file_path.startswith('/'):
                    file_path = file_path[1:]
            else:
                file_path = url
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        else:
            raise ValueError(f"Unsupported URL scheme: {parsed_url.scheme}")

        self.content_cache[url] = content
        return content

    @staticmethod
    def parse_document(content: str) -> Any:
        """
        Parse a document as JSON, falling back to YAML.

        Raises:
            ValueError: If the content is neither JSON nor YAML.
        """
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            try:
                return yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise ValueError(f"Failed to parse schema document as JSON or YAML: {e}") from e

    @staticmethod
    def split_location(location: str) -> Tuple[str, str]:
        """Split a location into the document part and its fragment."""
        document, _, fragment = location.partition('#')
        return document, unquote(fragment)

    def load(self, location: str, pointer: Optional[str] = None) -> Any:
        """
        Load the schema at a location.

        Args:
            location: Path or URL of the document, optionally with a ``#/json/pointer`` fragment.
            pointer: JSON Pointer overriding the fragment.

        Returns:
            The selected schema.

        Raises:
            SchemaPointerError: If the pointer does not resolve.
        """
        if not location:
            raise ValueError('Schema location is required')
        document_location, fragment = self.split_location(location)
        document = self.parse_document(self.fetch_content(document_location))
        pointer = pointer if pointer is not None else fragment
        if not pointer:
            return document
        try:
            return jsonpointer.resolve_pointer(document, pointer)
        except JsonPointerException as e:
            raise SchemaPointerError(pointer, e) from e


def load_schema(location: str, pointer: Optional[str] = None) -> Any:
    """Load a schema from a path or URL, optionally selecting it with a JSON Pointer."""
    return SchemaLoader().load(location, pointer)
