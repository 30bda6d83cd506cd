"""Utility functions for loading schemas and writing generated code.

This module provides the I/O around generation: fetching a schema document
from the Mammoth service, reading one from disk, and writing the generated
source file.
"""

import json
from pathlib import Path
from typing import Any

import requests

from .codegen.core.schema import SchemaError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://mammoth.trafi.com"
DEFAULT_TIMEOUT = 30


class SchemaFetchError(Exception):
    """Raised when a schema document cannot be obtained."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        connectivity: bool = False,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.connectivity = connectivity


class OutputError(Exception):
    """Raised when generated code cannot be written."""

    pass


def schema_url(project: str, version: str = "", base_url: str = DEFAULT_BASE_URL) -> str:
    """URL of a schema version; an empty version means the latest one."""
    return f"{base_url.rstrip('/')}/{project}/schema/{version}"


def fetch_schema(
    project: str,
    version: str = "",
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """Fetch a schema document from the Mammoth service.

    Args:
        project: Mammoth project id, e.g. ``whitelabel``.
        version: Schema version; empty for the latest.
        base_url: Service root URL.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON document.

    Raises:
        SchemaFetchError: If the request fails, the service answers with a
            non-200 status, or the body is not JSON.
    """
    url = schema_url(project, version, base_url)
    logger.debug("Fetching schema from %s", url)

    try:
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise SchemaFetchError(
            f"Request timeout for URL: {url}", connectivity=True
        ) from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise SchemaFetchError(
            f"Connection error for URL: {url}", connectivity=True
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise SchemaFetchError(f"Request error for URL {url}: {e}") from e

    if response.status_code != 200:
        logger.error("HTTP error %s for URL: %s", response.status_code, url)
        raise SchemaFetchError(
            f"Schema request failed with status {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise SchemaFetchError(f"Invalid JSON response from URL {url}: {e}") from e

    logger.info("Fetched schema for %s from %s", project, url)
    return data


def load_schema_file(file_path: str | Path) -> Any:
    """Load a schema document from a local JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist.
        SchemaError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Loading schema from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise SchemaError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise SchemaError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded schema from %s", file_path)
    return data


def write_generated_code(code: str, output_path: str | Path, filename: str) -> Path:
    """Write generated code into an existing directory.

    Args:
        code: Generated source text.
        output_path: Target directory; it is not created.
        filename: Name of the file to write.

    Returns:
        Path of the written file.

    Raises:
        OutputError: If the directory is missing or the write fails.
    """
    directory = Path(output_path)
    if not directory.is_dir():
        raise OutputError(f"Output directory does not exist: {directory}")

    target = directory / filename
    try:
        target.write_text(code, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", target, e)
        raise OutputError(f"Failed to write {target}: {e}") from e

    logger.info("Wrote %d characters to %s", len(code), target)
    return target
