"""Utility functions for loading class definitions.

This module provides functions for loading JSON definitions from files and
URLs with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class DefinitionIOError(Exception):
    """Raised when a definition cannot be read or generated code cannot be written."""

    pass


def is_url(source: str | Path) -> bool:
    """Check whether a definition source is an http(s) URL."""
    return isinstance(source, str) and urlparse(source).scheme in ("http", "https")


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The parsed JSON data.

    Raises:
        DefinitionIOError: If the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        raise DefinitionIOError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        # Might still be valid JSON
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded JSON from %s", file_path)
        return data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e, exc_info=True)
        raise DefinitionIOError(f"Invalid JSON in file {file_path}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error("File %s is not UTF-8 encoded: %s", file_path, e)
        raise DefinitionIOError(f"File {file_path} is not UTF-8 encoded: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e, exc_info=True)
        raise DefinitionIOError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Any:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        The parsed JSON data.

    Raises:
        DefinitionIOError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Attempting to load JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise DefinitionIOError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        data = response.json()
        logger.info("Loaded JSON from %s", url)
        return data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise DefinitionIOError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise DefinitionIOError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise DefinitionIOError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e, exc_info=True)
        raise DefinitionIOError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error("Invalid JSON response from URL %s: %s", url, e, exc_info=True)
        raise DefinitionIOError(f"Invalid JSON response from URL {url}: {e}") from e


def load_definition_data(source: str | Path, timeout: int = 30) -> dict:
    """Load the JSON object of a class definition from a file or URL.

    Args:
        source: File path or http(s) URL.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        The definition as a dict.

    Raises:
        DefinitionIOError: If loading fails or the JSON is not an object.
    """
    if is_url(source):
        data = load_json_from_url(source, timeout)
    else:
        data = load_json_from_file(source)

    if not isinstance(data, dict):
        raise DefinitionIOError(
            f"Definition in {source} must be a JSON object, got {type(data).__name__}"
        )
    return data


def load_definition(source: str | Path, timeout: int = 30):
    """Load and validate a class definition.

    Args:
        source: File path or http(s) URL.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        The validated ClassDefinition.

    Raises:
        DefinitionIOError: If the definition cannot be read.
        SchemaError: If the definition is invalid.
    """
    from .codegen.core.schema import convert_definition

    return convert_definition(load_definition_data(source, timeout), source=str(source))
