"""JSON persistence for analysis and data point documents.

Provides normalization of in-memory documents to JSON-native values and
scoped, overwrite-in-place writes of pretty-printed JSON.
"""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np

from formulation.config import DocumentConfig

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def normalize_document(document: Any) -> Any:
    """Recursively convert a document to JSON-native values.

    Handles:
    - Dataclasses (serialized field by field)
    - Mappings, including read-only views (converted to dicts)
    - Tuples and lists (converted to lists)
    - numpy scalars and arrays (converted to Python numbers and lists)
    - Primitive types (passed through)

    Args:
        document: Document fragment to normalize

    Returns:
        Equivalent structure containing only dict, list, str, int, float,
        bool and None
    """
    if dataclasses.is_dataclass(document) and not isinstance(document, type):
        return {
            field.name: normalize_document(getattr(document, field.name))
            for field in dataclasses.fields(document)
        }

    elif isinstance(document, Mapping):
        return {key: normalize_document(value) for key, value in document.items()}

    elif isinstance(document, (list, tuple)):
        return [normalize_document(item) for item in document]

    elif isinstance(document, np.ndarray):
        return normalize_document(document.tolist())

    elif isinstance(document, np.generic):
        return document.item()

    else:
        return document


def render_document(
    document: Mapping[str, Any],
    config: Optional[DocumentConfig] = None,
) -> str:
    """Render a document as pretty-printed JSON text."""
    config = config or DocumentConfig()
    return json.dumps(
        normalize_document(document),
        indent=config.indent,
        ensure_ascii=config.ensure_ascii,
        sort_keys=config.sort_keys,
    )


def write_document(
    path: PathLike,
    document: Mapping[str, Any],
    config: Optional[DocumentConfig] = None,
) -> Path:
    """Write a document to ``path``, replacing any existing file.

    The JSON text is rendered before the file is opened, so a document that
    cannot be serialized leaves an existing file untouched.

    Args:
        path: Destination file; created if absent, truncated if present
        document: Document to serialize
        config: Formatting options (defaults to DocumentConfig())

    Returns:
        The destination path

    Raises:
        OSError: If the file cannot be opened or written
        TypeError: If the document holds values JSON cannot represent
    """
    config = config or DocumentConfig()
    destination = Path(path)
    text = render_document(document, config)

    with open(destination, "w", encoding=config.encoding) as f:
        f.write(text)

    logger.info(f"Document written to {destination}")
    return destination


def read_document(path: PathLike, encoding: str = "utf-8") -> Dict[str, Any]:
    """Read a JSON document back from disk.

    Raises:
        FileNotFoundError: If the document has not been written
    """
    with open(path, "r", encoding=encoding) as f:
        return json.load(f)
