"""Value types owned by a formulation.

Defines the simple references a formulation holds:
- SeedModel: the base simulation model the analysis starts from
- WeatherFile: the weather input (a file, or a folder searched by name)
- OutputDeclaration: one output of interest, as stored by add_output
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional
import uuid

from formulation.constants import DEFAULT_OUTPUT_FIELDS

# Produces the identifier strings used for data points and variables
UuidGenerator = Callable[[], str]

# Read-only view of an output's fields; the stored dict is never handed out
OutputDeclaration = Mapping[str, Any]


def random_uuid() -> str:
    """Return a new random (version 4) UUID in canonical string form."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SeedModel:
    """Reference to the seed model file.

    Attributes:
        path: Path to the seed model, ideally relative. None until set.
    """

    path: Optional[str] = None


@dataclass(frozen=True)
class WeatherFile:
    """Reference to the weather file.

    If the path is a folder, the measures look up the weather file by name
    inside that folder.

    Attributes:
        path: Path to the weather file or folder. None until set.
    """

    path: Optional[str] = None


def build_output_declaration(
    fields: Optional[Mapping[str, Any]] = None,
    **extra_fields: Any,
) -> OutputDeclaration:
    """Overlay caller fields on the output defaults.

    Keys from ``fields`` and then ``extra_fields`` replace the defaults. Keys
    the defaults do not know about are kept as given.

    Args:
        fields: Output fields (name, display_name, units, objective_function, ...)
        **extra_fields: Additional fields, applied after ``fields``

    Returns:
        Read-only mapping of the merged fields
    """
    merged: Dict[str, Any] = dict(DEFAULT_OUTPUT_FIELDS)
    if fields:
        merged.update(fields)
    merged.update(extra_fields)
    return MappingProxyType(merged)
