"""Algorithm settings for an analysis problem."""

import copy
import logging
from typing import Any, Dict, Mapping, Optional

from formulation.versioning import require_version

logger = logging.getLogger(__name__)


class AlgorithmAttributes:
    """Ordered settings of the sampling or optimization algorithm.

    Attribute names are free-form (e.g. 'number_of_samples', 'seed',
    'max_queued_jobs'); the execution engine decides which ones it reads.

    Usage:
        algorithm = AlgorithmAttributes()
        algorithm.set_attribute('number_of_samples', 100)
        algorithm.to_document(1)  # {'number_of_samples': 100}
    """

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        self._attributes: Dict[str, Any] = dict(attributes or {})

    @property
    def attributes(self) -> Dict[str, Any]:
        """Return a copy of the current settings."""
        return dict(self._attributes)

    def set_attribute(self, name: str, value: Any) -> None:
        """Set (or replace) one setting."""
        self._attributes[name] = value
        logger.debug(f"Algorithm attribute {name} = {value!r}")

    def get(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)

    def to_document(self, version: int = 1) -> Dict[str, Any]:
        """Return the algorithm sub-document.

        The result is a deep copy, so callers may add keys (such as the
        objective function list) without touching the stored settings.

        Raises:
            UnsupportedVersionError: If version is not 1
        """
        require_version(version, type(self).__name__, "to_document")
        return copy.deepcopy(self._attributes)
