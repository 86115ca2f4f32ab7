"""Document format version checks shared by every document producer."""

from typing import Iterable

from formulation.constants import SUPPORTED_VERSIONS


class UnsupportedVersionError(ValueError):
    """Raised when a document is requested in a format version that is not defined.

    Attributes:
        version: The requested format version
        component: Name of the type asked to produce the document
        operation: Name of the document operation that was called
    """

    def __init__(self, version: object, component: str, operation: str) -> None:
        self.version = version
        self.component = component
        self.operation = operation
        super().__init__(
            f"Version {version} not defined for {component} and {operation}"
        )


def require_version(
    version: object,
    component: str,
    operation: str,
    supported: Iterable[int] = SUPPORTED_VERSIONS,
) -> None:
    """Fail loudly unless ``version`` is one of the supported format versions.

    Args:
        version: Requested format version
        component: Type name to report in the error
        operation: Operation name to report in the error
        supported: Versions the caller knows how to produce

    Raises:
        UnsupportedVersionError: If the version is not supported
    """
    # bool is an int subclass; True must not pass for version 1
    if isinstance(version, bool) or version not in tuple(supported):
        raise UnsupportedVersionError(version, component, operation)
