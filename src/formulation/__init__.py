"""Parametric analysis formulation package.

This package provides:
- The Formulation that assembles an analysis and its documents
- Seed model and weather file references
- Workflow steps, variables and their distributions
- Algorithm settings
- JSON document persistence
"""

from formulation.abstractions import (
    SeedModel,
    WeatherFile,
    random_uuid,
)
from formulation.algorithm import AlgorithmAttributes
from formulation.analysis import Formulation
from formulation.config import DocumentConfig
from formulation.document_io import read_document, write_document
from formulation.naming import snake_case
from formulation.versioning import UnsupportedVersionError
from formulation.workflow import Distribution, Variable, Workflow, WorkflowStep

__all__ = [
    # Core
    "Formulation",
    # References
    "SeedModel",
    "WeatherFile",
    "random_uuid",
    # Collaborators
    "AlgorithmAttributes",
    "Workflow",
    "WorkflowStep",
    "Variable",
    "Distribution",
    # Persistence
    "DocumentConfig",
    "read_document",
    "write_document",
    # Helpers
    "snake_case",
    "UnsupportedVersionError",
]
