"""Formulation of a parametric analysis.

The formulation owns the seed model, weather file, workflow, algorithm and
declared outputs of one analysis, and turns them into the versioned analysis
document consumed by the execution engine. It also derives the static data
point document used for single runs.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from formulation.abstractions import (
    OutputDeclaration,
    SeedModel,
    UuidGenerator,
    WeatherFile,
    build_output_declaration,
    random_uuid,
)
from formulation.algorithm import AlgorithmAttributes
from formulation.config import DocumentConfig
from formulation.constants import FILE_FORMAT_VERSION, STATIC_DATA_POINT_STATUS
from formulation.document_io import normalize_document, write_document
from formulation.naming import snake_case
from formulation.versioning import require_version
from formulation.workflow import Workflow

logger = logging.getLogger(__name__)


class Formulation:
    """Definition of one parametric analysis.

    Usage:
        formulation = Formulation.create('My Analysis')
        formulation.set_seed_model_path('seed/example.osm')
        formulation.set_weather_file_path('weather/example.epw')
        formulation.add_output({'name': 'total_energy', 'objective_function': True})
        formulation.save('analysis.json')

    A formulation is not safe for concurrent mutation; callers sharing one
    across threads must hold their own lock.
    """

    def __init__(
        self,
        display_name: str,
        uuid_generator: Optional[UuidGenerator] = None,
        config: Optional[DocumentConfig] = None,
    ) -> None:
        """Create an empty formulation.

        Args:
            display_name: Display name of the analysis
            uuid_generator: Source of data point identifiers (default: random UUID4)
            config: JSON formatting options used when saving
        """
        self.display_name = display_name
        self._analysis_type: Optional[str] = None
        self._outputs: List[OutputDeclaration] = []
        self._uuid_generator = uuid_generator or random_uuid
        self._config = config or DocumentConfig()

        # Workflow is created on first access
        self._seed_model = SeedModel()
        self._weather_file = WeatherFile()
        self._workflow: Optional[Workflow] = None
        self.algorithm: Optional[AlgorithmAttributes] = AlgorithmAttributes()

    @classmethod
    def create(cls, display_name: str, **kwargs: Any) -> "Formulation":
        """Factory method equivalent to the constructor."""
        return cls(display_name, **kwargs)

    # ------------------------------------------------------------------ #
    #  Configuration
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        """Machine name of the analysis, derived from the display name."""
        return snake_case(self.display_name)

    @property
    def analysis_type(self) -> Optional[str]:
        """Name of the algorithm/analysis (e.g. 'rgenoud', 'lhs', 'single_run')."""
        return self._analysis_type

    @analysis_type.setter
    def analysis_type(self, name: Optional[str]) -> None:
        self._analysis_type = name

    def set_analysis_type(self, name: Optional[str]) -> None:
        """Store the analysis type verbatim; it is not checked against known algorithms."""
        self._analysis_type = name

    @property
    def seed_model(self) -> SeedModel:
        return self._seed_model

    def set_seed_model_path(self, path: str) -> None:
        """Point the analysis at a new seed model. The path should be relative."""
        self._seed_model = SeedModel(path=path)

    @property
    def weather_file(self) -> WeatherFile:
        return self._weather_file

    def set_weather_file_path(self, path: str) -> None:
        """Point the analysis at a new weather file or folder of weather files."""
        self._weather_file = WeatherFile(path=path)

    def get_or_create_workflow(self) -> Workflow:
        """Return the workflow, creating a default one on first access."""
        if self._workflow is None:
            self._workflow = Workflow(uuid_generator=self._uuid_generator)
        return self._workflow

    @property
    def workflow(self) -> Workflow:
        return self.get_or_create_workflow()

    @workflow.setter
    def workflow(self, workflow: Workflow) -> None:
        self._workflow = workflow

    # ------------------------------------------------------------------ #
    #  Outputs
    # ------------------------------------------------------------------ #

    @property
    def outputs(self) -> Tuple[OutputDeclaration, ...]:
        """Return the declared outputs in the order they were added."""
        return tuple(self._outputs)

    def add_output(
        self,
        fields: Optional[Mapping[str, Any]] = None,
        **extra_fields: Any,
    ) -> OutputDeclaration:
        """Add an output of interest to the formulation.

        Recognized fields are name, display_name, display_name_short,
        metadata_id, export, visualize, units, variable_type,
        objective_function, objective_function_index,
        objective_function_target, scaling_factor and
        objective_function_group. Unset fields take the defaults in
        DEFAULT_OUTPUT_FIELDS; unrecognized fields are stored as given.
        Output names are not required to be unique.

        Args:
            fields: Output fields
            **extra_fields: Further fields, applied after ``fields``

        Returns:
            The stored (read-only) output declaration
        """
        declaration = build_output_declaration(fields, **extra_fields)
        self._outputs.append(declaration)
        logger.debug(f"Added output {declaration.get('name')!r} to {self.display_name}")
        return declaration

    def objective_function_names(self) -> List[Any]:
        """Return the names of outputs flagged as objective functions, in order.

        Outputs without a name are skipped. Duplicate names are kept.
        """
        return [
            output.get('name')
            for output in self._outputs
            if output.get('objective_function') and output.get('name') is not None
        ]

    # ------------------------------------------------------------------ #
    #  Documents
    # ------------------------------------------------------------------ #

    def to_document(self, version: int = FILE_FORMAT_VERSION) -> Dict[str, Any]:
        """Return the analysis document.

        Args:
            version: Format version of the document; only 1 is defined

        Returns:
            Mapping with a single 'analysis' key

        Raises:
            UnsupportedVersionError: If version is not 1
        """
        require_version(version, type(self).__name__, "to_document")

        algorithm = None
        if self.algorithm is not None:
            algorithm = self.algorithm.to_document(version)

        document = normalize_document({
            'analysis': {
                'display_name': self.display_name,
                'name': self.name,
                'output_variables': [dict(output) for output in self._outputs],
                'problem': {
                    'analysis_type': self._analysis_type,
                    'algorithm': algorithm,
                    'workflow': self.get_or_create_workflow().to_document(version),
                },
                'seed': self._seed_model.path,
                'weather_file': self._weather_file.path,
                'file_format_version': version,
            }
        })

        # The algorithm optimizes the outputs flagged in output_variables
        algorithm_document = document['analysis']['problem']['algorithm']
        if algorithm_document is not None:
            algorithm_document['objective_functions'] = self.objective_function_names()

        return document

    def to_static_data_point_document(
        self,
        version: int = FILE_FORMAT_VERSION,
    ) -> Dict[str, Any]:
        """Return a data point with every workflow variable at its static value.

        Variables are keyed by uuid; if a uuid recurs, the later step or
        variable wins. Each call gets a new data point uuid.

        Raises:
            UnsupportedVersionError: If version is not 1
        """
        require_version(version, type(self).__name__, "to_static_data_point_document")

        static_values: Dict[str, Any] = {}
        for item in self.get_or_create_workflow().items:
            for variable in item.variables:
                static_values[variable.uuid] = variable.static_value

        return normalize_document({
            'data_point': {
                'set_variable_values': static_values,
                'status': STATIC_DATA_POINT_STATUS,
                'uuid': self._uuid_generator(),
            }
        })

    def save(self, path: Union[str, Path], version: int = FILE_FORMAT_VERSION) -> bool:
        """Save the analysis document as JSON, overwriting any existing file.

        Raises:
            UnsupportedVersionError: If version is not 1
            OSError: If the file cannot be written
        """
        write_document(path, self.to_document(version), self._config)
        return True

    def save_static_data_point(
        self,
        path: Union[str, Path],
        version: int = FILE_FORMAT_VERSION,
    ) -> bool:
        """Save the static data point document as JSON, overwriting any existing file.

        Raises:
            UnsupportedVersionError: If version is not 1
            OSError: If the file cannot be written
        """
        write_document(path, self.to_static_data_point_document(version), self._config)
        return True
