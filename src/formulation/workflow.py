"""Workflow steps and the variables that parameterize them.

A workflow is the ordered list of measures applied to the seed model. Each
step carries static argument values; an argument can be promoted to a
variable, which the algorithm samples from a distribution while the static
value is used for single-run data points.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from formulation.abstractions import UuidGenerator, random_uuid
from formulation.constants import (
    DEFAULT_MEASURE_TYPE,
    DISCRETE_WEIGHT_TOLERANCE,
    DISTRIBUTION_TYPES,
    DISTRIBUTIONS_REQUIRING_STD,
)
from formulation.versioning import require_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Distribution:
    """Description of how a variable is sampled.

    Attributes:
        type: One of 'uniform', 'triangle', 'normal', 'lognormal', 'discrete'
        minimum: Lower bound of the sampled range
        maximum: Upper bound of the sampled range
        mean: Mean (or mode, for triangle distributions)
        standard_deviation: Spread; required for normal and lognormal
        static_value: Value used when the variable is not sampled. When None,
            the step argument's current value is used instead.
        values: Candidate values of a discrete distribution
        weights: Probability of each discrete value; must sum to 1
    """

    type: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    mean: Optional[float] = None
    standard_deviation: Optional[float] = None
    static_value: Any = None
    values: Tuple[Any, ...] = field(default_factory=tuple)
    weights: Tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.type not in DISTRIBUTION_TYPES:
            raise ValueError(
                f"Invalid distribution type: {self.type}. "
                f"Use one of {sorted(DISTRIBUTION_TYPES)}"
            )

        # Use object.__setattr__ because frozen=True
        object.__setattr__(self, 'values', tuple(self.values))
        object.__setattr__(self, 'weights', tuple(self.weights))

        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(
                f"Distribution minimum {self.minimum} is greater than maximum {self.maximum}"
            )

        if self.type in DISTRIBUTIONS_REQUIRING_STD and self.standard_deviation is None:
            raise ValueError(f"A {self.type} distribution requires a standard_deviation")

        if self.type == 'discrete':
            self._validate_discrete()

    def _validate_discrete(self) -> None:
        if not self.values:
            raise ValueError("A discrete distribution requires values")
        if len(self.values) != len(self.weights):
            raise ValueError(
                f"Discrete distribution has {len(self.values)} values "
                f"but {len(self.weights)} weights"
            )
        total = float(np.sum(np.asarray(self.weights, dtype=float)))
        if not np.isclose(total, 1.0, rtol=0.0, atol=DISCRETE_WEIGHT_TOLERANCE):
            raise ValueError(f"Discrete weights must sum to 1, got {total}")


@dataclass
class Variable:
    """An argument of a workflow step promoted to a sampled variable.

    Attributes:
        uuid: Unique identifier; keys the variable in static data points
        version_uuid: Identifier of this revision of the variable
        argument_name: Name of the step argument the variable drives
        display_name: Human-readable name
        display_name_short: Abbreviated name for plots and tables
        variable_type: Kind of variable (e.g. 'variable', 'pivot')
        units: Units of the value, as a string
        static_value: Value used when the variable is not sampled
        distribution: Sampling description
    """

    uuid: str
    version_uuid: str
    argument_name: str
    display_name: str
    display_name_short: str
    variable_type: str
    units: str
    static_value: Any
    distribution: Distribution

    def to_document(self, version: int = 1) -> Dict[str, Any]:
        require_version(version, type(self).__name__, "to_document")
        return {
            'uuid': self.uuid,
            'version_uuid': self.version_uuid,
            'argument': self.argument_name,
            'display_name': self.display_name,
            'display_name_short': self.display_name_short,
            'variable_type': self.variable_type,
            'units': self.units,
            'static_value': self.static_value,
            'uncertainty_description': {
                'type': self.distribution.type,
                'minimum': self.distribution.minimum,
                'maximum': self.distribution.maximum,
                'mean': self.distribution.mean,
                'standard_deviation': self.distribution.standard_deviation,
                'values': list(self.distribution.values),
                'weights': list(self.distribution.weights),
            },
        }


class WorkflowStep:
    """One measure applied in a workflow, with its argument values and variables."""

    def __init__(
        self,
        name: str,
        display_name: Optional[str] = None,
        measure_directory: Optional[str] = None,
        measure_type: str = DEFAULT_MEASURE_TYPE,
        uuid_generator: UuidGenerator = random_uuid,
    ) -> None:
        if not name or not name.strip():
            raise ValueError("Workflow step name cannot be empty or whitespace")

        self.name = name
        self.display_name = display_name or name
        self.measure_directory = measure_directory
        self.measure_type = measure_type
        self._uuid_generator = uuid_generator
        self._arguments: Dict[str, Any] = {}
        self._variables: List[Variable] = []

    @property
    def arguments(self) -> Dict[str, Any]:
        """Return a copy of the argument values, in the order they were set."""
        return dict(self._arguments)

    @property
    def variables(self) -> List[Variable]:
        """Return the variables in creation order."""
        return list(self._variables)

    def argument_value(self, name: str, value: Any) -> None:
        """Set the static value of an argument."""
        self._arguments[name] = value

    def make_variable(
        self,
        argument_name: str,
        display_name: str,
        distribution: Distribution,
        variable_type: str = 'variable',
        display_name_short: Optional[str] = None,
        units: str = '',
    ) -> Variable:
        """Promote an argument to a variable.

        Args:
            argument_name: Argument to vary; must already have a value
            display_name: Human-readable variable name
            distribution: How the variable is sampled
            variable_type: Kind of variable
            display_name_short: Abbreviated name (defaults to display_name)
            units: Units of the value

        Returns:
            The new Variable

        Raises:
            ValueError: If the argument is unknown or already a variable
        """
        if argument_name not in self._arguments:
            raise ValueError(
                f"Argument {argument_name} is not defined on step {self.name}"
            )
        if any(v.argument_name == argument_name for v in self._variables):
            raise ValueError(
                f"Argument {argument_name} on step {self.name} is already a variable"
            )

        static_value = distribution.static_value
        if static_value is None:
            static_value = self._arguments[argument_name]

        variable = Variable(
            uuid=self._uuid_generator(),
            version_uuid=self._uuid_generator(),
            argument_name=argument_name,
            display_name=display_name,
            display_name_short=display_name_short or display_name,
            variable_type=variable_type,
            units=units,
            static_value=static_value,
            distribution=distribution,
        )
        self._variables.append(variable)
        logger.debug(f"Variable {variable.uuid} created for {self.name}.{argument_name}")
        return variable

    def to_document(self, version: int = 1, workflow_index: int = 0) -> Dict[str, Any]:
        require_version(version, type(self).__name__, "to_document")
        return {
            'name': self.name,
            'display_name': self.display_name,
            'measure_definition_directory': self.measure_directory,
            'measure_type': self.measure_type,
            'arguments': [
                {'name': name, 'value': value}
                for name, value in self._arguments.items()
            ],
            'variables': [v.to_document(version) for v in self._variables],
            'workflow_index': workflow_index,
        }


class Workflow:
    """Ordered list of workflow steps.

    Usage:
        workflow = Workflow()
        step = workflow.add_step('set_wwr', 'Set Window to Wall Ratio')
        step.argument_value('wwr', 0.4)
        step.make_variable('wwr', 'WWR', Distribution('uniform', 0.1, 0.6))
    """

    def __init__(self, uuid_generator: Optional[UuidGenerator] = None) -> None:
        self._uuid_generator = uuid_generator or random_uuid
        self._items: List[WorkflowStep] = []

    @property
    def items(self) -> List[WorkflowStep]:
        """Return the steps in workflow order."""
        return list(self._items)

    def __iter__(self) -> Iterator[WorkflowStep]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add_step(
        self,
        name: str,
        display_name: Optional[str] = None,
        measure_directory: Optional[str] = None,
        measure_type: str = DEFAULT_MEASURE_TYPE,
    ) -> WorkflowStep:
        """Append a new step to the end of the workflow.

        Raises:
            ValueError: If a step with the same name already exists
        """
        if self.find_step(name) is not None:
            raise ValueError(f"Workflow already has a step named {name}")

        step = WorkflowStep(
            name,
            display_name=display_name,
            measure_directory=measure_directory,
            measure_type=measure_type,
            uuid_generator=self._uuid_generator,
        )
        self._items.append(step)
        logger.debug(f"Added workflow step {name} at index {len(self._items) - 1}")
        return step

    def find_step(self, name: str) -> Optional[WorkflowStep]:
        for step in self._items:
            if step.name == name:
                return step
        return None

    def clear(self) -> None:
        """Remove all steps."""
        self._items.clear()

    def to_document(self, version: int = 1) -> List[Dict[str, Any]]:
        """Return the workflow sub-document: one entry per step, in order.

        Raises:
            UnsupportedVersionError: If version is not 1
        """
        require_version(version, type(self).__name__, "to_document")
        return [
            step.to_document(version, workflow_index=index)
            for index, step in enumerate(self._items)
        ]
