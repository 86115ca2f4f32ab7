"""Tests for workflow steps, variables and distributions."""

import pytest
from dataclasses import FrozenInstanceError

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulation.versioning import UnsupportedVersionError
from formulation.workflow import Distribution, Workflow, WorkflowStep


class TestDistribution:
    """Tests for Distribution validation."""

    def test_uniform(self):
        """A bounded uniform distribution is valid."""
        dist = Distribution("uniform", minimum=0.0, maximum=1.0)
        assert dist.type == "uniform"
        assert dist.values == ()

    def test_invalid_type(self):
        """Unknown distribution types are rejected."""
        with pytest.raises(ValueError, match="Invalid distribution type"):
            Distribution("poisson")

    def test_minimum_above_maximum(self):
        """The lower bound cannot exceed the upper bound."""
        with pytest.raises(ValueError):
            Distribution("uniform", minimum=2.0, maximum=1.0)

    @pytest.mark.parametrize("kind", ["normal", "lognormal"])
    def test_standard_deviation_required(self, kind):
        """Normal and lognormal distributions need a standard deviation."""
        with pytest.raises(ValueError, match="standard_deviation"):
            Distribution(kind, mean=1.0)

    def test_discrete_lists_become_tuples(self):
        """Discrete values and weights are stored as tuples."""
        dist = Distribution("discrete", values=[1, 2, 3], weights=[0.2, 0.3, 0.5])
        assert dist.values == (1, 2, 3)
        assert dist.weights == (0.2, 0.3, 0.5)

    def test_discrete_weights_tolerance(self):
        """Weights that sum to 1 up to rounding are accepted."""
        Distribution("discrete", values=("a", "b", "c"), weights=(0.1, 0.2, 0.7))

    def test_discrete_weights_must_sum_to_one(self):
        """Weights that do not sum to 1 are rejected."""
        with pytest.raises(ValueError, match="sum to 1"):
            Distribution("discrete", values=(1, 2), weights=(0.5, 0.6))

    def test_discrete_length_mismatch(self):
        """Each discrete value needs exactly one weight."""
        with pytest.raises(ValueError):
            Distribution("discrete", values=(1, 2), weights=(1.0,))

    def test_discrete_requires_values(self):
        """A discrete distribution without values is rejected."""
        with pytest.raises(ValueError):
            Distribution("discrete")

    def test_frozen(self):
        """Distributions cannot be modified after creation."""
        dist = Distribution("uniform")
        with pytest.raises(FrozenInstanceError):
            dist.minimum = 1.0


class TestWorkflowStep:
    """Tests for WorkflowStep arguments and variables."""

    def test_empty_name_fails(self):
        """Steps need a name."""
        with pytest.raises(ValueError):
            WorkflowStep("  ")

    def test_display_name_defaults_to_name(self):
        """Without a display name the step name is used."""
        assert WorkflowStep("set_wwr").display_name == "set_wwr"

    def test_argument_values_in_order(self):
        """Arguments keep the order in which they were first set."""
        step = WorkflowStep("set_wwr")
        step.argument_value("wwr", 0.4)
        step.argument_value("sillheight", 30.0)
        step.argument_value("wwr", 0.5)
        assert step.arguments == {"wwr": 0.5, "sillheight": 30.0}

    def test_variable_uses_argument_value(self, uuid_generator):
        """The static value defaults to the argument's current value."""
        step = WorkflowStep("set_wwr", uuid_generator=uuid_generator)
        step.argument_value("wwr", 0.4)
        variable = step.make_variable("wwr", "WWR", Distribution("uniform", 0.1, 0.6))
        assert variable.static_value == 0.4
        assert variable.uuid == "uuid-0001"
        assert variable.version_uuid == "uuid-0002"
        assert variable.display_name_short == "WWR"

    def test_distribution_static_value_wins(self):
        """A static value on the distribution overrides the argument value."""
        step = WorkflowStep("set_wwr")
        step.argument_value("wwr", 0.4)
        variable = step.make_variable(
            "wwr", "WWR", Distribution("uniform", 0.1, 0.6, static_value=0.3)
        )
        assert variable.static_value == 0.3

    def test_unknown_argument_fails(self):
        """Only existing arguments can become variables."""
        step = WorkflowStep("set_wwr")
        with pytest.raises(ValueError, match="not defined"):
            step.make_variable("wwr", "WWR", Distribution("uniform"))

    def test_argument_made_variable_twice_fails(self):
        """An argument can back at most one variable."""
        step = WorkflowStep("set_wwr")
        step.argument_value("wwr", 0.4)
        step.make_variable("wwr", "WWR", Distribution("uniform"))
        with pytest.raises(ValueError, match="already a variable"):
            step.make_variable("wwr", "WWR again", Distribution("uniform"))

    def test_variables_returned_as_copy(self):
        """Callers cannot append to the step's variables through the property."""
        step = WorkflowStep("set_wwr")
        step.variables.append("bogus")
        assert step.variables == []


class TestWorkflow:
    """Tests for Workflow ordering and documents."""

    def test_steps_in_order(self):
        """Steps are kept in the order they were added."""
        workflow = Workflow()
        workflow.add_step("a")
        workflow.add_step("b")
        assert [s.name for s in workflow.items] == ["a", "b"]
        assert len(workflow) == 2
        assert [s.name for s in workflow] == ["a", "b"]

    def test_duplicate_step_fails(self):
        """Step names are unique within a workflow."""
        workflow = Workflow()
        workflow.add_step("a")
        with pytest.raises(ValueError):
            workflow.add_step("a")

    def test_find_and_clear(self):
        """Steps can be looked up by name and removed together."""
        workflow = Workflow()
        step = workflow.add_step("a")
        assert workflow.find_step("a") is step
        assert workflow.find_step("missing") is None
        workflow.clear()
        assert workflow.items == []

    def test_document(self, populated_formulation):
        """Each step document carries its index, arguments and variables."""
        document = populated_formulation.workflow.to_document(1)
        assert [d["workflow_index"] for d in document] == [0, 1]

        first = document[0]
        assert first["name"] == "set_wwr"
        assert first["display_name"] == "Set Window to Wall Ratio"
        assert first["measure_type"] == "ModelMeasure"
        assert first["arguments"] == [
            {"name": "wwr", "value": 0.4},
            {"name": "sillheight", "value": 30.0},
        ]
        variable = first["variables"][0]
        assert variable["uuid"] == "uuid-0001"
        assert variable["argument"] == "wwr"
        assert variable["static_value"] == 0.4
        assert variable["uncertainty_description"]["type"] == "uniform"
        assert variable["uncertainty_description"]["maximum"] == 0.6

        second = document[1]
        assert [v["argument"] for v in second["variables"]] == ["lpd_reduction", "apply_to"]
        assert second["variables"][1]["uncertainty_description"]["weights"] == [0.7, 0.3]

    def test_unsupported_version(self):
        """Only version 1 workflow documents exist."""
        with pytest.raises(UnsupportedVersionError, match="Workflow"):
            Workflow().to_document(2)
