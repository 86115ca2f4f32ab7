"""Pytest fixtures for analysis formulation tests."""

import itertools
import shutil
import tempfile

import numpy as np
import pytest

# Add src directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulation.analysis import Formulation
from formulation.workflow import Distribution


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def uuid_generator():
    """Deterministic identifier source: uuid-0001, uuid-0002, ..."""
    counter = itertools.count(1)
    return lambda: f"uuid-{next(counter):04d}"


@pytest.fixture
def formulation():
    """Create an empty formulation with random identifiers."""
    return Formulation.create("My Analysis")


@pytest.fixture
def stub_formulation(uuid_generator):
    """Create an empty formulation with deterministic identifiers."""
    return Formulation.create("My Analysis", uuid_generator=uuid_generator)


@pytest.fixture
def populated_formulation(stub_formulation):
    """Create a formulation with seed, weather, outputs and a two-step workflow."""
    f = stub_formulation
    f.set_analysis_type("lhs")
    f.set_seed_model_path("seed/example.osm")
    f.set_weather_file_path("weather/example.epw")
    f.algorithm.set_attribute("number_of_samples", 10)
    f.algorithm.set_attribute("seed", np.int64(42))

    f.add_output({"name": "total_energy", "display_name": "Total Energy",
                  "units": "GJ", "objective_function": True,
                  "objective_function_index": 0})
    f.add_output({"name": "peak_demand", "units": "kW"})
    f.add_output({"name": "total_cost", "objective_function": True,
                  "objective_function_index": 1,
                  "objective_function_target": 1500.0})

    wwr_step = f.workflow.add_step("set_wwr", "Set Window to Wall Ratio")
    wwr_step.argument_value("wwr", 0.4)
    wwr_step.argument_value("sillheight", 30.0)
    wwr_step.make_variable("wwr", "Window to Wall Ratio",
                           Distribution("uniform", minimum=0.1, maximum=0.6))

    lights_step = f.workflow.add_step("reduce_lpd", "Reduce Lighting Power Density")
    lights_step.argument_value("lpd_reduction", 10.0)
    lights_step.argument_value("apply_to", "all")
    lights_step.make_variable("lpd_reduction", "LPD Reduction",
                              Distribution("normal", minimum=0.0, maximum=30.0,
                                           mean=10.0, standard_deviation=5.0,
                                           static_value=15.0))
    lights_step.make_variable("apply_to", "Apply To",
                              Distribution("discrete", values=("all", "office"),
                                           weights=(0.7, 0.3)))
    return f
