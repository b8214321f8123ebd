"""
Shared pytest fixtures for scalemind tests.
"""

import logging
from pathlib import Path

import pytest

from scalemind import EngineSettings, SimulationEngine


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Root test_output directory, created once per session. Chart artefacts
    written here persist after the run for manual inspection.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Per-test output directory: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def engine() -> SimulationEngine:
    """Engine with default model parameters and a 1s tick."""
    eng = SimulationEngine(settings=EngineSettings(tick_interval_s=1.0, history_capacity=30))
    yield eng
    eng.dispose()


@pytest.fixture(autouse=True)
def reset_scalemind_logging():
    """Strip handlers added by a test and restore the library default (NullHandler only)."""
    logger = logging.getLogger("scalemind")

    def _reset() -> None:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
