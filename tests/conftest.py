"""
Shared fixtures: a two-iteration outfile whose timings add up to 5 seconds.
"""
import pytest

import config as cfg
import outfile_utils.logging as logging

SAMPLE_OUTFILE = """\
Topology optimization solver
Mesh: 120 x 40 elements
Iteration: 1
Objective: 2.5
Eigenvalue 1: 0.1
Eigenvalue 2: 0.2
Volume constraint: 0.05
Preparing: 1 seconds 0 milliseconds
Solving: 2 seconds
Design change: 0.3
Iteration: 2
Objective: 2.0
Eigenvalue 1: 0.15
Volume constraint: 0.04
Preparing: 0 seconds 500 milliseconds
Solving: 1 seconds 500 milliseconds
Design change: 0.1
Finished after 2 iterations
"""


@pytest.fixture
def sample_lines():
    return SAMPLE_OUTFILE.splitlines()


@pytest.fixture
def sample_outfile(tmp_path):
    path = tmp_path / "run.out"
    path.write_text(SAMPLE_OUTFILE, encoding="utf-8")
    return path


@pytest.fixture
def restore_settings():
    saved = cfg.SETTINGS.as_dict()
    yield cfg.SETTINGS
    cfg.SETTINGS.update(**saved)
    logging.teardown()
