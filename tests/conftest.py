import matplotlib

matplotlib.use("Agg")

import pytest

from core.process import ProcessSet


@pytest.fixture
def reference_processes():
    return ProcessSet().snapshot()


@pytest.fixture
def process_set():
    return ProcessSet()
