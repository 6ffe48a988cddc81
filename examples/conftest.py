"""Fixtures for the runnable examples.

Each example directory holds an ``app.py`` script and a test module. The
``example_app`` fixture runs the script and exposes its globals as
attributes, so tests read rendered output the script produced.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Run the app.py beside the requesting test and return its globals."""
    script = Path(request.path).with_name("app.py")
    namespace = runpy.run_path(str(script), run_name=f"example_{script.parent.name}")
    return SimpleNamespace(**namespace)
