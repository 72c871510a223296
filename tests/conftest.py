import sys
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from connector_dungeon.generators.primitives.catalog import build_default_catalog  # noqa: E402
from connector_dungeon.pipeline.settings import GeneratorSettings  # noqa: E402


@pytest.fixture
def catalog():
    return build_default_catalog()


@pytest.fixture
def settings():
    return GeneratorSettings(seed=1234)


@pytest.fixture
def unit_square():
    return [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
