from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep logs and stores out of the real home directory.
os.environ.setdefault("STATIONFLOW_HOME", tempfile.mkdtemp(prefix="stationflow-tests-"))

from stationflow.core.logger import get_logger  # noqa: E402

get_logger()


@pytest.fixture()
def div_mapping() -> Dict[str, List[str]]:
    return {"Div1": ["Alpha", "Beta"], "Div2": ["Gamma"]}


@pytest.fixture()
def station_records() -> List[Dict[str, object]]:
    return [{"STATION": value} for value in ["Alpha", "beta", "Alpha", "Gamma"]]
