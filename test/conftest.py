# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2026 Darkmine Pty Ltd

from pathlib import Path
import sys

import pandas as pd
import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC_PATH = ROOT / "python" / "src"
DATA_DIR = Path(__file__).parent / "data"

if str(PYTHON_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC_PATH))


@pytest.fixture
def hydro_csv():
    return DATA_DIR / "hydrochemistry_sample.csv"


@pytest.fixture
def locations_csv():
    return DATA_DIR / "sampling_locations_sample.csv"


@pytest.fixture
def mixed_crs_table():
    """Three WGS84 stations followed by two British National Grid stations."""
    return pd.DataFrame({
        "STAT_ID": [1, 2, 3, 4, 5],
        "Ca": [42.1, 12.5, 88.0, 55.3, 61.7],
        "Country": ["USA", "USA", "USA", "UK", "UK"],
        "State": ["Colorado", "Colorado", "Utah", "England", "England"],
        "Latitude": [39.7392, 40.0150, 40.7608, 180000.0, 170000.0],
        "Longitude": [-104.9903, -105.2705, -111.8910, 530000.0, 450000.0],
        "CoordinateSystem": ["WGS84", "WGS84", "WGS84", "BNG", "BNG"],
    })
