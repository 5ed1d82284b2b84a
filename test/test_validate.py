# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2026 Darkmine Pty Ltd

# This file is part of glorich.

# glorich is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# glorich is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with glorich.  If not, see <https://www.gnu.org/licenses/>.

import pandas as pd
import pytest

from glorich.hydro import validate


def test_report_missing_columns():
    df = pd.DataFrame({"STAT_ID": [1], "Latitude": [1.0]})
    assert validate.report_missing_columns(df, ["STAT_ID", "Latitude", "Longitude"]) == ["Longitude"]


def test_blank_mask_flags_missing_and_whitespace():
    mask = validate.blank_mask(pd.Series(["a", "", "  ", None, 1.5]))
    assert mask.tolist() == [False, True, True, True, False]


def test_find_duplicate_stations():
    df = pd.DataFrame({"STAT_ID": [1, 2, 2, 3, 3, 3]})
    issues = validate.find_duplicate_stations(df)
    assert {issue["stat_id"]: issue["count"] for issue in issues} == {2: 2, 3: 3}
    assert all(issue["type"] == "duplicate_station" for issue in issues)


def test_find_incomplete_coordinates():
    df = pd.DataFrame({
        "STAT_ID": [1, 2, 3],
        "Latitude": [39.7, None, "north"],
        "Longitude": [-105.0, -105.1, -105.2],
        "CoordinateSystem": ["WGS84", "WGS84", ""],
    })
    issues = validate.find_incomplete_coordinates(df)
    types = sorted((issue["stat_id"], issue["type"]) for issue in issues)
    assert types == [
        (2, "missing_latitude"),
        (3, "missing_coordinatesystem"),
        (3, "non_numeric_latitude"),
    ]


def test_find_incomplete_coordinates_requires_columns():
    with pytest.raises(ValueError):
        validate.find_incomplete_coordinates(pd.DataFrame({"STAT_ID": [1]}))


def test_summarize_crs_labels():
    df = pd.DataFrame({"CoordinateSystem": ["WGS84", "Mars2020", "WGS84", "", None]})
    summary = validate.summarize_crs_labels(df).set_index("label")
    assert summary.loc["WGS84", "rows"] == 2
    assert bool(summary.loc["WGS84", "registered"])
    assert summary.loc["WGS84", "epsg"] == "4326"
    assert not bool(summary.loc["Mars2020", "registered"])
    assert len(summary) == 2
