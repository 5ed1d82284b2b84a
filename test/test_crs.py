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

import json

import pyproj
import pytest

from glorich.errors import ConfigError, NotFoundError
from glorich.hydro import crs


def test_default_registry_maps_wgs84_spellings_to_4326():
    for label in ["WGS1984", "WGS 1984", "WGS84"]:
        assert crs.DEFAULT_CRS_MAP[label] == "4326"


def test_default_registry_covers_original_systems():
    expected = {
        "NA1983": "4269",
        "ERTS_UTM, Zone 33N, 7 digits": "25833",
        "British National Grid": "27700",
        "NatGrid NZ": "27200",
        "National Grid Australia": "5825",
        crs.GAUSS_KRUGER_LATIN1: "5678",
    }
    for label, code in expected.items():
        assert crs.DEFAULT_CRS_MAP[label] == code


def test_lookup_is_exact_match():
    assert crs.lookup_epsg("WGS84").epsg == "4326"
    missing = crs.lookup_epsg("wgs84")
    assert not missing.matched
    assert missing.crs_string is None
    assert crs.lookup_epsg("British National Grid").crs_string == "EPSG:27700"


def test_normalize_epsg_accepts_prefixed_and_integer_codes():
    assert crs.normalize_epsg("EPSG:27700") == "27700"
    assert crs.normalize_epsg(4326) == "4326"
    with pytest.raises(ConfigError):
        crs.normalize_epsg("WGS84")


def test_crs_from_epsg_returns_pyproj_crs():
    result = crs.crs_from_epsg("27700")
    assert isinstance(result, pyproj.CRS)
    assert result.to_epsg() == 27700


def test_crs_from_epsg_rejects_unknown_code():
    with pytest.raises(ConfigError, match="999999"):
        crs.crs_from_epsg("999999")


def test_extend_crs_map_overrides_in_place_and_appends():
    base = {"A": "4326", "B": "27700"}
    extended = crs.extend_crs_map(base, {"C": "EPSG:4269", "A": 4258})
    assert list(extended) == ["A", "B", "C"]
    assert extended == {"A": "4258", "B": "27700", "C": "4269"}
    assert base == {"A": "4326", "B": "27700"}


def test_load_crs_map_from_json(tmp_path):
    path = tmp_path / "registry.json"
    path.write_text(json.dumps({"Mars2020": "4326", "BNG": "EPSG:27700"}), encoding="utf-8")
    loaded = crs.load_crs_map(path)
    assert loaded == {"Mars2020": "4326", "BNG": "27700"}


def test_load_crs_map_from_csv_extending_default(tmp_path):
    path = tmp_path / "registry.csv"
    path.write_text("label,epsg\nLambert 93,2154\n", encoding="utf-8")
    loaded = crs.load_crs_map(path, extend_default=True)
    assert list(loaded)[-1] == "Lambert 93"
    assert loaded["Lambert 93"] == "2154"
    assert loaded["WGS84"] == "4326"


def test_load_crs_map_csv_requires_columns(tmp_path):
    path = tmp_path / "registry.csv"
    path.write_text("name,code\nX,4326\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        crs.load_crs_map(path)


def test_load_crs_map_missing_file(tmp_path):
    with pytest.raises(NotFoundError):
        crs.load_crs_map(tmp_path / "nope.json")
