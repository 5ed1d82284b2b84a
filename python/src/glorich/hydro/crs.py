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

"""Coordinate reference system registry for GLORICH sampling locations.

The ``CoordinateSystem`` column of ``sampling_locations.csv`` holds free-text
labels. The registry maps each label (exact string, case and encoding
sensitive) to an EPSG code. Several labels may share one code.

The default registry covers every label found in the database as of
08/06/2022. Users are encouraged to check the codes before relying on them,
and can load or extend the registry from a JSON or CSV file.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import pandas as pd
import pyproj
from pyproj.exceptions import CRSError

from glorich.errors import ConfigError, NotFoundError

logger = logging.getLogger(__name__)

GAUSS_KRUGER_LATIN1 = "Gauss\x96Kr\xfcger, Zone 4, DHDN"
GAUSS_KRUGER_UNICODE = "Gauss–Krüger, Zone 4, DHDN"

# Order matters: merged output is concatenated group by group in this order.
DEFAULT_CRS_MAP = {
    "NA1983": "4269",
    "WGS1984": "4326",
    "WGS 1984": "4326",
    "WGS84": "4326",
    # the same label as read with latin-1 and with cp1252 / utf-8
    GAUSS_KRUGER_LATIN1: "5678",
    GAUSS_KRUGER_UNICODE: "5678",
    "ERTS_UTM, Zone 33N, 7 digits": "25833",
    "British National Grid": "27700",
    "NatGrid NZ": "27200",
    "National Grid Australia": "5825",
}

# Shapefile names used for per-system exports of the default registry
DEFAULT_EXPORT_NAMES = {
    "NA1983": "NAD83",
    "WGS1984": "WGS84_1",
    "WGS 1984": "WGS84_2",
    "WGS84": "WGS84_3",
    GAUSS_KRUGER_LATIN1: "Gauss",
    GAUSS_KRUGER_UNICODE: "Gauss",
    "ERTS_UTM, Zone 33N, 7 digits": "ERTS",
    "British National Grid": "BNG",
    "NatGrid NZ": "NatGridNZ",
    "National Grid Australia": "NatGridAus",
}

REGISTRY_LABEL = "label"
REGISTRY_EPSG = "epsg"


@dataclass(frozen=True)
class CrsLookup:
    """Result of looking up a CoordinateSystem label in a registry."""

    label: str
    epsg: Optional[str] = None

    @property
    def matched(self):
        return self.epsg is not None

    @property
    def crs_string(self):
        if self.epsg is None:
            return None
        return f"EPSG:{self.epsg}"


def normalize_epsg(code):
    """Return an EPSG code as a string of digits.

    Accepts ints, digit strings and ``"EPSG:1234"`` style strings.
    """
    text = str(code).strip()
    if text.upper().startswith("EPSG:"):
        text = text[5:].strip()
    if not text.isdigit():
        raise ConfigError(f"EPSG code must contain only digits, got {code!r}")
    return text


def lookup_epsg(label, crs_map: Optional[Mapping[str, str]] = None) -> CrsLookup:
    crs_map = DEFAULT_CRS_MAP if crs_map is None else crs_map
    epsg = crs_map.get(label)
    if epsg is None:
        return CrsLookup(label=label)
    return CrsLookup(label=label, epsg=normalize_epsg(epsg))


def crs_from_epsg(code) -> pyproj.CRS:
    """Build a pyproj CRS, turning unknown codes into ``ConfigError``."""
    epsg = normalize_epsg(code)
    try:
        return pyproj.CRS.from_epsg(int(epsg))
    except CRSError as exc:
        raise ConfigError(f"Unknown EPSG code: {epsg}") from exc


def extend_crs_map(base, extra):
    """Return a new registry with ``extra`` applied on top of ``base``.

    Labels already in ``base`` keep their position but take the new code;
    new labels are appended in the order given.
    """
    merged = {label: normalize_epsg(code) for label, code in base.items()}
    for label, code in extra.items():
        merged[label] = normalize_epsg(code)
    return merged


def _read_registry_csv(path):
    table = pd.read_csv(path, dtype=str, keep_default_na=False)
    table.columns = [str(col).strip().lower() for col in table.columns]
    for col in (REGISTRY_LABEL, REGISTRY_EPSG):
        if col not in table.columns:
            raise ConfigError(f"CRS registry file {path} missing column: {col}")
    return dict(zip(table[REGISTRY_LABEL], table[REGISTRY_EPSG]))


def _read_registry_json(path):
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ConfigError(f"CRS registry file {path} must hold a JSON object of label -> EPSG code")
    return raw


def load_crs_map(source, extend_default=False):
    """Load a label -> EPSG registry from a mapping, a JSON file or a CSV file.

    Parameters
    ----------
    source : mapping or path-like
        A mapping is used as is. ``.json`` files must hold one object of
        ``{"label": "epsg"}`` pairs; any other file is read as a CSV with
        ``label`` and ``epsg`` columns.
    extend_default : bool, optional
        When True the loaded entries are layered on top of
        ``DEFAULT_CRS_MAP`` instead of replacing it.

    Returns
    -------
    dict
        Ordered registry with EPSG codes normalised to digit strings.
    """
    if isinstance(source, Mapping):
        raw = dict(source)
    else:
        path = Path(source)
        if not path.is_file():
            raise NotFoundError(f"CRS registry file not found: {path}")
        if path.suffix.lower() == ".json":
            raw = _read_registry_json(path)
        else:
            raw = _read_registry_csv(path)
        logger.info("Loaded %d CRS labels from %s", len(raw), path)

    if extend_default:
        return extend_crs_map(DEFAULT_CRS_MAP, raw)
    return extend_crs_map({}, raw)
