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

"""QA/QC helpers for hydrochemistry and sampling location tables."""

import pandas as pd

from glorich.datamodel import COORDINATE_SYSTEM, GEOMETRY_COLUMNS, LATITUDE, LONGITUDE, STAT_ID
from glorich.hydro.crs import lookup_epsg


def report_missing_columns(df, required):
    missing = [col for col in required if col not in df.columns]
    return missing


def blank_mask(series):
    """True where a value is missing or an empty / whitespace-only string."""
    missing = series.isna()
    as_text = series.astype(str).str.strip()
    return missing | (as_text == "")


def find_duplicate_stations(df, id_col=STAT_ID):
    """Return one issue per station id that appears more than once."""
    issues = []
    if df.empty or id_col not in df.columns:
        return issues
    counts = df[id_col].value_counts(sort=False)
    for stat_id, count in counts[counts > 1].items():
        issues.append({"stat_id": stat_id, "type": "duplicate_station", "count": int(count)})
    return issues


def find_incomplete_coordinates(df):
    """Return one issue per row lacking a usable latitude, longitude or CRS label.

    Blank values are reported as ``missing_<column>``; coordinates that are
    present but not numeric are reported as ``non_numeric_<column>``.
    """
    issues = []
    for col in GEOMETRY_COLUMNS:
        if col not in df.columns:
            raise ValueError(f"Location data missing column: {col}")

    for idx, row in df.iterrows():
        stat_id = row.get(STAT_ID)
        for col in GEOMETRY_COLUMNS:
            value = row[col]
            if pd.isna(value) or str(value).strip() == "":
                issues.append({"stat_id": stat_id, "row_index": idx, "type": f"missing_{col.lower()}"})
            elif col in (LATITUDE, LONGITUDE) and pd.isna(pd.to_numeric(value, errors="coerce")):
                issues.append({"stat_id": stat_id, "row_index": idx, "type": f"non_numeric_{col.lower()}",
                               "value": value})
    return issues


def summarize_crs_labels(df, crs_map=None):
    """Count rows per CoordinateSystem label and flag the ones the registry knows.

    Returns a DataFrame with columns ``label``, ``rows``, ``epsg`` and
    ``registered``, in order of first appearance.
    """
    if COORDINATE_SYSTEM not in df.columns:
        raise ValueError(f"Location data missing column: {COORDINATE_SYSTEM}")
    labels = df.loc[~blank_mask(df[COORDINATE_SYSTEM]), COORDINATE_SYSTEM]
    counts = labels.value_counts(sort=False)
    records = []
    for label, count in counts.items():
        found = lookup_epsg(label, crs_map)
        records.append({"label": label, "rows": int(count), "epsg": found.epsg, "registered": found.matched})
    return pd.DataFrame(records, columns=["label", "rows", "epsg", "registered"])
