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

"""Data loading and joining helpers for GLORICH tables.

Reads ``hydrochemistry.csv`` and, optionally, ``sampling_locations.csv`` and
joins them on the station id so every sample carries its site coordinates and
CoordinateSystem label.
"""

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from glorich.datamodel import (
    DEFAULT_ENCODING,
    HYDROCHEMISTRY_CSV,
    LOCATION_COLUMNS,
    SAMPLING_LOCATIONS_CSV,
    STAT_ID,
)
from glorich.errors import ConfigError, DataQualityWarning, NotFoundError
from glorich.hydro.validate import find_duplicate_stations, report_missing_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinSummary:
    """Row counts before and after joining samples to their locations."""

    hydro_rows: int
    location_rows: int
    joined_rows: int
    unmatched_hydro_rows: int
    unmatched_location_rows: int
    duplicate_stations: int = 0

    def summary(self):
        return (
            f"{self.joined_rows} joined rows from {self.hydro_rows} samples and "
            f"{self.location_rows} locations ({self.unmatched_hydro_rows} samples and "
            f"{self.unmatched_location_rows} locations without a match)"
        )


def load_table(source, **kwargs):
    """Read a delimited table from a path, or copy a DataFrame passed in directly.

    Extra keyword arguments go to ``pandas.read_csv``. The encoding defaults to
    latin-1, which is what the GLORICH distribution uses.
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        path = Path(source)
        if not path.is_file():
            raise NotFoundError(f"Table not found: {path}")
        kwargs.setdefault("encoding", DEFAULT_ENCODING)
        try:
            df = pd.read_csv(path, **kwargs)
        except (OSError, pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
            raise NotFoundError(f"Table could not be read: {path}: {exc}") from exc
    return df


def _match_headers(df, required):
    # tolerate stray whitespace around required headers; other columns keep their names
    renamed = {
        col: str(col).strip()
        for col in df.columns
        if str(col).strip() in required and col != str(col).strip()
    }
    return df.rename(columns=renamed) if renamed else df


def load_hydrochemistry(source, **kwargs):
    df = _match_headers(load_table(source, **kwargs), [STAT_ID])
    if STAT_ID not in df.columns:
        raise ValueError(f"Hydrochemistry table missing column: {STAT_ID}")
    return df


def load_locations(source, **kwargs):
    """Read the sampling location table and keep only the join and geographic columns."""
    df = _match_headers(load_table(source, **kwargs), LOCATION_COLUMNS)
    missing = report_missing_columns(df, LOCATION_COLUMNS)
    if missing:
        raise ValueError(f"Sampling location table missing columns: {missing}")
    return df[LOCATION_COLUMNS].copy()


_JOIN_KEY = "_stat_id_key"


def _key_text(series):
    # 1.0 and 1 must give the same text; a blank id cell reads the whole column as float
    if pd.api.types.is_float_dtype(series):
        present = series.dropna()
        if (present == present.round()).all():
            series = series.astype("Int64")
    return series.astype("string").str.strip()


def _join_keys(hydro, locations):
    """Return comparable STAT_ID keys for both tables.

    Numeric ids on both sides are compared as numbers, as ``merge`` does.
    Text is only used when one side holds non-numeric ids.
    """
    left = hydro[STAT_ID]
    right = locations[STAT_ID]
    if left.dtype == right.dtype:
        return left, right
    if pd.api.types.is_numeric_dtype(left) and pd.api.types.is_numeric_dtype(right):
        return left, right
    return _key_text(left), _key_text(right)


def join_locations(hydro, locations):
    """Inner join samples to locations on ``STAT_ID``.

    Samples without a location and locations without samples are dropped.
    A station listed more than once in the location table multiplies its
    samples, one output row per location row, and is reported with a
    ``DataQualityWarning``.

    Returns
    -------
    tuple of (pandas.DataFrame, JoinSummary)
    """
    for label, df in (("Hydrochemistry", hydro), ("Sampling location", locations)):
        if STAT_ID not in df.columns:
            raise ValueError(f"{label} table missing column: {STAT_ID}")

    left_key, right_key = _join_keys(hydro, locations)

    duplicates = find_duplicate_stations(locations)
    if duplicates:
        listed = ", ".join(f"{issue['stat_id']} ({issue['count']} rows)" for issue in duplicates[:10])
        warnings.warn(
            f"{len(duplicates)} station ids appear more than once in the location table; "
            f"their samples are repeated once per location row: {listed}",
            DataQualityWarning,
            stacklevel=2,
        )

    # the samples keep their own STAT_ID values and dtype
    joined = (
        hydro.assign(**{_JOIN_KEY: left_key.to_numpy()})
        .merge(
            locations.drop(columns=[STAT_ID]).assign(**{_JOIN_KEY: right_key.to_numpy()}),
            on=_JOIN_KEY,
            how="inner",
            suffixes=("", "_location"),
        )
        .drop(columns=[_JOIN_KEY])
    )

    summary = JoinSummary(
        hydro_rows=len(hydro),
        location_rows=len(locations),
        joined_rows=len(joined),
        unmatched_hydro_rows=int((~left_key.isin(right_key)).sum()),
        unmatched_location_rows=int((~right_key.isin(left_key)).sum()),
        duplicate_stations=len(duplicates),
    )
    logger.info("Joined locations: %s", summary.summary())
    return joined, summary


def load_hydro_data(hydro_source, location=False, location_source=None, **kwargs):
    """Load the hydrochemistry table and optionally attach sampling locations.

    Parameters
    ----------
    hydro_source : path-like or pandas.DataFrame
        The hydrochemistry table; must contain ``STAT_ID``.
    location : bool, optional
        When True, join the location columns onto every sample.
    location_source : path-like or pandas.DataFrame, optional
        The sampling location table. Required when ``location`` is True and
        ignored otherwise.
    **kwargs
        Passed to ``pandas.read_csv`` for both files.

    Only whitespace around the required headers (``STAT_ID`` and the location
    columns) is stripped; all other columns are returned as read.

    Returns
    -------
    pandas.DataFrame
        The hydrochemistry table, joined to its locations when requested.
    """
    if location and location_source is None:
        raise ConfigError("location=True requires a location_source")
    hydro = load_hydrochemistry(hydro_source, **kwargs)
    if not location:
        return hydro
    locations = load_locations(location_source, **kwargs)
    joined, _ = join_locations(hydro, locations)
    return joined


def load_glorich_directory(directory=None, location=True, **kwargs):
    """Load the standard GLORICH files from one directory (default: the working directory).

    Reads ``hydrochemistry.csv`` and, when ``location`` is True,
    ``sampling_locations.csv``.
    """
    directory = Path(directory) if directory is not None else Path.cwd()
    location_source = directory / SAMPLING_LOCATIONS_CSV if location else None
    return load_hydro_data(directory / HYDROCHEMISTRY_CSV, location=location, location_source=location_source, **kwargs)
