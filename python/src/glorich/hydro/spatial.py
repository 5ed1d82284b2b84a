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

"""Turn joined GLORICH records into point datasets and shapefiles.

Rows are split by their CoordinateSystem label, each group becomes a point
GeoDataFrame in its own CRS, and the groups are either returned as they are
or reprojected into one target CRS and stacked into a single dataset.
"""

import logging
import re
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import geopandas as gpd
import pandas as pd

from glorich.datamodel import (
    COORDINATE_SYSTEM,
    DEFAULT_EXPORT_NAME,
    DEFAULT_TARGET_EPSG,
    GEOMETRY_COLUMNS,
    LATITUDE,
    LONGITUDE,
    SHAPEFILE_DRIVER,
)
from glorich.errors import ConfigError, DataQualityWarning
from glorich.hydro.crs import (
    DEFAULT_CRS_MAP,
    DEFAULT_EXPORT_NAMES,
    crs_from_epsg,
    load_crs_map,
    lookup_epsg,
)
from glorich.hydro.validate import blank_mask, report_missing_columns

logger = logging.getLogger(__name__)

SHAPEFILE_PARTS = (".shp", ".shx", ".dbf", ".prj", ".cpg")


@dataclass(frozen=True, eq=False)
class CrsGroup:
    """Rows sharing one CoordinateSystem label, with the label's EPSG code."""

    label: str
    epsg: str
    rows: pd.DataFrame = field(repr=False)

    def __len__(self):
        return len(self.rows)


def drop_incomplete(df):
    """Drop rows that cannot become a point.

    A row is kept only when Latitude, Longitude and CoordinateSystem are all
    present and non-blank and both coordinates parse as numbers. Coordinates
    of the kept rows are returned as floats. Running this twice gives the same
    rows as running it once.
    """
    missing = report_missing_columns(df, GEOMETRY_COLUMNS)
    if missing:
        raise ValueError(f"Location data missing columns: {missing}")

    blank = blank_mask(df[LATITUDE]) | blank_mask(df[LONGITUDE]) | blank_mask(df[COORDINATE_SYSTEM])
    lat = pd.to_numeric(df[LATITUDE], errors="coerce")
    lon = pd.to_numeric(df[LONGITUDE], errors="coerce")
    non_numeric = ~blank & (lat.isna() | lon.isna())
    keep = ~(blank | non_numeric)

    dropped = int((~keep).sum())
    if dropped:
        warnings.warn(
            f"Dropped {dropped} of {len(df)} rows without usable coordinates "
            f"({int(blank.sum())} blank, {int(non_numeric.sum())} non-numeric)",
            DataQualityWarning,
            stacklevel=2,
        )

    out = df.loc[keep].copy()
    out[LATITUDE] = lat[keep].astype(float)
    out[LONGITUDE] = lon[keep].astype(float)
    return out


def group_by_crs(df, crs_map=None) -> List[CrsGroup]:
    """Split rows by exact CoordinateSystem label, in registry order.

    Only labels with at least one row produce a group. Rows whose label is not
    in the registry are left out of every group and reported with a
    ``DataQualityWarning`` naming each label and its row count.
    """
    crs_map = DEFAULT_CRS_MAP if crs_map is None else crs_map
    labels = df[COORDINATE_SYSTEM]

    groups = []
    for label in crs_map:
        found = lookup_epsg(label, crs_map)
        rows = df.loc[labels == label]
        if rows.empty:
            logger.debug("No rows for CRS label %r", label)
            continue
        logger.debug("CRS label %r: %d rows -> EPSG:%s", label, len(rows), found.epsg)
        groups.append(CrsGroup(label=label, epsg=found.epsg, rows=rows.copy()))

    unmatched = labels[~labels.isin(list(crs_map))]
    if not unmatched.empty:
        counts = unmatched.value_counts(sort=False)
        listed = ", ".join(f"{label!r} ({count} rows)" for label, count in counts.items())
        warnings.warn(
            f"{len(unmatched)} rows have a CoordinateSystem label with no EPSG code and were excluded: {listed}",
            DataQualityWarning,
            stacklevel=2,
        )
    return groups


def geometrize(group):
    """Build a point GeoDataFrame at (Longitude, Latitude) in the group's own CRS.

    The coordinate columns move into the geometry; all other columns are kept
    as attributes.
    """
    crs = crs_from_epsg(group.epsg)
    rows = group.rows
    geometry = gpd.points_from_xy(rows[LONGITUDE], rows[LATITUDE])
    attributes = rows.drop(columns=[LATITUDE, LONGITUDE])
    return gpd.GeoDataFrame(attributes, geometry=geometry, crs=crs)


def reproject(dataset, target_epsg=DEFAULT_TARGET_EPSG):
    return dataset.to_crs(crs_from_epsg(target_epsg))


def merge_datasets(datasets, target_epsg=DEFAULT_TARGET_EPSG):
    """Stack datasets already in ``target_epsg`` into one, keeping their order."""
    crs = crs_from_epsg(target_epsg)
    datasets = list(datasets)
    if not datasets:
        return gpd.GeoDataFrame(geometry=gpd.GeoSeries([], crs=crs))
    for i, dataset in enumerate(datasets):
        if dataset.crs != crs:
            raise ValueError(f"Dataset {i} is in {dataset.crs}, expected EPSG:{crs.to_epsg()}; reproject it first")
    merged = pd.concat(datasets, ignore_index=True)
    return gpd.GeoDataFrame(merged, geometry=merged.geometry.name, crs=crs)


def _remove_existing_shapefile(path):
    for suffix in SHAPEFILE_PARTS:
        part = path.with_suffix(suffix)
        if part.exists():
            part.unlink()


def shapefile_path(filename=None, filepath=None):
    name = str(filename or DEFAULT_EXPORT_NAME)
    if name.lower().endswith(".shp"):
        name = name[:-4]
    directory = Path(filepath) if filepath is not None else Path.cwd()
    return directory / f"{name}.shp"


def export_shapefile(dataset, filename=None, filepath=None):
    """Write a dataset to ``<filepath>/<filename>.shp``, replacing any existing file.

    ``filename`` defaults to ``GLORICHshpExport`` and ``filepath`` to the
    current working directory. Write errors are not caught.
    """
    path = shapefile_path(filename, filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    _remove_existing_shapefile(path)
    dataset.to_file(path, driver=SHAPEFILE_DRIVER)
    logger.info("Wrote %d points to %s", len(dataset), path)
    return path


def _slug(label):
    return re.sub(r"[^0-9A-Za-z]+", "_", str(label)).strip("_")


def default_export_names(groups):
    """Shapefile names for per-group export when the caller gives none."""
    names = []
    for group in groups:
        name = DEFAULT_EXPORT_NAMES.get(group.label) or _slug(group.label) or f"EPSG{group.epsg}"
        candidate, n = name, 2
        while candidate in names:
            candidate = f"{name}_{n}"
            n += 1
        names.append(candidate)
    return names


def _group_filenames(groups, filename):
    if filename is None:
        return default_export_names(groups)
    names = [filename] if isinstance(filename, (str, Path)) else list(filename)
    if len(names) != len(groups):
        labels = [group.label for group in groups]
        raise ConfigError(
            f"Got {len(names)} filenames for {len(groups)} coordinate system groups {labels}; "
            f"supply one filename per group"
        )
    return names


def convert(table,
    crs_map=None,
    merge=True,
    target_epsg=DEFAULT_TARGET_EPSG,
    export=False,
    filename=None,
    filepath=None):
    """Convert joined GLORICH records into point datasets.

    Parameters
    ----------
    table : pandas.DataFrame
        Output of ``load_hydro_data(..., location=True)`` or any subset of it.
    crs_map : mapping or path-like, optional
        CoordinateSystem label -> EPSG code registry, or a registry file.
        Defaults to ``DEFAULT_CRS_MAP``; its order fixes the merged row order.
    merge : bool, optional
        Reproject every group to ``target_epsg`` and stack them into one
        dataset. When False the groups are returned in their own CRS.
    target_epsg : str, optional
        EPSG code (digits only) of the merged dataset. Default ``"4326"``.
    export : bool, optional
        Write the result as shapefiles.
    filename : str or list of str, optional
        Merged export: one name, default ``GLORICHshpExport``.
        Per-group export: one name per non-empty group, in group order.
    filepath : path-like, optional
        Export directory, default the current working directory.

    Returns
    -------
    geopandas.GeoDataFrame or list of geopandas.GeoDataFrame
    """
    crs_map = DEFAULT_CRS_MAP if crs_map is None else load_crs_map(crs_map)
    if merge:
        crs_from_epsg(target_epsg)
        if export and filename is not None and not isinstance(filename, (str, Path)):
            raise ConfigError("A merged export takes a single filename")

    complete = drop_incomplete(table)
    groups = group_by_crs(complete, crs_map)
    datasets = [geometrize(group) for group in groups]
    logger.info("Converted %d of %d rows into %d CRS groups", len(complete), len(table), len(groups))

    if merge:
        merged = merge_datasets([reproject(ds, target_epsg) for ds in datasets], target_epsg)
        if export:
            if merged.empty:
                warnings.warn(
                    f"No points left to export; {shapefile_path(filename, filepath)} was not written or replaced",
                    DataQualityWarning,
                    stacklevel=2,
                )
            else:
                export_shapefile(merged, filename, filepath)
        return merged

    if export:
        names = _group_filenames(groups, filename)
        for dataset, name in zip(datasets, names):
            export_shapefile(dataset, name, filepath)
    return datasets
