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

"""
GLORICH Data Model

Column names and file-level defaults shared by the loader and the spatial converter.

Column names follow the GLORICH csv headers exactly (they are case sensitive in the source files).
"""

STAT_ID = "STAT_ID"
COUNTRY = "Country"
STATE = "State"
LATITUDE = "Latitude"
LONGITUDE = "Longitude"
COORDINATE_SYSTEM = "CoordinateSystem"

# Columns projected from sampling_locations.csv before the join
LOCATION_COLUMNS = [STAT_ID, COUNTRY, STATE, LATITUDE, LONGITUDE, COORDINATE_SYSTEM]

# Columns a row needs before it can become a point
GEOMETRY_COLUMNS = [LATITUDE, LONGITUDE, COORDINATE_SYSTEM]

# File names as distributed with the GLORICH database
HYDROCHEMISTRY_CSV = "hydrochemistry.csv"
SAMPLING_LOCATIONS_CSV = "sampling_locations.csv"

# GLORICH csv files are Windows encoded; latin-1 never fails to decode
DEFAULT_ENCODING = "latin-1"

DEFAULT_TARGET_EPSG = "4326"
DEFAULT_EXPORT_NAME = "GLORICHshpExport"
SHAPEFILE_DRIVER = "ESRI Shapefile"
