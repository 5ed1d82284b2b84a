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

"""Settings bundle for repeatable conversions.

Keeps the registry and export options together so a run can be described in
a JSON file instead of code.
"""

import json
from pathlib import Path

from glorich.datamodel import DEFAULT_TARGET_EPSG
from glorich.errors import ConfigError, NotFoundError

from . import crs, spatial


class ConversionConfig:
    def __init__(self, crs_map=None, merge=True, target_epsg=DEFAULT_TARGET_EPSG, export=False, filename=None, filepath=None):
        self.crs_map = dict(crs.DEFAULT_CRS_MAP) if crs_map is None else crs.load_crs_map(crs_map)
        self.merge = merge
        self.target_epsg = crs.normalize_epsg(target_epsg)
        self.export = export
        self.filename = filename
        self.filepath = filepath

    def update(self, **kwargs):
        for key, val in kwargs.items():
            if key not in self.to_dict():
                raise ConfigError(f"Unknown conversion setting: {key}")
            if key == "crs_map":
                val = crs.load_crs_map(val)
            elif key == "target_epsg":
                val = crs.normalize_epsg(val)
            setattr(self, key, val)
        return self

    def to_dict(self):
        return {
            "crs_map": self.crs_map,
            "merge": self.merge,
            "target_epsg": self.target_epsg,
            "export": self.export,
            "filename": self.filename,
            "filepath": self.filepath,
        }

    @classmethod
    def from_json(cls, path):
        """Read settings from a JSON object whose keys match the constructor arguments.

        ``crs_map`` may be an inline object or a path to a registry file,
        resolved relative to the settings file. Set ``extend_default_crs`` to
        true to layer the given labels over the default registry.
        """
        path = Path(path)
        if not path.is_file():
            raise NotFoundError(f"Conversion settings not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ConfigError(f"Conversion settings in {path} must be a JSON object")

        extend_default = bool(raw.pop("extend_default_crs", False))
        registry = raw.pop("crs_map", None)
        if isinstance(registry, str):
            registry = path.parent / registry
        if registry is not None:
            raw["crs_map"] = crs.load_crs_map(registry, extend_default=extend_default)

        unknown = set(raw) - set(cls().to_dict())
        if unknown:
            raise ConfigError(f"Unknown conversion settings in {path}: {sorted(unknown)}")
        return cls(**raw)

    def run(self, table):
        return spatial.convert(table, **self.to_dict())
