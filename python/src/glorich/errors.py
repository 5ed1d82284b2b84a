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

"""Error and warning types raised by the loader and the spatial converter."""


class NotFoundError(FileNotFoundError):
    """An input table or registry file is missing or cannot be read."""


class ConfigError(ValueError):
    """The caller passed an invalid or inconsistent combination of options."""


class DataQualityWarning(UserWarning):
    """Rows were dropped or excluded, but the run carried on with the rest."""
