# Copyright (C) 2026 Darkmine Pty Ltd
# SPDX-License-Identifier: GPL-3.0-or-later

from . import crs, data, model, spatial, validate

__all__ = [
	"crs",
	"data",
	"model",
	"spatial",
	"validate",
]
