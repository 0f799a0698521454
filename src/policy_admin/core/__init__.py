# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure components for the policy admin backend."""

from .config import Settings, get_settings
from .database import Database, get_database
from .result_types import Err, ErrorKind, Ok, Result, ServiceError

__all__ = [
    "Database",
    "Err",
    "ErrorKind",
    "Ok",
    "Result",
    "ServiceError",
    "Settings",
    "get_database",
    "get_settings",
]
