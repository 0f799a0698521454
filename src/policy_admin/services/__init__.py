# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Business logic service layer."""

from ..core.result_types import Err, Ok, Result

from .policy_term_service import (
    PageRequest,
    PageResult,
    PolicyTermSearch,
    PolicyTermService,
    build_predicates,
)
from .seed_service import PolicySeedGenerator, SeedDataset, seed_database
from .sorting import SORT_FIELDS, SortDirection, SortSpec, parse_sort

__all__ = [
    "Err",
    "Ok",
    "PageRequest",
    "PageResult",
    "PolicySeedGenerator",
    "PolicyTermSearch",
    "PolicyTermService",
    "Result",
    "SORT_FIELDS",
    "SeedDataset",
    "SortDirection",
    "SortSpec",
    "build_predicates",
    "parse_sort",
    "seed_database",
]
