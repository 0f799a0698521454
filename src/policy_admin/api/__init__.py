# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""FastAPI API layer for the policy admin backend.

Read-only endpoints for searching policy terms and fetching one term's detail.
"""

__all__: list[str] = []
