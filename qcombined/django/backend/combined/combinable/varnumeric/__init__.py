# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Numeric subquestions typed into a single line.
"""

from combined.question import register_combinable_type

from .combinable import CombinableVarNumeric, CombinableVarNumericType

register_combinable_type(CombinableVarNumericType())
