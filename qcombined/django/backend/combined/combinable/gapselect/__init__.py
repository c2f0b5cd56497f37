# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Select missing word subquestions: one drop down menu.
"""

from combined.question import register_combinable_type

from .combinable import CombinableGapSelect, CombinableGapSelectType

register_combinable_type(CombinableGapSelectType())
