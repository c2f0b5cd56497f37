# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Multiple response subquestions: a group of check boxes.
"""

from combined.question import register_combinable_type

from .combinable import CombinableOuMultiResponse, CombinableOuMultiResponseType

register_combinable_type(CombinableOuMultiResponseType())
