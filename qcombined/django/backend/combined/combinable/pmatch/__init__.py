# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Pattern match subquestions: a single line of text graded by a pattern match
expression.
"""

import logging

from combined.question import register_combinable_type

from .combinable import CombinablePmatch, CombinablePmatchType

logger = logging.getLogger(__name__)


# This function call registers the subquestion type with the combined question
register_combinable_type(CombinablePmatchType())
