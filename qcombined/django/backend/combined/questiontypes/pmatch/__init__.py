# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Short answer questions graded with pattern match expressions.
"""

from .expression import PmatchExpression, PmatchSyntaxError
from .pmatch import PmatchAnswer, PmatchQuestion
