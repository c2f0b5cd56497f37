# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

from .base import Question, format_text, html_is_blank
from .gapselect import GapSelectChoice, GapSelectQuestion
from .multiresponse import MultiResponseAnswer, MultiResponseQuestion
from .pmatch import PmatchAnswer, PmatchExpression, PmatchQuestion
from .varnumeric import VarNumericAnswer, VarNumericQuestion
