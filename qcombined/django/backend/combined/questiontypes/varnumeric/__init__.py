# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Numeric answers compared within an absolute tolerance. With scientific
notation enabled the answer may be typed as 1.5×10<sup>3</sup>.
"""

import logging
import re

from django.utils.html import strip_tags
from django.utils.translation import gettext as _

from combined.questiontypes.base import Question

logger = logging.getLogger(__name__)

SCINOTATION = re.compile(r"\s*[x×*]\s*10\s*(?:<sup>\s*([+\-−]?\d+)\s*</sup>|\^\s*([+\-−]?\d+))\s*$")
DEFAULT_RELATIVE_TOLERANCE = 1e-9


class VarNumericAnswer:
    def __init__(self, answer, error="", fraction=1.0, feedback=""):
        self.answer = answer
        self.error = error
        self.fraction = float(fraction)
        self.feedback = feedback

    def within_tolerance(self, value):
        expected = parse_number(self.answer)
        if expected is None:
            logger.error(f"VARNUMERIC ANSWER {self.answer!r} IS NOT A NUMBER")
            return False
        error = parse_number(self.error)
        if error is not None:
            return abs(value - expected) <= abs(error)
        return abs(value - expected) <= DEFAULT_RELATIVE_TOLERANCE * max(abs(expected), 1.0)


def parse_number(text):
    """Float value of a typed number, or None when it is not one."""
    if text is None:
        return None
    text = str(text).strip()
    exponent = 0
    found = SCINOTATION.search(text)
    if found:
        exponent = int((found.group(1) or found.group(2)).replace("−", "-"))
        text = text[:found.start()]
    text = strip_tags(text).replace(" ", "").replace("−", "-")
    try:
        return float(text) * 10 ** exponent
    except ValueError:
        return None


class VarNumericQuestion(Question):
    qtype = "varnumeric"

    def __init__(self, answers=None, requirescinotation=False, **kwargs):
        super().__init__(**kwargs)
        self.answers = list(answers or [])
        self.requirescinotation = bool(int(requirescinotation))

    def is_gradable_response(self, response):
        return parse_number(response.get("answer")) is not None

    def is_complete_response(self, response):
        return self.is_gradable_response(response)

    def get_validation_error(self, response):
        if (response.get("answer") or "").strip() == "":
            return _("Please enter an answer.")
        if not self.is_gradable_response(response):
            return _("You must enter a valid number.")
        return ""

    def grade_response(self, response):
        value = parse_number(response.get("answer"))
        fraction = 0.0
        if value is not None:
            for answer in self.answers:
                if answer.within_tolerance(value):
                    fraction = answer.fraction
                    break
        return self.graded(fraction)

    def get_sup_sub_editor_option(self):
        return "sup" if self.requirescinotation else None

    def get_correct_response(self, response=None):
        right = next((answer for answer in self.answers if answer.fraction > 0.999999), None)
        return {"answer": right.answer} if right else {}
