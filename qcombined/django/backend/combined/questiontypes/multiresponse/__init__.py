# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Multiple response: any number of check boxes, several of which may be right.
"""

import logging
import random

from django.utils.translation import gettext as _

from combined.questiontypes.base import FORMAT_HTML, Question, join_order, split_order

logger = logging.getLogger(__name__)


class MultiResponseAnswer:
    def __init__(self, answer, fraction=0.0, feedback="", answerformat=FORMAT_HTML):
        self.answer = answer
        self.fraction = float(fraction)
        self.feedback = feedback
        self.answerformat = answerformat


class MultiResponseQuestion(Question):
    """Each right choice ticked earns a share of the mark, each wrong one costs a share."""

    qtype = "oumultiresponse"

    def __init__(self, answers=None, shuffleanswers=False, **kwargs):
        super().__init__(**kwargs)
        self.answers = dict(answers or {})
        self.shuffleanswers = shuffleanswers

    def start_attempt(self, rng=None):
        order = list(self.answers)
        if self.shuffleanswers:
            (rng or random.Random()).shuffle(order)
        return {"_order": join_order(order)}

    def get_order(self, response=None):
        """Answer ids by the value of the check box they are shown in."""
        return dict(enumerate(split_order((response or {}).get("_order"), list(self.answers))))

    def field(self, value):
        return f"choice{value}"

    def is_choice_selected(self, response, value):
        return str(response.get(self.field(value), "")) not in ("", "0", "None")

    def selected_answers(self, response):
        return [
            self.answers[ansid] for (value, ansid) in self.get_order(response).items() if self.is_choice_selected(response, value)
        ]

    def num_right_answers(self):
        return sum(1 for answer in self.answers.values() if answer.fraction > 0)

    def is_complete_response(self, response):
        return bool(self.selected_answers(response))

    def get_validation_error(self, response):
        if self.is_complete_response(response):
            return ""
        return _("Please select at least one answer.")

    def get_num_parts_right(self, response):
        selected = self.selected_answers(response)
        numright = sum(1 for answer in selected if answer.fraction > 0)
        return numright, self.num_right_answers()

    def grade_response(self, response):
        selected = self.selected_answers(response)
        numright = sum(1 for answer in selected if answer.fraction > 0)
        numwrong = len(selected) - numright
        total = self.num_right_answers()
        fraction = max(0.0, (numright - numwrong) / total) if total else 0.0
        return self.graded(min(fraction, 1.0))

    def get_correct_response(self, response=None):
        return {
            self.field(value): "1" for (value, ansid) in self.get_order(response).items() if self.answers[ansid].fraction > 0
        }
