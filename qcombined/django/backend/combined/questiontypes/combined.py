# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
The combined question: several subquestions embedded in one question text,
each graded on its own slice of the response.
"""

import logging

from django.conf import settings

from combined.questiontypes.base import Question, format_text
from combined.response import ResponseArrayParam

logger = logging.getLogger(__name__)


class CombinedQuestion(Question):
    qtype = "combined"

    def __init__(
        self,
        combiner,
        correctfeedback="",
        partiallycorrectfeedback="",
        incorrectfeedback="",
        shownumcorrect=True,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.combiner = combiner
        self.correctfeedback = correctfeedback
        self.partiallycorrectfeedback = partiallycorrectfeedback
        self.incorrectfeedback = incorrectfeedback
        self.shownumcorrect = shownumcorrect

    def start_attempt(self, rng=None):
        state = {}
        for identifier, substate in self.combiner.call_all_subqs("start_attempt", None, rng).items():
            subq = self.combiner.find_subq(identifier)
            for name, value in substate.items():
                state[subq.field_name(name)] = value
        return state

    def is_complete_response(self, response):
        return all(self.combiner.call_all_subqs("is_complete_response", ResponseArrayParam(response)).values())

    def is_gradable_response(self, response):
        return any(self.combiner.call_all_subqs("is_gradable_response", ResponseArrayParam(response)).values())

    def get_validation_error(self, response):
        return self.combiner.get_validation_error(response)

    def grade_response(self, response):
        gradeandstates = self.combiner.call_all_subqs("grade_response", ResponseArrayParam(response))
        total = 0.0
        weights = 0.0
        for identifier, (fraction, state) in gradeandstates.items():
            weight = self.combiner.find_subq(identifier).question.defaultmark
            total += fraction * weight
            weights += weight
        fraction = total / weights if weights else 0.0
        if settings.RUNNING_DEVSERVER:
            logger.info(f"COMBINED GRADE {self.name} FRACTION={fraction} PARTS={gradeandstates}")
        return self.graded(fraction)

    def get_num_parts_right(self, response):
        """(parts graded right, number of parts), or (None, None) if nothing can be graded."""
        if not self.is_gradable_response(response):
            return None, None
        gradeandstates = self.combiner.call_all_subqs("grade_response", ResponseArrayParam(response))
        numright = sum(1 for (fraction, state) in gradeandstates.values() if state.get_feedback_class() == "correct")
        return numright, len(gradeandstates)

    def get_correct_response(self, response=None):
        return self.combiner.get_correct_response(response)

    def format_feedback(self, field):
        return format_text(getattr(self, field, ""))
