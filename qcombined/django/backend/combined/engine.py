# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
The parts of the question engine that the combined question consumes.

A question attempt is a sequence of steps; each step carries the flat
response data submitted in it together with the state the attempt was left
in. Display options say what the current viewer is allowed to see.
"""

import logging

from django.db import models
from django.utils.translation import gettext_lazy

logger = logging.getLogger(__name__)


class QuestionState(models.TextChoices):
    TODO = "todo", gettext_lazy("Not yet answered")
    INVALID = "invalid", gettext_lazy("Invalid answer")
    COMPLETE = "complete", gettext_lazy("Answer saved")
    NEEDSGRADING = "needsgrading", gettext_lazy("Requires grading")
    FINISHED = "finished", gettext_lazy("Complete")
    GAVEUP = "gaveup", gettext_lazy("Not answered")
    GRADEDWRONG = "gradedwrong", gettext_lazy("Incorrect")
    GRADEDPARTIAL = "gradedpartial", gettext_lazy("Partially correct")
    GRADEDRIGHT = "gradedright", gettext_lazy("Correct")

    @classmethod
    def graded_state_for_fraction(cls, fraction):
        if fraction < 0.000001:
            return cls.GRADEDWRONG
        elif fraction > 0.999999:
            return cls.GRADEDRIGHT
        else:
            return cls.GRADEDPARTIAL

    def is_active(self):
        return self in (QuestionState.TODO, QuestionState.INVALID, QuestionState.COMPLETE)

    def is_finished(self):
        return not self.is_active()

    def is_graded(self):
        return self in (QuestionState.GRADEDWRONG, QuestionState.GRADEDPARTIAL, QuestionState.GRADEDRIGHT)

    def get_feedback_class(self):
        return {
            QuestionState.GRADEDRIGHT: "correct",
            QuestionState.GRADEDPARTIAL: "partiallycorrect",
            QuestionState.GRADEDWRONG: "incorrect",
        }.get(self, "")


class DisplayOptions:
    """What may be shown to whoever is looking at an attempt."""

    def __init__(
        self,
        readonly=False,
        correctness=True,
        feedback=True,
        numpartscorrect=True,
        generalfeedback=True,
        rightanswer=False,
    ):
        self.readonly = readonly
        self.correctness = correctness
        self.feedback = feedback
        self.numpartscorrect = numpartscorrect
        self.generalfeedback = generalfeedback
        self.rightanswer = rightanswer

    @classmethod
    def hidden(cls, readonly=False):
        return cls(
            readonly=readonly,
            correctness=False,
            feedback=False,
            numpartscorrect=False,
            generalfeedback=False,
            rightanswer=False,
        )

    def __repr__(self):
        flags = ", ".join(f"{key}={val}" for key, val in vars(self).items())
        return f"DisplayOptions({flags})"


class QuestionAttemptStep:
    def __init__(self, data=None, state=QuestionState.TODO, fraction=None):
        self._data = dict(data or {})
        self.state = state
        self.fraction = fraction

    def get_qt_var(self, name, default=None):
        return self._data.get(name, default)

    def has_qt_var(self, name):
        return name in self._data

    def get_qt_data(self):
        return {key: val for (key, val) in self._data.items() if not key.startswith("-")}

    def get_all_data(self):
        return dict(self._data)


class QuestionAttempt:
    """One question being attempted in one slot of a usage."""

    def __init__(self, question, slot=1, usage_id=1, rng=None):
        self._question = question
        self.slot = slot
        self.usage_id = usage_id
        self._steps = []
        self.start(rng)

    def start(self, rng=None):
        """Begin again with a first step holding the variables fixed for this attempt."""
        self._steps = [QuestionAttemptStep(self._question.start_attempt(rng))]
        return self._steps[0]

    def get_attempt_state(self):
        return self._steps[0].get_qt_data()

    def get_question(self):
        return self._question

    def get_field_prefix(self):
        return f"q{self.usage_id}:{self.slot}_"

    def get_qt_field_name(self, name):
        return self.get_field_prefix() + name

    def add_step(self, step):
        self._steps.append(step)
        return step

    def get_last_step(self):
        return self._steps[-1]

    def get_state(self):
        return self.get_last_step().state

    def get_last_qt_data(self):
        for step in reversed(self._steps):
            data = step.get_qt_data()
            if data:
                return data
        return {}

    def get_last_qt_var(self, name, default=None):
        for step in reversed(self._steps):
            if step.has_qt_var(name):
                return step.get_qt_var(name)
        return default

    def process_action(self, response, finish=False):
        """Save a response, grading it when the attempt is finished.

        The variables fixed when the attempt started are saved with every response.
        """
        question = self._question
        response = {**response, **self.get_attempt_state()}
        step = QuestionAttemptStep(response)
        if not finish:
            if question.is_complete_response(response):
                step.state = QuestionState.COMPLETE
            elif question.is_gradable_response(response):
                step.state = QuestionState.INVALID
            else:
                step.state = QuestionState.TODO
        elif not question.is_gradable_response(response):
            step.state = QuestionState.GAVEUP
        else:
            fraction, state = question.grade_response(response)
            step.fraction = fraction
            step.state = state
        logger.debug(f"ATTEMPT {self.get_field_prefix()} STATE={step.state} FRACTION={step.fraction}")
        return self.add_step(step)
