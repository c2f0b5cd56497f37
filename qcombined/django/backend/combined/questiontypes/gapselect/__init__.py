# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Select missing words: each place in the text is a drop down menu over one
group of choices.

The order the choices are shown in belongs to the attempt, not the question:
start_attempt returns it as "_choiceorder<group>" variables, which the
attempt keeps in its step data and hands back with every response.
"""

import logging
import random

from django.utils.translation import gettext as _

from combined.questiontypes.base import Question, join_order, split_order

logger = logging.getLogger(__name__)


class GapSelectChoice:
    def __init__(self, text, group=1):
        self.text = text
        self.group = group

    def __repr__(self):
        return f"GapSelectChoice({self.text!r}, group={self.group})"


class GapSelectQuestion(Question):
    """
    choices maps a group number to its list of choices, numbered from 1.
    places maps a place number to its group, rightchoices a place number to
    the number of its right choice within that group.
    """

    qtype = "gapselect"

    def __init__(self, choices=None, places=None, rightchoices=None, shufflechoices=False, **kwargs):
        super().__init__(**kwargs)
        self.choices = choices or {}
        self.places = places or {}
        self.rightchoices = rightchoices or {}
        self.shufflechoices = shufflechoices

    def start_attempt(self, rng=None):
        rng = rng or random.Random()
        state = {}
        for group, choices in self.choices.items():
            order = list(range(1, len(choices) + 1))
            if self.shufflechoices:
                rng.shuffle(order)
            state[self.order_var(group)] = join_order(order)
        return state

    def field(self, place):
        return f"p{place}"

    def order_var(self, group):
        return f"_choiceorder{group}"

    def get_choice_order(self, group, response=None):
        default = list(range(1, len(self.choices[group]) + 1))
        return split_order((response or {}).get(self.order_var(group)), default)

    def get_ordered_choices(self, group, response=None):
        order = self.get_choice_order(group, response)
        return {value: self.choices[group][choiceno - 1] for (value, choiceno) in enumerate(order, start=1)}

    def get_right_choice_for(self, place, response=None):
        group = self.places[place]
        return self.get_choice_order(group, response).index(self.rightchoices[place]) + 1

    def get_selected(self, response, place):
        value = response.get(self.field(place))
        if value in (None, "", "0", 0):
            return None
        return str(value)

    def is_complete_response(self, response):
        return all(self.get_selected(response, place) is not None for place in self.places)

    def is_gradable_response(self, response):
        return any(self.get_selected(response, place) is not None for place in self.places)

    def get_validation_error(self, response):
        if self.is_complete_response(response):
            return ""
        return _("Please put an answer in each box.")

    def get_num_parts_right(self, response):
        numright = sum(
            1
            for place in self.places
            if self.get_selected(response, place) == str(self.get_right_choice_for(place, response))
        )
        return numright, len(self.places)

    def grade_response(self, response):
        numright, total = self.get_num_parts_right(response)
        return self.graded(numright / total if total else 0.0)

    def get_correct_response(self, response=None):
        return {self.field(place): str(self.get_right_choice_for(place, response)) for place in self.places}
