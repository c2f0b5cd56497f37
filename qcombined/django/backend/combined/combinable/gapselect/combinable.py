# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging

from django.conf import settings
from django.utils.translation import gettext as _

from combined.combinable.base import CombinableBase, CombinableTypeBase, is_on
from combined.questiontypes.gapselect import GapSelectChoice, GapSelectQuestion

logger = logging.getLogger(__name__)


def choices_from(subqformdata):
    return [str(answer or "").strip() for answer in subqformdata.get("answer") or []]


class CombinableGapSelect(CombinableBase):
    """A drop down menu. The first choice entered is the right one."""

    def add_form_fragment(self, form):
        form.add_element("selectyesno", self.form_field_name("shuffleanswers"), _("Shuffle"))
        for i in range(settings.COMBINED_MAX_CHOICES):
            label = _("Correct choice") if i == 0 else _("Choice %(no)s") % {"no": i + 1}
            form.add_element("text", self.form_field_name(f"answer[{i}]"), label, {"size": "40"})

    def validate(self):
        errors = {}
        choices = choices_from(self.formdata)
        if not choices or choices[0] == "":
            errors[self.form_field_name("answer[0]")] = _("You must enter the correct choice.")
        elif len([choice for choice in choices if choice]) < 2:
            errors[self.form_field_name("answer[1]")] = _("You must enter at least one wrong choice.")
        return errors


class CombinableGapSelectType(CombinableTypeBase):

    identifier = "gapselect"
    combinable_class = CombinableGapSelect
    question_class = GapSelectQuestion

    def is_empty(self, subqformdata):
        if any(choices_from(subqformdata)):
            return False
        return super().is_empty(subqformdata)

    def question_properties(self, subqformdata):
        choices = [GapSelectChoice(text, 1) for text in choices_from(subqformdata) if text]
        return {
            "choices": {1: choices},
            "places": {1: 1},
            "rightchoices": {1: 1},
            "shufflechoices": is_on(subqformdata.get("shuffleanswers")),
        }
