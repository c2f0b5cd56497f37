# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging

from django.conf import settings
from django.utils.translation import gettext as _

from combined.combinable.base import CombinableAcceptsVerticalOrHorizontalLayout, CombinableTypeBase, is_on
from combined.questiontypes.multiresponse import MultiResponseAnswer, MultiResponseQuestion

logger = logging.getLogger(__name__)


def rows_from(subqformdata):
    answers = subqformdata.get("answer") or []
    correct = subqformdata.get("correctanswer") or []
    rows = []
    for i, answer in enumerate(answers):
        rows.append((str(answer or "").strip(), is_on(correct[i]) if i < len(correct) else False))
    return rows


class CombinableOuMultiResponse(CombinableAcceptsVerticalOrHorizontalLayout):

    def add_form_fragment(self, form):
        form.add_element("selectyesno", self.form_field_name("shuffleanswers"), _("Shuffle the choices?"))
        for i in range(settings.COMBINED_MAX_CHOICES):
            choiceels = []
            choiceels.append(form.create_element("text", self.form_field_name(f"answer[{i}]"), _("Choice %(no)s") % {"no": i + 1}))
            choiceels.append(form.create_element("selectyesno", self.form_field_name(f"correctanswer[{i}]"), _("Correct")))
            form.add_group(
                choiceels, self.form_field_name(f"choice[{i}]"), _("Choice %(no)s") % {"no": i + 1}, "&nbsp;" + _("Correct"), False
            )

    def validate(self):
        errors = {}
        rows = rows_from(self.formdata)
        for i, (answer, correct) in enumerate(rows):
            if correct and answer == "":
                errors[self.form_field_name(f"answer[{i}]")] = _("A choice marked correct must have some text.")
        if not errors and not any(correct for (answer, correct) in rows if answer):
            errors[self.form_field_name("answer[0]")] = _("At least one choice must be marked correct.")
        return errors


class CombinableOuMultiResponseType(CombinableTypeBase):

    identifier = "oumultiresponse"
    combinable_class = CombinableOuMultiResponse
    question_class = MultiResponseQuestion

    def is_empty(self, subqformdata):
        if any(answer or correct for (answer, correct) in rows_from(subqformdata)):
            return False
        return super().is_empty(subqformdata)

    def question_properties(self, subqformdata):
        answers = {}
        for i, (answer, correct) in enumerate(rows_from(subqformdata)):
            if answer:
                answers[i + 1] = MultiResponseAnswer(answer, fraction=1 if correct else 0)
        return {
            "answers": answers,
            "shuffleanswers": is_on(subqformdata.get("shuffleanswers")),
        }
