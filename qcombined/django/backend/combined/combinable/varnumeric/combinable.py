# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging

from django.utils.translation import gettext as _

from combined.combinable.base import CombinableAcceptsWidthSpecifier, CombinableTypeBase, is_on
from combined.forms import PARAM_RAW_TRIMMED
from combined.questiontypes.varnumeric import VarNumericAnswer, VarNumericQuestion, parse_number

logger = logging.getLogger(__name__)


def first(subqformdata, name):
    return str((subqformdata.get(name) or [""])[0] or "").strip()


class CombinableVarNumeric(CombinableAcceptsWidthSpecifier):

    def add_form_fragment(self, form):
        form.add_element(
            "selectyesno", self.form_field_name("requirescinotation"), _("Require scientific notation")
        )
        answerels = []
        answerels.append(form.create_element("text", self.form_field_name("answer[0]"), _("Answer"), {"size": "20"}))
        answerels.append(form.create_element("text", self.form_field_name("error[0]"), _("Error"), {"size": "10"}))
        form.add_group(answerels, self.form_field_name("answergroup"), _("Answer"), "&nbsp;" + _("Error"), False)
        form.set_type(self.form_field_name("answer"), PARAM_RAW_TRIMMED)
        form.set_type(self.form_field_name("error"), PARAM_RAW_TRIMMED)

    def validate(self):
        errors = {}
        answer = first(self.formdata, "answer")
        if answer == "":
            errors[self.form_field_name("answer[0]")] = _("You must enter an answer.")
        elif parse_number(answer) is None:
            errors[self.form_field_name("answer[0]")] = _("The answer must be a number.")
        error = first(self.formdata, "error")
        if error != "" and parse_number(error) is None:
            errors[self.form_field_name("error[0]")] = _("The error must be a number.")
        return errors


class CombinableVarNumericType(CombinableTypeBase):

    identifier = "varnumeric"
    combinable_class = CombinableVarNumeric
    question_class = VarNumericQuestion

    def is_empty(self, subqformdata):
        if is_on(subqformdata.get("requirescinotation")):
            return False
        if first(subqformdata, "answer") != "" or first(subqformdata, "error") != "":
            return False
        return super().is_empty(subqformdata)

    def question_properties(self, subqformdata):
        answer = VarNumericAnswer(first(subqformdata, "answer"), error=first(subqformdata, "error"), fraction=1)
        return {
            "answers": [answer],
            "requirescinotation": is_on(subqformdata.get("requirescinotation")),
        }
