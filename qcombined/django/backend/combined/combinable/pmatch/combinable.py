# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Makes the pattern match question type combinable.
"""

import logging

from django.utils.translation import gettext as _

from combined.combinable.base import (
    CombinableAcceptsWidthSpecifier,
    CombinableTypeBase,
    feedback_properties,
    is_on,
)
from combined.forms import PARAM_RAW_TRIMMED
from combined.questiontypes.base import FORMAT_PLAIN
from combined.questiontypes.pmatch import PmatchAnswer, PmatchExpression, PmatchQuestion

logger = logging.getLogger(__name__)


class CombinablePmatch(CombinableAcceptsWidthSpecifier):

    def add_form_fragment(self, form):
        susubels = []
        susubels.append(form.create_element("selectyesno", self.form_field_name("allowsubscript"), _("Allow use of subscript")))
        susubels.append(
            form.create_element("selectyesno", self.form_field_name("allowsuperscript"), _("Allow use of superscript"))
        )
        form.add_group(
            susubels,
            self.form_field_name("susubels"),
            _("Allow use of subscript"),
            "&nbsp;" + _("Allow use of superscript"),
            False,
        )
        menu = [
            _("No, case is unimportant"),
            _("Yes, case must match"),
        ]
        casedictels = []
        casedictels.append(form.create_element("select", self.form_field_name("usecase"), _("Case sensitivity"), menu))
        casedictels.append(
            form.create_element("selectyesno", self.form_field_name("applydictionarycheck"), _("Check spelling of student"))
        )
        form.add_group(
            casedictels,
            self.form_field_name("casedictels"),
            _("Case sensitivity"),
            "&nbsp;" + _("Check spelling of student"),
            False,
        )
        form.set_default(self.form_field_name("applydictionarycheck"), 1)
        form.add_element(
            "textarea",
            self.form_field_name("answer[0]"),
            _("Answer"),
            {"rows": "6", "cols": "80", "class": "textareamonospace"},
        )
        form.set_type(self.form_field_name("answer"), PARAM_RAW_TRIMMED)

    def validate(self):
        errors = {}
        trimmedanswer = (self.formdata.get("answer") or [""])[0].strip()
        if "" != trimmedanswer:
            expression = PmatchExpression(trimmedanswer)
            if not expression.is_valid():
                errors[self.form_field_name("answer[0]")] = expression.get_parse_error()
        return errors


class CombinablePmatchType(CombinableTypeBase):

    identifier = "pmatch"
    combinable_class = CombinablePmatch
    question_class = PmatchQuestion

    def extra_question_properties(self):
        return {"forcelength": "0", "extenddictionary": "", "converttospace": ",;:", "synonymsdata": []}

    def extra_answer_properties(self):
        return {"fraction": "1", "feedback": feedback_properties("", FORMAT_PLAIN)}

    def is_empty(self, subqformdata):
        for field in ("allowsubscript", "allowsuperscript", "usecase"):
            if is_on(subqformdata.get(field)):
                return False
        # Default of this one is on.
        if not is_on(subqformdata.get("applydictionarycheck")):
            return False
        if "" != (subqformdata.get("answer") or [""])[0].strip():
            return False
        return super().is_empty(subqformdata)

    def question_properties(self, subqformdata):
        answerproperties = self.extra_answer_properties()
        answer = PmatchAnswer(
            (subqformdata.get("answer") or [""])[0].strip(),
            fraction=answerproperties["fraction"],
            feedback=answerproperties["feedback"]["text"],
            feedbackformat=answerproperties["feedback"]["format"],
        )
        return {
            "answers": [answer],
            "usecase": is_on(subqformdata.get("usecase")),
            "allowsubscript": is_on(subqformdata.get("allowsubscript")),
            "allowsuperscript": is_on(subqformdata.get("allowsuperscript")),
            "applydictionarycheck": is_on(subqformdata.get("applydictionarycheck", 1)),
        }
