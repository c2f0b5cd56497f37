# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Base classes that make a question type usable as a subquestion.

A *type* object (one per subquestion type) knows the defaults of the type and
how to tell an untouched authoring fragment from a filled in one. A
*combinable* object (one per placeholder in the question text) adds the
authoring fields, validates them and owns the gradable question once it has
been made.
"""

import logging
import re

from django.conf import settings
from django.utils.translation import gettext as _

from combined.questiontypes.base import FORMAT_HTML, html_is_blank

logger = logging.getLogger(__name__)

WIDTH_SPECIFIER = re.compile(r"^_+([0-9]*)_*$")


class CombinableTypeBase:

    identifier = None
    combinable_class = None
    question_class = None

    def extra_question_properties(self):
        return {}

    def extra_answer_properties(self):
        return {}

    def is_empty(self, subqformdata):
        return html_is_blank(subqformdata.get("generalfeedback"))

    def new_subq(self, identifier, third_param=None):
        return self.combinable_class(self, identifier, third_param)

    def question_properties(self, subqformdata):
        """Keyword arguments for question_class built from authored fields."""
        return {}

    def make_question(self, subqformdata, identifier):
        properties = dict(self.extra_question_properties())
        properties.update(self.question_properties(subqformdata))
        question = self.question_class(
            name=identifier,
            generalfeedback=subqformdata.get("generalfeedback", "") or "",
            defaultmark=subqformdata.get("defaultmark", 1) or 1,
            **properties,
        )
        logger.debug(f"MADE {self.identifier} SUBQUESTION {identifier}")
        return question


class CombinableBase:
    """One embedded subquestion of a combined question."""

    def __init__(self, typeobj, identifier, third_param=None):
        self.type = typeobj
        self.identifier = identifier
        self.third_param = third_param
        self.formdata = None
        self.question = None

    def __repr__(self):
        return f"{self.__class__.__name__}({self.identifier!r}, {self.third_param!r})"

    def get_identifier(self):
        return self.identifier

    def get_type_name(self):
        return self.type.identifier

    def field_name(self, name):
        """Name of a response field of this subquestion."""
        return f"{self.identifier}:{name}"

    def form_field_name(self, name):
        """Name of an authoring form field of this subquestion."""
        return f"subq:{self.type.identifier}:{self.identifier}:{name}"

    def code(self):
        code = f"[[{self.identifier}:{self.type.identifier}"
        if self.third_param is not None:
            code += f":{self.third_param}"
        return code + "]]"

    def validate_third_param(self, thirdparam):
        if thirdparam is None:
            return None
        return _('The subquestion type "%(type)s" does not accept a third parameter, found "%(param)s".') % {
            "type": self.type.identifier,
            "param": thirdparam,
        }

    def add_form_fragment(self, form):
        raise NotImplementedError

    def set_form_data(self, formdata):
        self.formdata = formdata

    def validate(self):
        return {}

    def make_question(self, formdata=None):
        if formdata is not None:
            self.set_form_data(formdata)
        self.question = self.type.make_question(self.formdata or {}, self.identifier)
        return self.question

    def get_sup_sub_editor_option(self):
        option = getattr(self.question, "get_sup_sub_editor_option", None)
        return option() if option else None


class CombinableAcceptsWidthSpecifier(CombinableBase):
    """Text entry subquestions, whose third parameter sets the input width: __20__ or _____."""

    def validate_third_param(self, thirdparam):
        if thirdparam is None or WIDTH_SPECIFIER.match(thirdparam):
            return None
        return _('"%(param)s" is not a valid width specifier. Use underscores, for example __20__ or _____.') % {
            "param": thirdparam
        }

    def get_width(self):
        if self.third_param is None:
            return settings.COMBINED_DEFAULT_WIDTH
        found = WIDTH_SPECIFIER.match(self.third_param)
        if found and found.group(1):
            return int(found.group(1))
        return len(self.third_param)


class CombinableAcceptsVerticalOrHorizontalLayout(CombinableBase):
    """Choice subquestions, whose third parameter is the layout: v (default) or h."""

    LAYOUTS = ("v", "h")

    def validate_third_param(self, thirdparam):
        if thirdparam is None or thirdparam in self.LAYOUTS:
            return None
        return _('"%(param)s" is not a valid layout. Use "v" for vertical or "h" for horizontal.') % {"param": thirdparam}

    def get_layout(self):
        return self.third_param if self.third_param in self.LAYOUTS else "v"


def feedback_properties(text="", textformat=FORMAT_HTML):
    return {"text": text, "format": textformat}


OFF_VALUES = ("", "0", "false", "off", "no", "none")


def is_on(value):
    """False for None and for the values a form submits for an unset toggle, such as 0, "" and "off"."""
    if value is None:
        return False
    return str(value).strip().lower() not in OFF_VALUES
