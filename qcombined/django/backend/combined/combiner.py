# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
The combiner owns the subquestions embedded in a question text.

Subquestions are embedded with codes like [[1:pmatch:__20__]],
[[colour:gapselect]] or [[2:oumultiresponse:h]]: an identifier, a
subquestion type and an optional third parameter whose meaning depends on
the type.
"""

import logging
import re

from django.utils.html import conditional_escape
from django.utils.safestring import mark_safe
from django.utils.translation import gettext as _

from combined.question import QuestionError, SubqType, get_combinable_type
from combined.renderer import get_embedded_renderer
from combined.response import ResponseArrayParam

logger = logging.getLogger(__name__)

EMBEDDED_CODE = re.compile(r"\[\[([^:\[\]]+):([a-zA-Z0-9_]+)(?::([^\[\]]*))?\]\]")
VALID_IDENTIFIER = re.compile(r"^[a-zA-Z0-9]+$")


class Combiner:
    def __init__(self):
        self.subqs = []

    def find_included_subqs_in_question_text(self, questiontext):
        """Create a subquestion for every valid embedded code; return the problems found."""
        errors = []
        seen = set()
        codes = list(EMBEDDED_CODE.finditer(questiontext))
        if not codes:
            errors.append(_("You must have at least one subquestion embedded in the question text."))
        for code in codes:
            identifier, typename, third_param = code.group(1), code.group(2), code.group(3)
            if typename not in SubqType.values:
                errors.append(
                    _('The subquestion type "%(type)s" used in %(code)s is not known.') % {"type": typename, "code": code.group(0)}
                )
                continue
            if not VALID_IDENTIFIER.match(identifier):
                errors.append(
                    _('The subquestion identifier "%(id)s" must contain only letters and digits.') % {"id": identifier}
                )
                continue
            if identifier in seen:
                errors.append(_('The subquestion identifier "%(id)s" is used more than once.') % {"id": identifier})
                continue
            seen.add(identifier)
            subq = get_combinable_type(typename).new_subq(identifier, third_param)
            error = subq.validate_third_param(third_param)
            if error:
                errors.append(error)
                continue
            self.subqs.append(subq)
        return errors

    @classmethod
    def validate_question_text(cls, questiontext):
        return cls().find_included_subqs_in_question_text(questiontext)

    @classmethod
    def from_question_text(cls, questiontext, subqformdata):
        """A combiner with every subquestion made from its authored data.

        subqformdata maps each identifier to the authored fields of that
        subquestion.
        """
        combiner = cls()
        errors = combiner.find_included_subqs_in_question_text(questiontext)
        if errors:
            raise QuestionError(errors)
        for subq in combiner.subqs:
            if subq.identifier not in subqformdata:
                raise QuestionError(f"No data for subquestion {subq.code()}")
            subq.make_question(subqformdata[subq.identifier])
        return combiner

    def find_subq(self, identifier):
        for subq in self.subqs:
            if subq.identifier == identifier:
                return subq
        raise QuestionError(f"No subquestion with identifier {identifier}")

    def render_subqs(self, questiontext, qa, options):
        """Replace each embedded code with the markup of its subquestion."""

        def render(code):
            try:
                subq = self.find_subq(code.group(1))
            except QuestionError:
                return code.group(0)
            renderer = get_embedded_renderer(subq.get_type_name())
            return renderer.subquestion(qa, options, subq, 0)

        return mark_safe(EMBEDDED_CODE.sub(render, str(conditional_escape(questiontext))))

    def call_subq(self, identifier, method, *args):
        subq = self.find_subq(identifier)
        return getattr(subq.question, method)(*args)

    def call_all_subqs(self, method, response_param=None, *args):
        """Call method on every subquestion, keyed by identifier.

        When response_param is given each subquestion gets its own slice of the
        response as first argument.
        """
        results = {}
        for subq in self.subqs:
            callargs = args
            if response_param is not None:
                callargs = (response_param.for_subq(subq),) + args
            results[subq.identifier] = getattr(subq.question, method)(*callargs)
        return results

    def get_validation_error(self, response):
        response_param = ResponseArrayParam(response)
        errors = []
        for subq in self.subqs:
            subresponse = response_param.for_subq(subq)
            if not subq.question.is_complete_response(subresponse):
                error = subq.question.get_validation_error(subresponse)
                if error and error not in errors:
                    errors.append(error)
        return mark_safe("<br />".join(str(conditional_escape(error)) for error in errors))

    def get_correct_response(self, response=None):
        response_param = ResponseArrayParam(response)
        correct = {}
        for subq in self.subqs:
            for name, value in subq.question.get_correct_response(response_param.for_subq(subq)).items():
                correct[subq.field_name(name)] = value
        return correct
