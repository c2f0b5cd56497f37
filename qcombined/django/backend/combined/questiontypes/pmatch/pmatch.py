# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging
import re

from django.conf import settings
from django.utils.html import strip_tags
from django.utils.translation import gettext as _

from combined.questiontypes.base import FORMAT_PLAIN, Question
from .expression import PmatchExpression

logger = logging.getLogger(__name__)

MAX_WORDS = 20


class PmatchAnswer:
    def __init__(self, answer, fraction=1.0, feedback="", feedbackformat=FORMAT_PLAIN):
        self.answer = answer
        self.fraction = float(fraction)
        self.feedback = feedback
        self.feedbackformat = feedbackformat


class PmatchQuestion(Question):
    """Short answer graded by the first pattern match expression that fits."""

    qtype = "pmatch"

    def __init__(
        self,
        answers=None,
        usecase=False,
        allowsubscript=False,
        allowsuperscript=False,
        applydictionarycheck=True,
        forcelength=False,
        extenddictionary="",
        converttospace=None,
        synonymsdata=None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.answers = list(answers or [])
        self.usecase = bool(int(usecase))
        self.allowsubscript = bool(int(allowsubscript))
        self.allowsuperscript = bool(int(allowsuperscript))
        self.applydictionarycheck = bool(int(applydictionarycheck))
        self.forcelength = bool(int(forcelength))
        self.extenddictionary = extenddictionary
        if converttospace is None:
            converttospace = settings.PMATCH_CONVERT_TO_SPACE
        self.converttospace = converttospace
        self.synonyms = {}
        for synonym in synonymsdata or []:
            for word in synonym.get("synonyms", "").split():
                self.synonyms[self.fold(word)] = self.fold(synonym["word"])
        self._expressions = {}

    def fold(self, text):
        return text if self.usecase else text.lower()

    def expression_for(self, answer):
        if answer.answer not in self._expressions:
            expression = PmatchExpression(answer.answer)
            if not self.usecase:
                expression = expression.lowercased()
            self._expressions[answer.answer] = expression
        return self._expressions[answer.answer]

    def response_words(self, text):
        text = strip_tags(text or "")
        if self.converttospace:
            text = re.sub("[" + re.escape(self.converttospace) + "]", " ", text)
        words = [self.fold(word) for word in text.split()]
        if words:
            words[-1] = words[-1].rstrip(".!?") or words[-1]
        return [self.synonyms.get(word, word) for word in words]

    def is_blank(self, response):
        return (response.get("answer") or "").strip() == ""

    def is_gradable_response(self, response):
        return not self.is_blank(response)

    def is_complete_response(self, response):
        if self.is_blank(response):
            return False
        if self.forcelength and len(self.response_words(response["answer"])) > MAX_WORDS:
            return False
        return True

    def get_validation_error(self, response):
        if self.is_blank(response):
            return _("Please enter an answer.")
        if not self.is_complete_response(response):
            return _("Please submit a shorter answer of %(max)s words or fewer.") % {"max": MAX_WORDS}
        return ""

    def get_matching_answer(self, response):
        words = self.response_words(response.get("answer"))
        for answer in self.answers:
            if self.expression_for(answer).matches(words):
                return answer
        return None

    def grade_response(self, response):
        answer = self.get_matching_answer(response)
        fraction = answer.fraction if answer is not None else 0.0
        if settings.RUNNING_DEVSERVER:
            logger.info(f"PMATCH GRADE {response.get('answer')!r} FRACTION={fraction}")
        return self.graded(fraction)

    def get_sup_sub_editor_option(self):
        if self.allowsubscript and self.allowsuperscript:
            return "both"
        elif self.allowsubscript:
            return "sub"
        elif self.allowsuperscript:
            return "sup"
        return None
