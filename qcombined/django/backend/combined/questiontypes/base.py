# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging
import re

from django.utils.html import conditional_escape, strip_tags
from django.utils.safestring import SafeString, mark_safe

from combined.engine import QuestionState

logger = logging.getLogger(__name__)

FORMAT_HTML = "html"
FORMAT_PLAIN = "plain"


def html_is_blank(text):
    if text is None:
        return True
    return strip_tags(str(text)).replace("&nbsp;", " ").strip() == ""


def join_order(order):
    return ",".join(str(item) for item in order)


def split_order(saved, default):
    """The order saved by join_order, or default when nothing usable was saved."""
    if saved in (None, ""):
        return list(default)
    try:
        order = [int(item) for item in str(saved).split(",")]
    except ValueError:
        order = None
    if order is None or sorted(order) != sorted(default):
        logger.warning(f"IGNORING SAVED ORDER {saved!r}")
        return list(default)
    return order


def format_text(text, textformat=FORMAT_HTML):
    """Authored html is trusted as is; plain text is escaped."""
    if text is None:
        return SafeString("")
    if textformat == FORMAT_PLAIN:
        return mark_safe(conditional_escape(text).replace("\n", "<br />"))
    return mark_safe(text)


class Question:
    """Behaviour shared by every gradable question type."""

    qtype = None

    def __init__(self, name="", questiontext="", generalfeedback="", defaultmark=1.0, questiontextformat=FORMAT_HTML):
        self.name = name
        self.questiontext = questiontext
        self.questiontextformat = questiontextformat
        self.generalfeedback = generalfeedback
        self.defaultmark = float(defaultmark)

    def start_attempt(self, rng=None):
        """Variables fixed for the lifetime of one attempt, such as a shuffled order."""
        return {}

    def format_questiontext(self, qa):
        return format_text(self.questiontext, self.questiontextformat)

    def format_generalfeedback(self, qa):
        return format_text(self.generalfeedback)

    def format_text(self, text, textformat=FORMAT_HTML, *args):
        return format_text(text, textformat)

    def make_html_inline(self, html):
        """Strip the surrounding paragraph so html fits inside a label."""
        html = re.sub(r"^\s*<p>\s*(.*?)\s*</p>\s*$", r"\1", str(html), flags=re.S)
        html = re.sub(r"\s*</p>\s*<p>\s*", "<br />", html)
        return mark_safe(html.strip())

    def is_complete_response(self, response):
        raise NotImplementedError

    def is_gradable_response(self, response):
        return self.is_complete_response(response)

    def get_validation_error(self, response):
        return ""

    def grade_response(self, response):
        raise NotImplementedError

    def get_correct_response(self, response=None):
        return {}

    @staticmethod
    def graded(fraction):
        return fraction, QuestionState.graded_state_for_fraction(fraction)
