# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Small markup helpers on top of django.utils.html.

Contents passed to tag() are escaped unless they are already marked safe, so
markup produced by these helpers can be nested freely.
"""

import logging
import re

from django.forms.utils import flatatt
from django.utils.html import conditional_escape, escape, format_html
from django.utils.safestring import SafeString, mark_safe
from django.utils.translation import gettext as _

logger = logging.getLogger(__name__)

SUPSUB_TAGS = re.compile(r"&lt;(/?)(sub|sup)&gt;")


def _attributes(attributes):
    attrs = {}
    for key, val in (attributes or {}).items():
        if val is None:
            continue
        attrs[key] = val if isinstance(val, bool) else str(val)
    return flatatt(attrs)


def tag(tagname, contents, attributes=None):
    return format_html("<{}{}>{}</{}>", mark_safe(tagname), _attributes(attributes), contents, mark_safe(tagname))


def nonempty_tag(tagname, contents, attributes=None):
    if contents is None or contents == "":
        return SafeString("")
    return tag(tagname, contents, attributes)


def empty_tag(tagname, attributes=None):
    return format_html("<{}{} />", mark_safe(tagname), _attributes(attributes))


def select(options, name, selected="", nothing=None, attributes=None):
    """A <select> menu.

    options maps option values to labels. The empty choice labelled by
    nothing comes first unless nothing is False.
    """
    attributes = dict(attributes or {})
    if nothing is None:
        nothing = _("Choose...")
    attributes.setdefault("id", "menu" + re.sub(r"[^a-zA-Z0-9_]", "", name))
    classes = ["select", "custom-select"]
    if attributes.get("class"):
        classes.append(attributes["class"])
    attributes["class"] = " ".join(classes)
    attributes["name"] = name

    selected = "" if selected is None else str(selected)
    output = []
    if nothing is not False:
        output.append(option("", nothing, selected == ""))
    for value, label in options.items():
        output.append(option(value, label, str(value) == selected))
    return tag("select", mark_safe("".join(output)), attributes)


def option(value, label, selected=False):
    attributes = {"value": str(value)}
    if selected:
        attributes["selected"] = "selected"
    return tag("option", label, attributes)


def join(*parts):
    return mark_safe("".join(conditional_escape(part) for part in parts))


def format_supsub(text):
    """Escape text but let <sub> and <sup> through."""
    if text is None:
        return SafeString("")
    return mark_safe(SUPSUB_TAGS.sub(r"<\1\2>", escape(text)))
