# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging

from django.db import models
from django.utils.translation import gettext_lazy

logger = logging.getLogger(__name__)

combinable_type_dispatch = {}


class QuestionError(Exception):
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return repr(self.value)


class SubqType(models.TextChoices):
    """The kinds of subquestion that can be embedded in a combined question."""

    PMATCH = "pmatch", gettext_lazy("Pattern match")
    VARNUMERIC = "varnumeric", gettext_lazy("Variable numeric")
    GAPSELECT = "gapselect", gettext_lazy("Select missing words")
    OUMULTIRESPONSE = "oumultiresponse", gettext_lazy("Multiple response")


def register_combinable_type(typeobj):
    subqtype = SubqType(typeobj.identifier)
    combinable_type_dispatch[subqtype] = typeobj
    logger.debug(f"REGISTERED COMBINABLE TYPE {subqtype.value}")


def get_combinable_type(subqtype):
    try:
        return combinable_type_dispatch[SubqType(subqtype)]
    except (KeyError, ValueError):
        raise QuestionError(f"Subquestion type {subqtype} is not registered")


def registered_types():
    return [subqtype for subqtype in SubqType if subqtype in combinable_type_dispatch]
