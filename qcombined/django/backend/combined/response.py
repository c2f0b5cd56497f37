# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Splitting the flat response of a combined question into one response per
subquestion. Subquestion fields are named "<identifier>:<name>".
"""

import logging

logger = logging.getLogger(__name__)


class ResponseArrayParam:
    def __init__(self, response):
        self.response = dict(response or {})
        self.by_subq = {}
        for key, value in self.response.items():
            identifier, sep, name = str(key).partition(":")
            if sep and identifier and name:
                self.by_subq.setdefault(identifier, {})[name] = value

    def for_subq(self, subq):
        return dict(self.by_subq.get(subq.get_identifier(), {}))

    def identifiers(self):
        return list(self.by_subq)

    def __repr__(self):
        return f"ResponseArrayParam({self.by_subq!r})"
