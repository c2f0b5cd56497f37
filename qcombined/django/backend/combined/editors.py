# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Registry of rich text editors that can be attached to answer inputs.

An editor is only handed out when it is both registered and enabled in
settings.COMBINED_TEXT_EDITORS; callers treat a None result as "use a plain
input".
"""

import logging

from django.conf import settings

logger = logging.getLogger(__name__)

texteditor_dispatch = {}


class SupSubEditor:
    """Superscript/subscript editor for single line answers.

    The editor keeps no state: use_editor returns the attributes that mark an
    element for the editor script on the page.
    """

    name = "supsub"

    def use_editor(self, elementid, options):
        supsub = options.get("supsub")
        if supsub not in ("sub", "sup", "both"):
            logger.error(f"SUPSUB UNKNOWN OPTION {supsub} FOR {elementid}")
            return {}
        logger.debug(f"SUPSUB EDITOR {supsub} ON {elementid}")
        return {"data-editor": self.name, "data-supsub": supsub}


def register_texteditor(name, editor):
    texteditor_dispatch[name] = editor


def get_texteditor(name):
    if name not in getattr(settings, "COMBINED_TEXT_EDITORS", []):
        return None
    editor = texteditor_dispatch.get(name)
    if editor is None:
        logger.info(f"TEXT EDITOR {name} IS ENABLED BUT NOT REGISTERED")
        return None
    return editor


register_texteditor(SupSubEditor.name, SupSubEditor())
