# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging
import re

from django import forms
from django.utils.translation import gettext, gettext_lazy

from combined.combiner import Combiner
from combined.questiontypes.combined import CombinedQuestion

logger = logging.getLogger(__name__)

PARAM_RAW = "raw"
PARAM_RAW_TRIMMED = "raw_trimmed"

INDEXED_NAME = re.compile(r"^(\w+)\[(\d+)\]$")


class FormElement:
    def __init__(self, kind, name, label, field):
        self.kind = kind
        self.name = name
        self.label = label
        self.field = field


class FormBuilder:
    """Declarative registration of authoring widgets on a Django form.

    Subquestion types describe their fields through this object so they do
    not have to know how the combined form is put together.
    """

    def __init__(self, form):
        self.form = form
        self.groups = {}

    def create_element(self, kind, name, label="", *args):
        if kind == "selectyesno":
            field = forms.TypedChoiceField(
                label=label,
                choices=[(0, gettext("No")), (1, gettext("Yes"))],
                coerce=int,
                empty_value=0,
                required=False,
                initial=0,
            )
        elif kind == "select":
            menu = args[0] if args else []
            choices = list(menu.items()) if isinstance(menu, dict) else list(enumerate(menu))
            field = forms.TypedChoiceField(label=label, choices=choices, coerce=int, empty_value=0, required=False, initial=0)
        elif kind == "textarea":
            attrs = dict(args[0]) if args else {}
            field = forms.CharField(label=label, required=False, widget=forms.Textarea(attrs=attrs))
        elif kind == "editor":
            attrs = dict(args[0]) if args else {"rows": "3"}
            field = forms.CharField(label=label, required=False, strip=False, widget=forms.Textarea(attrs=attrs))
        elif kind == "text":
            attrs = dict(args[0]) if args else {}
            field = forms.CharField(label=label, required=False, widget=forms.TextInput(attrs=attrs))
        elif kind == "float":
            field = forms.FloatField(label=label, required=False)
        else:
            raise ValueError(f"Unknown form element {kind}")
        return FormElement(kind, name, label, field)

    def add_element(self, kind, name, label="", *args):
        element = self.create_element(kind, name, label, *args)
        self.form.fields[name] = element.field
        return element

    def add_group(self, elements, groupname, label="", separator=" ", appendname=False):
        names = []
        for element in elements:
            name = f"{groupname}[{element.name}]" if appendname else element.name
            self.form.fields[name] = element.field
            names.append(name)
        self.groups[groupname] = {"label": label, "separator": separator, "elements": names}
        return self.groups[groupname]

    def set_default(self, name, value):
        if name in self.form.fields:
            self.form.fields[name].initial = value

    def set_type(self, name, paramtype):
        """Whether submitted text for name, or every name[i], keeps its surrounding white space."""
        if paramtype not in (PARAM_RAW, PARAM_RAW_TRIMMED):
            raise ValueError(f"Unknown parameter type {paramtype}")
        for fieldname, field in self.form.fields.items():
            if fieldname == name or fieldname.startswith(name + "["):
                if isinstance(field, forms.CharField):
                    field.strip = paramtype == PARAM_RAW_TRIMMED


class CombinedQuestionForm(forms.Form):
    """Authoring form: question text plus one fragment per embedded subquestion.

    The subquestion fragments follow the placeholders in the question text,
    read from the bound data (or the initial data when unbound).
    """

    name = forms.CharField(label=gettext_lazy("Question name"), max_length=255)
    questiontext = forms.CharField(label=gettext_lazy("Question text"), widget=forms.Textarea(attrs={"rows": 15}))
    generalfeedback = forms.CharField(label=gettext_lazy("General feedback"), required=False, widget=forms.Textarea)
    correctfeedback = forms.CharField(label=gettext_lazy("For any correct response"), required=False, widget=forms.Textarea)
    partiallycorrectfeedback = forms.CharField(
        label=gettext_lazy("For any partially correct response"), required=False, widget=forms.Textarea
    )
    incorrectfeedback = forms.CharField(label=gettext_lazy("For any incorrect response"), required=False, widget=forms.Textarea)
    shownumcorrect = forms.BooleanField(label=gettext_lazy("Show the number of correct responses"), required=False, initial=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.builder = FormBuilder(self)
        if self.is_bound:
            questiontext = self.data.get("questiontext", "")
        else:
            questiontext = self.initial.get("questiontext", "")
        self.combiner = Combiner()
        self.questiontext_errors = self.combiner.find_included_subqs_in_question_text(questiontext or "")
        for subq in self.combiner.subqs:
            self.add_subq_fragment(subq)

    def add_subq_fragment(self, subq):
        builder = self.builder
        builder.add_element(
            "float",
            subq.form_field_name("defaultmark"),
            gettext("Weighting for %(code)s") % {"code": subq.code()},
        )
        builder.set_default(subq.form_field_name("defaultmark"), 1)
        subq.add_form_fragment(builder)
        builder.add_element("editor", subq.form_field_name("generalfeedback"), gettext("Feedback if this part is not right"))

    def get_subq_form_data(self, subq):
        prefix = subq.form_field_name("")
        formdata = {}
        for key, value in self.cleaned_data.items():
            if not key.startswith(prefix):
                continue
            short = key[len(prefix):]
            indexed = INDEXED_NAME.match(short)
            if indexed:
                name, index = indexed.group(1), int(indexed.group(2))
                values = formdata.setdefault(name, [])
                values.extend([""] * (index + 1 - len(values)))
                values[index] = value
            else:
                formdata[short] = value
        return formdata

    def clean(self):
        cleaned_data = super().clean()
        for error in self.questiontext_errors:
            self.add_error("questiontext", error)
        for subq in self.combiner.subqs:
            formdata = self.get_subq_form_data(subq)
            subq.set_form_data(formdata)
            if subq.type.is_empty(formdata):
                self.add_error(
                    subq.form_field_name("defaultmark"),
                    gettext("You need to fill in the details of subquestion %(code)s.") % {"code": subq.code()},
                )
                continue
            for fieldname, message in subq.validate().items():
                logger.info(f"SUBQUESTION {subq.code()} FIELD {fieldname} INVALID: {message}")
                self.add_error(fieldname, message)
        return cleaned_data

    def make_question(self):
        """The CombinedQuestion described by a valid form."""
        data = self.cleaned_data
        for subq in self.combiner.subqs:
            subq.make_question()
        return CombinedQuestion(
            combiner=self.combiner,
            name=data["name"],
            questiontext=data["questiontext"],
            generalfeedback=data.get("generalfeedback", ""),
            correctfeedback=data.get("correctfeedback", ""),
            partiallycorrectfeedback=data.get("partiallycorrectfeedback", ""),
            incorrectfeedback=data.get("incorrectfeedback", ""),
            shownumcorrect=data.get("shownumcorrect", False),
        )
