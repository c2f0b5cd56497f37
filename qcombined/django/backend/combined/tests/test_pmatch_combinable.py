# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

from django import forms
from django.test import SimpleTestCase

from combined.combinable.pmatch import CombinablePmatch, CombinablePmatchType
from combined.forms import PARAM_RAW, FormBuilder
from combined.question import SubqType, get_combinable_type
from combined.questiontypes.pmatch import PmatchQuestion


def untouched_fragment(**changes):
    formdata = {
        "usecase": 0,
        "allowsubscript": 0,
        "allowsuperscript": 0,
        "applydictionarycheck": 1,
        "answer": [""],
        "generalfeedback": "",
    }
    formdata.update(changes)
    return formdata


class Test1_PmatchIsEmpty(SimpleTestCase):

    def setUp(self):
        self.type = get_combinable_type(SubqType.PMATCH)

    def test_registered(self):
        self.assertIsInstance(self.type, CombinablePmatchType)
        self.assertIs(self.type.combinable_class, CombinablePmatch)

    def test_untouched_fragment_is_empty(self):
        self.assertTrue(self.type.is_empty(untouched_fragment()))
        self.assertTrue(self.type.is_empty(untouched_fragment(answer=["   "])))
        self.assertTrue(self.type.is_empty(untouched_fragment(usecase="0", applydictionarycheck="1")))

    def test_any_change_makes_it_non_empty(self):
        for changes in [
            {"usecase": 1},
            {"allowsubscript": 1},
            {"allowsuperscript": 1},
            {"applydictionarycheck": 0},
            {"answer": ["match(mat)"]},
            {"generalfeedback": "<p>Think of a floor covering.</p>"},
        ]:
            self.assertFalse(self.type.is_empty(untouched_fragment(**changes)), changes)

    def test_missing_dictionary_check_is_not_default(self):
        formdata = untouched_fragment()
        del formdata["applydictionarycheck"]
        self.assertFalse(self.type.is_empty(formdata))


class Test2_PmatchValidate(SimpleTestCase):

    def setUp(self):
        self.subq = get_combinable_type("pmatch").new_subq("1", "__20__")

    def test_valid_expression(self):
        self.subq.set_form_data(untouched_fragment(answer=["match_mw(mat|rug)"]))
        self.assertEqual(self.subq.validate(), {})

    def test_blank_answer_is_not_checked(self):
        self.subq.set_form_data(untouched_fragment())
        self.assertEqual(self.subq.validate(), {})

    def test_invalid_expression(self):
        self.subq.set_form_data(untouched_fragment(answer=["match_mw(mat|rug"]))
        errors = self.subq.validate()
        self.assertEqual(list(errors), ["subq:pmatch:1:answer[0]"])
        self.assertIn('")"', errors["subq:pmatch:1:answer[0]"])

    def test_unknown_function(self):
        self.subq.set_form_data(untouched_fragment(answer=["fetch(mat)"]))
        self.assertEqual(self.subq.validate(), {"subq:pmatch:1:answer[0]": 'Unknown function "fetch".'})


class Test3_PmatchFormFragment(SimpleTestCase):

    def setUp(self):
        self.form = forms.Form()
        self.builder = FormBuilder(self.form)
        self.subq = get_combinable_type("pmatch").new_subq("colour")
        self.subq.add_form_fragment(self.builder)

    def test_groups(self):
        self.assertEqual(
            self.builder.groups["subq:pmatch:colour:susubels"]["elements"],
            ["subq:pmatch:colour:allowsubscript", "subq:pmatch:colour:allowsuperscript"],
        )
        self.assertEqual(
            self.builder.groups["subq:pmatch:colour:casedictels"]["elements"],
            ["subq:pmatch:colour:usecase", "subq:pmatch:colour:applydictionarycheck"],
        )

    def test_case_menu(self):
        field = self.form.fields["subq:pmatch:colour:usecase"]
        self.assertEqual([label for (_value, label) in field.choices], ["No, case is unimportant", "Yes, case must match"])

    def test_dictionary_check_defaults_on(self):
        self.assertEqual(self.form.fields["subq:pmatch:colour:applydictionarycheck"].initial, 1)
        self.assertEqual(self.form.fields["subq:pmatch:colour:allowsubscript"].initial, 0)

    def test_answer_textarea(self):
        field = self.form.fields["subq:pmatch:colour:answer[0]"]
        self.assertIsInstance(field.widget, forms.Textarea)
        self.assertEqual(field.widget.attrs["rows"], "6")
        self.assertEqual(field.widget.attrs["cols"], "80")
        self.assertEqual(field.widget.attrs["class"], "textareamonospace")
        self.assertTrue(field.strip)

    def test_raw_answers_keep_white_space(self):
        self.builder.set_type("subq:pmatch:colour:answer", PARAM_RAW)
        self.assertFalse(self.form.fields["subq:pmatch:colour:answer[0]"].strip)
        with self.assertRaises(ValueError):
            self.builder.set_type("subq:pmatch:colour:answer", "float")


class Test4_PmatchMakeQuestion(SimpleTestCase):

    def test_make_question(self):
        subq = get_combinable_type("pmatch").new_subq("1")
        question = subq.make_question(
            untouched_fragment(answer=["  match_w(Mat)  "], usecase="1", allowsuperscript=1, defaultmark=2)
        )
        self.assertIsInstance(question, PmatchQuestion)
        self.assertEqual(question.answers[0].answer, "match_w(Mat)")
        self.assertEqual(question.answers[0].fraction, 1.0)
        self.assertTrue(question.usecase)
        self.assertTrue(question.applydictionarycheck)
        self.assertEqual(question.defaultmark, 2.0)
        self.assertEqual(question.converttospace, ",;:")
        self.assertEqual(subq.get_sup_sub_editor_option(), "sup")
        self.assertEqual(subq.get_width(), 20)

    def test_width_specifier(self):
        pmatch = get_combinable_type("pmatch")
        self.assertEqual(pmatch.new_subq("1", "__15__").get_width(), 15)
        self.assertEqual(pmatch.new_subq("1", "_______").get_width(), 7)
        self.assertIsNone(pmatch.new_subq("1").validate_third_param("__3__"))
        self.assertNotEqual(pmatch.new_subq("1").validate_third_param("wide"), None)
