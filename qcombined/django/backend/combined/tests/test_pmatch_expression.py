# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

from unittest import TestCase

from combined.questiontypes.pmatch import PmatchAnswer, PmatchExpression, PmatchQuestion
from combined.questiontypes.pmatch.expression import MatchOptions, misspelling_distance


def words(text):
    return text.lower().split()


class Test1_PmatchSyntax(TestCase):

    def test_valid_expressions(self):
        for text in [
            "match(mat)",
            "match_w(tom|dick|harry)",
            "match_mow(the cat_sat)",
            "match_all( match_w(cat) not(match_w(dog)) )",
            "match_any(match(mat) match(rug))",
            "match_c(colo*r)",
            "match_m2(photosynthesis)",
            "match_w([on the] mat)",
        ]:
            expression = PmatchExpression(text)
            self.assertTrue(expression.is_valid(), f"{text}: {expression.get_parse_error()}")
            self.assertEqual(expression.get_parse_error(), "")

    def test_invalid_expressions(self):
        for text in [
            "",
            "match(mat",
            "mat",
            "match()",
            "match_q(mat)",
            "fetch(mat)",
            "not(match(a) match(b))",
            "match_all()",
            "match(mat) trailing",
            "match(_mat)",
            "match(mat_)",
            "match([on the mat)",
        ]:
            expression = PmatchExpression(text)
            self.assertFalse(expression.is_valid(), text)
            self.assertNotEqual(expression.get_parse_error(), "", text)

    def test_invalid_expression_never_matches(self):
        self.assertFalse(PmatchExpression("match(mat").matches(["mat"]))

    def test_options_are_tokenised(self):
        options = MatchOptions("m2ow")
        self.assertTrue(options.any_order)
        self.assertTrue(options.extra_words)
        self.assertEqual(options.max_misspellings, 2)
        self.assertEqual(options.misspellings, {"f", "r", "t", "x"})


class Test2_PmatchMatching(TestCase):

    def test_exact(self):
        expression = PmatchExpression("match(the mat)")
        self.assertTrue(expression.matches(words("the mat")))
        self.assertFalse(expression.matches(words("mat the")))
        self.assertFalse(expression.matches(words("the red mat")))
        self.assertFalse(expression.matches([]))

    def test_extra_words_and_order(self):
        self.assertTrue(PmatchExpression("match_w(the mat)").matches(words("the red mat")))
        self.assertFalse(PmatchExpression("match_w(the mat)").matches(words("mat the")))
        self.assertTrue(PmatchExpression("match_ow(the mat)").matches(words("mat is the")))

    def test_proximity(self):
        self.assertTrue(PmatchExpression("match_w(red_mat)").matches(words("a red mat")))
        self.assertFalse(PmatchExpression("match_w(red_mat)").matches(words("red big mat")))

    def test_alternatives_and_phrases(self):
        expression = PmatchExpression("match(mat|rug|[door mat])")
        self.assertTrue(expression.matches(words("rug")))
        self.assertTrue(expression.matches(words("door mat")))
        self.assertFalse(expression.matches(words("floor")))

    def test_wildcards(self):
        self.assertTrue(PmatchExpression("match(colo*r)").matches(words("colour")))
        self.assertTrue(PmatchExpression("match(m?t)").matches(words("mat")))
        self.assertFalse(PmatchExpression("match(m?t)").matches(words("moat")))

    def test_extra_characters(self):
        self.assertTrue(PmatchExpression("match_c(mat)").matches(words("mats")))
        self.assertFalse(PmatchExpression("match(mat)").matches(words("mats")))

    def test_misspellings(self):
        self.assertTrue(PmatchExpression("match_m(mat)").matches(words("mta")))
        self.assertTrue(PmatchExpression("match_mx(mat)").matches(words("maat")))
        self.assertFalse(PmatchExpression("match_mf(mat)").matches(words("maat")))
        self.assertTrue(PmatchExpression("match_m2(photosynthesis)").matches(words("fotosynthesis")))
        self.assertFalse(PmatchExpression("match_m(photosynthesis)").matches(words("fotosynthesys")))
        self.assertEqual(misspelling_distance("cat", "cot", {"r"}, 1), 1)
        self.assertEqual(misspelling_distance("cat", "dog", {"r"}, 1), 2)

    def test_combinations(self):
        expression = PmatchExpression("match_all(match_w(cat) not(match_w(dog)))")
        self.assertTrue(expression.matches(words("a cat sat")))
        self.assertFalse(expression.matches(words("a cat and a dog")))
        expression = PmatchExpression("match_any(match(cat) match(dog))")
        self.assertTrue(expression.matches(words("dog")))


class Test3_PmatchQuestion(TestCase):

    def test_grade_first_matching_answer(self):
        question = PmatchQuestion(
            answers=[PmatchAnswer("match_w(mat)", 1), PmatchAnswer("match_w(rug)", 0.5)],
        )
        fraction, state = question.grade_response({"answer": "On the Mat."})
        self.assertEqual(fraction, 1.0)
        self.assertEqual(state.get_feedback_class(), "correct")
        fraction, state = question.grade_response({"answer": "the rug"})
        self.assertEqual(fraction, 0.5)
        self.assertEqual(state.get_feedback_class(), "partiallycorrect")
        fraction, state = question.grade_response({"answer": None})
        self.assertEqual(fraction, 0.0)
        self.assertEqual(state.get_feedback_class(), "incorrect")

    def test_case_sensitivity(self):
        question = PmatchQuestion(answers=[PmatchAnswer("match(Paris)")], usecase=True)
        self.assertEqual(question.grade_response({"answer": "Paris"})[0], 1.0)
        self.assertEqual(question.grade_response({"answer": "paris"})[0], 0.0)
        question = PmatchQuestion(answers=[PmatchAnswer("match(Paris)")], usecase=False)
        self.assertEqual(question.grade_response({"answer": "PARIS"})[0], 1.0)

    def test_convert_to_space_and_synonyms(self):
        question = PmatchQuestion(
            answers=[PmatchAnswer("match(cat dog)")],
            synonymsdata=[{"word": "dog", "synonyms": "hound puppy"}],
        )
        self.assertEqual(question.grade_response({"answer": "cat,dog"})[0], 1.0)
        self.assertEqual(question.grade_response({"answer": "cat; puppy"})[0], 1.0)

    def test_completeness(self):
        question = PmatchQuestion(answers=[PmatchAnswer("match_w(mat)")], forcelength=True)
        self.assertFalse(question.is_complete_response({"answer": "   "}))
        self.assertEqual(question.get_validation_error({"answer": ""}), "Please enter an answer.")
        self.assertTrue(question.is_complete_response({"answer": "mat"}))
        self.assertFalse(question.is_complete_response({"answer": " ".join(["word"] * 21)}))
        self.assertTrue(question.is_gradable_response({"answer": " ".join(["word"] * 21)}))

    def test_sup_sub_editor_option(self):
        self.assertIsNone(PmatchQuestion().get_sup_sub_editor_option())
        self.assertEqual(PmatchQuestion(allowsubscript=1).get_sup_sub_editor_option(), "sub")
        self.assertEqual(PmatchQuestion(allowsuperscript=1).get_sup_sub_editor_option(), "sup")
        self.assertEqual(PmatchQuestion(allowsubscript=1, allowsuperscript=1).get_sup_sub_editor_option(), "both")
