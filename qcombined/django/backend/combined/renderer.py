# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Markup for combined questions and for the subquestions embedded in them.
"""

import logging

from django.utils.safestring import SafeString, mark_safe
from django.utils.translation import gettext as _, gettext_lazy

from combined import html_writer
from combined.editors import get_texteditor
from combined.engine import QuestionState
from combined.question import SubqType
from combined.response import ResponseArrayParam

logger = logging.getLogger(__name__)

FEEDBACK_ICONS = {
    "correct": ("fa-check text-success", gettext_lazy("Correct")),
    "partiallycorrect": ("fa-check-square text-warning", gettext_lazy("Partially correct")),
    "incorrect": ("fa-remove text-danger", gettext_lazy("Incorrect")),
}


class QuestionRenderer:
    def feedback_class(self, fraction):
        return QuestionState.graded_state_for_fraction(fraction).get_feedback_class()

    def feedback_image(self, fraction, selected=True):
        feedbackclass = self.feedback_class(fraction)
        icon, title = FEEDBACK_ICONS[feedbackclass]
        if not selected:
            return SafeString("")
        return html_writer.tag(
            "i",
            "",
            {"class": f"icon fa {icon} fa-fw questioncorrectnessicon", "title": title, "role": "img", "aria-label": title},
        )


class CombinedRenderer(QuestionRenderer):
    """Generates the output for combined questions."""

    def formulation_and_controls(self, qa, options):
        question = qa.get_question()
        questiontext = question.format_questiontext(qa)
        questiontext = question.combiner.render_subqs(questiontext, qa, options)
        result = html_writer.tag("div", questiontext, {"class": "qtext"})
        if qa.get_state() == QuestionState.INVALID:
            result += html_writer.nonempty_tag(
                "div",
                question.get_validation_error(qa.get_last_step().get_all_data()),
                {"class": "validationerror"},
            )
        return result

    def specific_feedback(self, qa):
        return self.combined_feedback(qa)

    def combined_feedback(self, qa):
        question = qa.get_question()
        state = qa.get_state()
        if not state.is_finished():
            response = qa.get_last_qt_data()
            if not question.is_gradable_response(response):
                return SafeString("")
            _fraction, state = question.grade_response(response)
        feedbackclass = state.get_feedback_class()
        if not feedbackclass:
            return SafeString("")
        return question.format_feedback(f"{feedbackclass}feedback")

    def num_parts_correct(self, qa):
        num, outof = qa.get_question().get_num_parts_right(qa.get_last_qt_data())
        if outof is None:
            return ""
        return _("You have correctly answered %(num)s parts of this question.") % {"num": num, "outof": outof}

    def general_feedback(self, qa):
        return qa.get_question().format_generalfeedback(qa)

    def correct_response(self, qa):
        return ""

    def base_feedback(self, qa, options):
        output = SafeString("")
        if options.feedback:
            output += html_writer.nonempty_tag("div", self.specific_feedback(qa), {"class": "specificfeedback"})
        if options.numpartscorrect and qa.get_question().shownumcorrect:
            output += html_writer.nonempty_tag("div", self.num_parts_correct(qa), {"class": "numpartscorrect"})
        if options.generalfeedback:
            output += html_writer.nonempty_tag("div", self.general_feedback(qa), {"class": "generalfeedback"})
        if options.rightanswer:
            output += html_writer.nonempty_tag("div", self.correct_response(qa), {"class": "rightanswer"})
        return output

    def feedback(self, qa, options):
        return self.base_feedback(qa, options) + self.feedback_for_suqs_not_graded_correct(qa, options)

    def feedback_for_suqs_not_graded_correct(self, qa, options):
        feedback = SafeString("")
        if options.feedback:
            question = qa.get_question()
            mainquestionresponse = qa.get_last_step().get_all_data()
            subqresponses = ResponseArrayParam(mainquestionresponse)
            if question.is_gradable_response(mainquestionresponse):
                gradeandstates = question.combiner.call_all_subqs("grade_response", subqresponses)
                for subqno, (_fraction, state) in gradeandstates.items():
                    if state != QuestionState.GRADEDRIGHT:
                        feedback += question.combiner.call_subq(subqno, "format_generalfeedback", qa)
        return feedback


class EmbeddedRendererBase(QuestionRenderer):
    """Produces the widget for one embedded subquestion."""

    def subquestion(self, qa, options, subq, placeno):
        raise NotImplementedError


class TextEntryRendererBase(EmbeddedRendererBase):
    def subquestion(self, qa, options, subq, placeno):
        question = subq.question
        currentanswer = qa.get_last_qt_var(subq.field_name("answer"))

        inputname = qa.get_qt_field_name(subq.field_name("answer"))
        generalattributes = {
            "id": inputname,
            "class": "answer",
        }

        size = subq.get_width()

        feedbackimg = SafeString("")
        if options.correctness:
            fraction, _state = question.grade_response({"answer": currentanswer})
            generalattributes["class"] += " " + self.feedback_class(fraction)
            feedbackimg = self.feedback_image(fraction)

        editor = None
        supsuboption = subq.get_sup_sub_editor_option()
        if supsuboption is not None:
            editor = get_texteditor("supsub")
        usehtml = editor is not None

        if usehtml and options.readonly:
            input_ = html_writer.tag("span", html_writer.format_supsub(currentanswer), generalattributes)
        elif usehtml:
            textareaattributes = {"name": inputname, "rows": 2, "cols": size}
            textareaattributes.update(editor.use_editor(generalattributes["id"], {"supsub": supsuboption}))
            input_ = html_writer.tag(
                "span",
                html_writer.tag("textarea", currentanswer or "", {**textareaattributes, **generalattributes}),
                {"class": "answerwrap"},
            )
        else:
            inputattributes = {
                "type": "text",
                "size": size,
                "name": inputname,
                "value": currentanswer or "",
            }
            if options.readonly:
                inputattributes["readonly"] = "readonly"
            input_ = html_writer.empty_tag("input", {**inputattributes, **generalattributes})
        return input_ + feedbackimg


class PmatchEmbeddedRenderer(TextEntryRendererBase):
    pass


class VarNumericEmbeddedRenderer(TextEntryRendererBase):
    pass


class GapSelectEmbeddedRenderer(EmbeddedRendererBase):
    def box_id(self, qa, place):
        return qa.get_qt_field_name(place).replace(":", "_")

    def subquestion(self, qa, options, subq, placeno):
        question = subq.question
        place = placeno + 1
        group = question.places[place]

        fieldname = subq.field_name(question.field(place))

        value = qa.get_last_qt_var(fieldname)

        attributes = {
            "id": self.box_id(qa, fieldname),
        }

        if options.readonly:
            attributes["disabled"] = "disabled"

        response = qa.get_last_qt_data()
        subresponse = ResponseArrayParam(response).for_subq(subq)
        orderedchoices = question.get_ordered_choices(group, subresponse)
        selectoptions = {}
        for orderedchoicevalue, orderedchoice in orderedchoices.items():
            selectoptions[orderedchoicevalue] = orderedchoice.text

        feedbackimage = SafeString("")
        if options.correctness:
            if fieldname in response:
                fraction = int(str(response[fieldname]) == str(question.get_right_choice_for(place, subresponse)))
                attributes["class"] = self.feedback_class(fraction)
                feedbackimage = self.feedback_image(fraction)

        selecthtml = html_writer.join(
            html_writer.select(selectoptions, qa.get_qt_field_name(fieldname), value, _("Choose..."), attributes),
            " ",
            feedbackimage,
        )
        return html_writer.tag("span", selecthtml, {"class": "control"})


class OuMultiResponseEmbeddedRenderer(EmbeddedRendererBase):
    def subquestion(self, qa, options, subq, placeno):
        question = subq.question
        fullresponse = ResponseArrayParam(qa.get_last_qt_data())
        response = fullresponse.for_subq(subq)

        commonattributes = {
            "type": "checkbox",
        }

        if options.readonly:
            commonattributes["disabled"] = "disabled"

        checkboxes = []
        feedbackimg = []
        classes = []
        for value, ansid in question.get_order(response).items():
            inputname = qa.get_qt_field_name(subq.field_name(question.field(value)))
            ans = question.answers[ansid]
            inputattributes = {
                "name": inputname,
                "value": 1,
                "id": inputname,
            }
            isselected = question.is_choice_selected(response, value)
            if isselected:
                inputattributes["checked"] = "checked"
            hidden = SafeString("")
            if not options.readonly:
                hidden = html_writer.empty_tag("input", {"type": "hidden", "name": inputname, "value": 0})
            cblabel = question.make_html_inline(question.format_text(ans.answer, ans.answerformat))
            cblabeltag = html_writer.tag("label", cblabel, {"for": inputattributes["id"]})

            checkboxes.append(
                html_writer.join(hidden, html_writer.empty_tag("input", {**inputattributes, **commonattributes}), cblabeltag)
            )

            class_ = "r" + str(value % 2)
            if options.correctness and isselected:
                iscbcorrect = 1 if ans.fraction > 0 else 0
                feedbackimg.append(self.feedback_image(iscbcorrect))
                class_ += " " + self.feedback_class(iscbcorrect)
            else:
                feedbackimg.append(SafeString(""))
            classes.append(class_)

        if subq.get_layout() == "h":
            inputwraptag = "span"
        else:
            inputwraptag = "div"

        cbhtml = SafeString("")
        for key, checkbox in enumerate(checkboxes):
            cbhtml += html_writer.tag(inputwraptag, html_writer.join(checkbox, " ", feedbackimg[key]), {"class": classes[key]})
            cbhtml += mark_safe("\n")

        return html_writer.tag(inputwraptag, cbhtml, {"class": "answer"})


embedded_renderer_dispatch = {
    SubqType.PMATCH: PmatchEmbeddedRenderer,
    SubqType.VARNUMERIC: VarNumericEmbeddedRenderer,
    SubqType.GAPSELECT: GapSelectEmbeddedRenderer,
    SubqType.OUMULTIRESPONSE: OuMultiResponseEmbeddedRenderer,
}


def get_embedded_renderer(subqtype):
    return embedded_renderer_dispatch[SubqType(subqtype)]()
