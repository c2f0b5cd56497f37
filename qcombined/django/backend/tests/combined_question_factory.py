# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

import logging
from typing import Any

from faker.proxy import Faker

from combined.combiner import Combiner
from combined.questiontypes.combined import CombinedQuestion

from .abstract_entity_factory import AbstractEntityFactory

logger = logging.getLogger(__name__)

QUESTIONTEXT = (
    "<p>The cat sat on the [[1:pmatch:__15__]].</p>"
    "<p>The colour of grass is [[2:gapselect]].</p>"
    "<p>Which of these are animals? [[3:oumultiresponse:h]]</p>"
    "<p>A cat has [[4:varnumeric:__5__]] legs.</p>"
)


class CombinedQuestionFactory(AbstractEntityFactory[CombinedQuestion]):
    """Builds combined questions with one subquestion of every type.

    The feedback texts contain fake data populated using Faker so that tests
    can tell them apart.

    """

    def __init__(self, faker: Faker) -> None:
        super().__init__(faker)

    def subq_data(self) -> dict[str, dict[str, Any]]:
        return {
            "1": {
                "answer": ["match_mw(mat|rug)"],
                "usecase": 0,
                "allowsubscript": 0,
                "allowsuperscript": 0,
                "applydictionarycheck": 1,
                "generalfeedback": f"<p>{self.faker.unique.sentence()}</p>",
            },
            "2": {
                "answer": ["green", "red", "blue"],
                "shuffleanswers": 0,
                "generalfeedback": f"<p>{self.faker.unique.sentence()}</p>",
            },
            "3": {
                "answer": ["Cat", "Dog", "Stone"],
                "correctanswer": [1, 1, 0],
                "shuffleanswers": 0,
                "generalfeedback": f"<p>{self.faker.unique.sentence()}</p>",
            },
            "4": {
                "answer": ["4"],
                "error": ["0"],
                "requirescinotation": 0,
                "generalfeedback": f"<p>{self.faker.unique.sentence()}</p>",
            },
        }

    def build(self, **kwargs: Any) -> CombinedQuestion:
        questiontext = kwargs.pop("questiontext", QUESTIONTEXT)
        subqdata = kwargs.pop("subqdata", None) or self.subq_data()
        combiner = Combiner.from_question_text(questiontext, subqdata)
        defaults = {
            "name": self.faker.sentence(nb_words=3),
            "questiontext": questiontext,
            "generalfeedback": f"<p>{self.faker.sentence()}</p>",
            "correctfeedback": "<p>Well done.</p>",
            "partiallycorrectfeedback": "<p>Parts of your answer are correct.</p>",
            "incorrectfeedback": "<p>That is not right.</p>",
            "shownumcorrect": True,
        }
        defaults.update(kwargs)
        question = CombinedQuestion(combiner=combiner, **defaults)
        self._default = question
        return question
