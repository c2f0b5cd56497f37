# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Configuration used by all Pytest tests.
"""

import logging
import pytest

from faker.proxy import Faker
from lxml import html as lxmlhtml

from combined.engine import DisplayOptions, QuestionAttempt
from combined.questiontypes.combined import CombinedQuestion
from tests.factory import Factory

logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def faker() -> Faker:
    return Faker()


@pytest.fixture(autouse=True)
def factory() -> Factory:
    return Factory()


@pytest.fixture
def combined_question(factory: Factory) -> CombinedQuestion:
    return factory.build(CombinedQuestion)


@pytest.fixture
def attempt(combined_question: CombinedQuestion) -> QuestionAttempt:
    return QuestionAttempt(combined_question, slot=3, usage_id=7)


@pytest.fixture
def options() -> DisplayOptions:
    return DisplayOptions()


def parse_fragment(markup):
    """Parse rendered markup so tests can query it with xpath."""
    return lxmlhtml.fragment_fromstring(str(markup), create_parent="div")


@pytest.fixture
def parse():
    return parse_fragment
