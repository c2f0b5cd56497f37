# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

"""
Parser and matcher for pattern match expressions.

An expression is one of

    match(pattern)  match_<options>(pattern)
    match_all(expression expression ...)
    match_any(expression expression ...)
    not(expression)

A pattern is a list of words separated by spaces or by "_" (the two words
must then be next to each other). A word may list alternatives with "|", and
an alternative may be a phrase in square brackets. "?" stands for any one
character and "*" for any run of characters.

Options:
    c   the response word may contain extra characters around the pattern word
    w   the response may contain extra words
    o   the words may come in any order
    p   all words must be next to each other
    m   allow one misspelling (= mf mr mt mx); m2 allows two in long words
    mf  one character fewer, mr one replaced, mt two transposed, mx one extra
"""

import logging
import re

from django.utils.translation import gettext as _

logger = logging.getLogger(__name__)

WORD_CHARS = re.compile(r"[^\s()\[\]|_]")
FUNCTION_NAME = re.compile(r"[a-z0-9_]+")
OPTION_TOKENS = ["m2", "mf", "mr", "mt", "mx", "m", "c", "o", "w", "p"]
MISSPELLINGS = {"f", "r", "t", "x"}
MIN_LENGTH_FOR_TWO_MISSPELLINGS = 8


class PmatchSyntaxError(Exception):
    def __init__(self, value, position=None):
        self.value = value
        self.position = position

    def __str__(self):
        return self.value


class MatchOptions:
    def __init__(self, text=""):
        self.text = text
        self.extra_chars = False
        self.extra_words = False
        self.any_order = False
        self.proximity = False
        self.misspellings = set()
        self.max_misspellings = 0
        rest = text
        while rest:
            token = next((t for t in OPTION_TOKENS if rest.startswith(t)), None)
            if token is None:
                raise PmatchSyntaxError(_('Unknown match option "%(options)s".') % {"options": text})
            rest = rest[len(token):]
            if token == "c":
                self.extra_chars = True
            elif token == "w":
                self.extra_words = True
            elif token == "o":
                self.any_order = True
            elif token == "p":
                self.proximity = True
            elif token == "m":
                self.misspellings |= MISSPELLINGS
                self.max_misspellings = max(self.max_misspellings, 1)
            elif token == "m2":
                self.misspellings |= MISSPELLINGS
                self.max_misspellings = 2
            else:
                self.misspellings.add(token[1])
                self.max_misspellings = max(self.max_misspellings, 1)

    def allowed_misspellings(self, word):
        if self.max_misspellings > 1 and len(word) < MIN_LENGTH_FOR_TWO_MISSPELLINGS:
            return 1
        return self.max_misspellings


class Node:
    def matches(self, words):
        raise NotImplementedError


class MatchAll(Node):
    def __init__(self, children):
        self.children = children

    def matches(self, words):
        return all(child.matches(words) for child in self.children)


class MatchAny(Node):
    def __init__(self, children):
        self.children = children

    def matches(self, words):
        return any(child.matches(words) for child in self.children)


class Not(Node):
    def __init__(self, child):
        self.child = child

    def matches(self, words):
        return not self.child.matches(words)


class Element:
    """One position of a pattern: alternative phrases, each a list of words."""

    def __init__(self, alternatives, joined=False):
        self.alternatives = alternatives
        self.joined = joined


class Match(Node):
    def __init__(self, options, elements):
        self.options = options
        self.elements = elements

    def matches(self, words):
        if not words:
            return False
        return self._assign(0, words, frozenset(), None)

    def _assign(self, index, words, used, previous):
        options = self.options
        if index == len(self.elements):
            return options.extra_words or len(used) == len(words)
        element = self.elements[index]
        must_join = previous is not None and (element.joined or options.proximity)
        for phrase in element.alternatives:
            length = len(phrase)
            for start in range(0, len(words) - length + 1):
                span = range(start, start + length)
                if any(i in used for i in span):
                    continue
                if previous is not None and not options.any_order and start < previous[1]:
                    continue
                if must_join:
                    adjacent = start == previous[1]
                    if options.any_order:
                        adjacent = adjacent or start + length == previous[0]
                    if not adjacent:
                        continue
                if not all(word_matches(p, words[i], options) for (p, i) in zip(phrase, span)):
                    continue
                if self._assign(index + 1, words, used | set(span), (start, start + length)):
                    return True
        return False


def wildcard_regex(word):
    return "".join(".*" if c == "*" else "." if c == "?" else re.escape(c) for c in word)


def word_matches(pattern, word, options):
    if "*" in pattern or "?" in pattern:
        regex = wildcard_regex(pattern)
        if options.extra_chars:
            return re.search(regex, word) is not None
        return re.fullmatch(regex, word) is not None
    if pattern == word:
        return True
    if options.extra_chars and pattern in word:
        return True
    allowed = options.allowed_misspellings(pattern)
    if allowed:
        return misspelling_distance(pattern, word, options.misspellings, allowed) <= allowed
    return False


def misspelling_distance(pattern, word, kinds, limit):
    """Edit distance from pattern to word using only the allowed kinds of edit.

    Returns limit + 1 as soon as the distance is known to exceed limit.
    """
    if abs(len(pattern) - len(word)) > limit:
        return limit + 1
    big = limit + 1
    rows, cols = len(pattern) + 1, len(word) + 1
    d = [[big] * cols for _ in range(rows)]
    d[0][0] = 0
    for i in range(rows):
        for j in range(cols):
            if i == 0 and j == 0:
                continue
            best = big
            if i > 0 and j > 0 and pattern[i - 1] == word[j - 1]:
                best = d[i - 1][j - 1]
            if i > 0 and "f" in kinds:
                best = min(best, d[i - 1][j] + 1)
            if j > 0 and "x" in kinds:
                best = min(best, d[i][j - 1] + 1)
            if i > 0 and j > 0 and "r" in kinds:
                best = min(best, d[i - 1][j - 1] + 1)
            if (
                i > 1
                and j > 1
                and "t" in kinds
                and pattern[i - 1] == word[j - 2]
                and pattern[i - 2] == word[j - 1]
            ):
                best = min(best, d[i - 2][j - 2] + 1)
            d[i][j] = min(best, big)
    return d[-1][-1]


class Parser:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def error(self, message):
        raise PmatchSyntaxError(message, self.pos)

    def skip_space(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def at_end(self):
        self.skip_space()
        return self.pos >= len(self.text)

    def peek(self):
        self.skip_space()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char):
        if self.peek() != char:
            if char == ")":
                self.error(_('Missing ")" at position %(pos)s.') % {"pos": self.pos + 1})
            self.error(_('Expected "%(char)s" at position %(pos)s.') % {"char": char, "pos": self.pos + 1})
        self.pos += 1

    def parse(self):
        if self.at_end():
            self.error(_("The expression is empty."))
        node = self.parse_expression()
        if not self.at_end():
            self.error(_('Unexpected "%(text)s" after the end of the expression.') % {"text": self.text[self.pos:].strip()})
        return node

    def parse_expression(self):
        self.skip_space()
        found = FUNCTION_NAME.match(self.text, self.pos)
        if not found:
            self.error(_("Expected match, match_all, match_any or not at position %(pos)s.") % {"pos": self.pos + 1})
        name = found.group(0)
        self.pos = found.end()
        self.expect("(")
        if name in ("match_all", "match_any"):
            children = self.parse_expression_list()
            self.expect(")")
            return MatchAll(children) if name == "match_all" else MatchAny(children)
        if name == "not":
            children = self.parse_expression_list()
            if len(children) != 1:
                self.error(_("not() must contain exactly one expression."))
            self.expect(")")
            return Not(children[0])
        if name == "match" or name.startswith("match_"):
            options = MatchOptions(name[len("match_"):] if name.startswith("match_") else "")
            elements = self.parse_pattern()
            self.expect(")")
            return Match(options, elements)
        self.error(_('Unknown function "%(name)s".') % {"name": name})

    def parse_expression_list(self):
        children = []
        while self.peek() not in (")", ""):
            children.append(self.parse_expression())
        if not children:
            self.error(_("Expected at least one expression at position %(pos)s.") % {"pos": self.pos + 1})
        return children

    def parse_pattern(self):
        elements = []
        joined = False
        while True:
            self.skip_space()
            char = self.peek()
            if char in (")", ""):
                break
            if char == "_":
                if not elements or joined:
                    self.error(_('Misplaced "_" at position %(pos)s.') % {"pos": self.pos + 1})
                joined = True
                self.pos += 1
                continue
            elements.append(Element(self.parse_alternatives(), joined))
            joined = False
        if joined:
            self.error(_('Misplaced "_" at position %(pos)s.') % {"pos": self.pos})
        if not elements:
            self.error(_("A match pattern must contain at least one word."))
        return elements

    def parse_alternatives(self):
        alternatives = [self.parse_alternative()]
        while self.pos < len(self.text) and self.text[self.pos] == "|":
            self.pos += 1
            alternatives.append(self.parse_alternative())
        return alternatives

    def parse_alternative(self):
        if self.pos < len(self.text) and self.text[self.pos] == "[":
            self.pos += 1
            phrase = []
            while True:
                self.skip_space()
                if self.pos >= len(self.text):
                    self.error(_('Missing "]".'))
                if self.text[self.pos] == "]":
                    self.pos += 1
                    break
                phrase.append(self.parse_word())
            if not phrase:
                self.error(_("Empty phrase at position %(pos)s.") % {"pos": self.pos})
            return phrase
        return [self.parse_word()]

    def parse_word(self):
        start = self.pos
        while self.pos < len(self.text) and WORD_CHARS.match(self.text[self.pos]):
            self.pos += 1
        if self.pos == start:
            self.error(_("Expected a word at position %(pos)s.") % {"pos": self.pos + 1})
        return self.text[start:self.pos]


class PmatchExpression:
    """A parsed expression; parse errors are kept rather than raised."""

    def __init__(self, text):
        self.text = text
        self.tree = None
        self.error = None
        try:
            self.tree = Parser(text).parse()
        except PmatchSyntaxError as e:
            self.error = str(e)
            logger.debug(f"PMATCH PARSE ERROR IN {text!r}: {self.error}")

    def is_valid(self):
        return self.error is None

    def get_parse_error(self):
        return self.error or ""

    def lowercased(self):
        """The same expression with every word folded to lower case."""
        return PmatchExpression(self.text.lower()) if self.is_valid() else self

    def matches(self, words):
        if not self.is_valid():
            return False
        return self.tree.matches(list(words))
