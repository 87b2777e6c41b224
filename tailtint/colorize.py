"""
Line colorizing with sticky color state
"""

import logging

from .styles import paint
from .util import build_repr

log = logging.getLogger()


class ColorizerState:
    """
    Color memory for one tail session.

    current is the rule painting lines right now, previous is the single
    fallback slot reinstated once a non-keeping rule has painted its line.
    """

    def __init__(self, current=None, previous=None):
        self.current = current
        self.previous = previous

    __repr__ = build_repr('ColorizerState', 'current', 'previous')


class LineColorizer:
    """Paint one line at a time, carrying color state between lines"""

    def __init__(self, rules, state=None):
        self.rules = rules
        self.state = state or ColorizerState()

    def process(self, line, state=None):
        """
        Classify and paint line.
        :param line: text without line terminator
        :param state: ColorizerState, defaults to the colorizer's own
        :return: rendered line, None for blank lines
        """
        if state is None:
            state = self.state
        if not line.strip():
            return None

        matched = self.rules.match(line)
        if matched is not None:
            state.current = matched

        current = state.current
        if current is not None and current.style is not None:
            rendered = paint(current.style, line)
        else:
            rendered = line

        if current is None or not current.keep:
            previous = state.previous
            state.current = previous if previous and previous.keep else None
        return rendered

    def process_lines(self, lines, state=None):
        """rendered lines in input order, blank lines dropped"""
        rendered = (self.process(line, state) for line in lines)
        return [r for r in rendered if r is not None]
