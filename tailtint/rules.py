"""
Keyword color rules and ordered rule matching
"""

import logging
import re

from .styles import parse_style
from .util import build_repr

log = logging.getLogger()


class ConfigError(ValueError):
    """Invalid configuration value"""


def is_stack_trace(line):
    """continuation lines of a stack trace, ex: '    at Foo.bar(Foo.java:12)'"""
    return line.strip().startswith('at')


class ColorRule:
    """
    Paint lines containing keyword with style.

    keyword wrapped in slashes ('/^\\d+:/') is a regular expression,
    anything else is a plain substring. keep makes the style stick to
    the following non-matching lines.
    """

    def __init__(self, keyword, style=None, keep=False, is_regex=None):
        if not keyword:
            raise ConfigError('color rule requires a keyword')
        if not isinstance(keyword, str):
            raise ConfigError('color rule keyword must be a string, got %r'
                              % (keyword,))
        if not isinstance(keep, bool):
            raise ConfigError('keep must be true or false, got %r' % (keep,))
        if is_regex is None:
            is_regex = len(keyword) > 2 and \
                keyword.startswith('/') and keyword.endswith('/')
            if is_regex:
                keyword = keyword[1:-1]
        self.keyword = keyword
        self.is_regex = is_regex
        self.style = parse_style(style)
        self.keep = keep
        self._regex = None
        if is_regex:
            try:
                self._regex = re.compile(keyword)
            except re.error as e:
                raise ConfigError('invalid regex %r: %s' % (keyword, e))

    @classmethod
    def from_dict(cls, data):
        """build from a config entry {keyword, color, keep}"""
        if not isinstance(data, dict):
            raise ConfigError('color rule must be a mapping, got %r' % data)
        keyword = data.get('keyword')
        if keyword is not None:
            # yaml loads {keyword: 404} as an int
            keyword = str(keyword)
        keep = data.get('keep')
        return cls(keyword=keyword,
                   style=data.get('color'),
                   keep=False if keep is None else keep)

    def matches(self, line):
        if self._regex is not None:
            return self._regex.search(line) is not None
        return self.keyword in line

    def __eq__(self, other):
        if not isinstance(other, ColorRule):
            return NotImplemented
        return (self.keyword, self.is_regex, self.style, self.keep) == \
               (other.keyword, other.is_regex, other.style, other.keep)

    def __hash__(self):
        return hash((self.keyword, self.is_regex, self.style, self.keep))

    def __str__(self):
        keyword = '/%s/' % self.keyword if self.is_regex else self.keyword
        style = self.style.name if self.style else '-'
        return '%s %s%s' % (keyword, style, ' keep' if self.keep else '')

    __repr__ = build_repr('ColorRule', 'keyword', 'is_regex', 'style', 'keep')


class ColorRuleSet:
    """ordered, read only collection of ColorRule"""

    def __init__(self, rules=()):
        self.rules = tuple(rules)

    @classmethod
    def from_config(cls, entries):
        return cls(ColorRule.from_dict(e) for e in entries or [])

    def match(self, line):
        """last rule matching line, stack trace lines never match"""
        if is_stack_trace(line):
            return None
        matched = None
        for rule in self.rules:
            if rule.matches(line):
                matched = rule
        return matched

    def __iter__(self):
        return iter(self.rules)

    def __len__(self):
        return len(self.rules)

    __repr__ = build_repr('ColorRuleSet', 'rules')
