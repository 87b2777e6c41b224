"""
Common utility methods
"""

import os
import logging

from itertools import zip_longest
from textwrap import wrap
from shutil import get_terminal_size
from datetime import date

log = logging.getLogger()
date_placeholder = '{date}'


def expand_path(path):
    """expand environment variables and tilda in path"""
    if '$' in path:
        path = os.path.expandvars(path)
    if '~' in path:
        path = os.path.expanduser(path)
    return path


def join_path(*parts):
    """join config path fragments, collapsing doubled separators"""
    path = '/'.join(str(p) for p in parts if p not in (None, ''))
    while '//' in path:
        path = path.replace('//', '/')
    return path


def replace_placeholders(name, today=None):
    """Replace {date} in name with today's date as YYYY-MM-DD"""
    if date_placeholder not in name:
        return name
    if today is None:
        today = date.today()
    return name.replace(date_placeholder, today.strftime('%Y-%m-%d'))


def coerce_str(data, errors='strict'):
    """coerce data to str type"""
    if not isinstance(data, str) and hasattr(data, 'decode'):
        data = data.decode('utf-8', errors)
    return data


def build_repr(clz, *attributes):
    """generate __repr__ method for builder classes"""

    def method(self):
        init = ', '.join('%s=%r' % (a, getattr(self, a)) for a in attributes)
        return '%s(%s)' % (clz, init)

    return method


def term_help(left_rows, right_rows,
              indent=2, sep=2):
    """
    returns text blob of two columns with indent and separator.
    """
    # two columns with separator and indent are just 4 columns where column
    # index 0 and 2 are empty space
    form = ''.join('{col[%d]:<{width[%d]}}' % (i, i) for i in range(4))

    page_width = get_terminal_size().columns
    left_width = max(len(r) for r in left_rows)
    right_width = page_width - sum([sep, indent, left_width])
    widths = [indent, left_width, sep, right_width]
    indent_rows = ['' for _ in range(len(left_rows))]
    sep_rows = ['' for _ in range(len(left_rows))]

    return column_formatter(form, widths,
                            indent_rows, left_rows,
                            sep_rows, right_rows)


def column_formatter(format_str, widths, *columns):
    """
    format_str describes the format of the report.
    {col[i]} is replaced by data from the ith element of columns.

    widths is expected to be a list of integers.
    {width[i]} is replaced by the ith element of the list widths.

    Every argument after format_str and widths should be a list of strings.
    Each list contains the data for one column of the report.

    Returns the report as one big string.
    https://stackoverflow.com/q/3096402/2815

    NOTE: each str.format() result needs rstrip() to avoid right-side padding
    """
    log.debug('column_formatter(%r, %r, *%r)', format_str, widths, columns)
    result = []
    for row in zip(*columns):
        lines = [wrap(elt, width=num) for elt, num in zip(row, widths)]
        for line in zip_longest(*lines, fillvalue=''):
            result.append(format_str.format(width=widths, col=line).rstrip())
    return '\n'.join(result)


class Closable:
    def __init__(self):
        self._closed = False

    @property
    def is_closed(self):
        return self._closed

    def close(self):
        log.debug('Closing %r', self)
        self._closed = True
