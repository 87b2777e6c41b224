"""
Terminal styles: named palette entries, 24-bit hex colors, plain passthrough
"""

import logging
import re
from collections import namedtuple

log = logging.getLogger()

# kind is one of 'named', 'hex', 'plain'
Style = namedtuple('Style', ['kind', 'name', 'escape'])

esc = '\x1b['
reset = esc + '39;49;00m'
hex_re = re.compile(r'\A#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})\Z')

Plain = Style('plain', 'plain', '')


def build_styles():
    """generate dict of named Style objects for terminal"""
    dark_colors = ['black', 'darkred', 'darkgreen', 'brown', 'darkblue',
                   'purple', 'teal', 'lightgray']
    light_colors = ['darkgray', 'red', 'green', 'yellow', 'blue',
                    'fuchsia', 'turquoise', 'white']
    # chalk style names, foreground 30-37, bright 90-97, background 40-47
    ansi_names = ['black', 'red', 'green', 'yellow', 'blue', 'magenta',
                  'cyan', 'white']

    codes = {
        'bold': esc + '01m',
        'faint': esc + '02m',
        'italic': esc + '03m',
        'underline': esc + '04m',
        'blink': esc + '05m',
        'overline': esc + '06m',
        'inverse': esc + '07m',
        'hidden': esc + '08m',
        'strikethrough': esc + '09m',
    }

    for x, (d, l) in enumerate(zip(dark_colors, light_colors), 30):
        codes[d] = esc + '%im' % x
        codes[l] = esc + '%i;01m' % x

    for x, name in enumerate(ansi_names):
        title = name[0].upper() + name[1:]
        codes[name + 'Bright'] = esc + '%im' % (90 + x)
        codes['bg' + title] = esc + '%im' % (40 + x)
        codes['bg' + title + 'Bright'] = esc + '%im' % (100 + x)

    # aliases
    codes['dim'] = codes['faint']
    codes['darkteal'] = codes['turquoise']
    codes['darkyellow'] = codes['brown']
    codes['magenta'] = codes['purple']
    codes['cyan'] = codes['teal']
    codes['gray'] = codes['grey'] = codes['blackBright']

    return {name: Style('named', name, code) for name, code in codes.items()}


style_lookup = build_styles()


def hex_style(value):
    """Style for a #RRGGBB (or #RGB) string using a direct RGB escape"""
    digits = hex_re.match(value).group(1)
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    return Style('hex', value, esc + '38;2;%d;%d;%dm' % (r, g, b))


def parse_style(value):
    """
    Turn a configured color into a Style.
    :param value: named style, '#RRGGBB' string or None
    :return: Style, or None when no color was configured
    """
    if value is None or value == '':
        return None
    if isinstance(value, Style):
        return value
    value = str(value).strip()
    if value.startswith('#'):
        if hex_re.match(value):
            return hex_style(value)
        log.warning('invalid hex color %r, line will not be painted', value)
        return Plain
    style = style_lookup.get(value) or style_lookup.get(value.lower())
    if style is None:
        log.warning('unknown style %r, line will not be painted', value)
        return Plain
    return style


def paint(style, text):
    """wrap text in the style escape, plain styles return text unchanged"""
    if style is None or not style.escape:
        return text
    return style.escape + text + reset
