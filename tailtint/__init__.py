#!/usr/bin/env python3 -u
"""
Tail a growing log file and colorize each new line by keyword rules.
"""
# NOTES
# http://www.termsys.demon.co.uk/vtansi.htm
# https://en.wikipedia.org/wiki/ANSI_escape_code#24-bit
# https://invisible-island.net/xterm/ctlseqs/ctlseqs.html (OSC 0 title)

__version__ = '0.1.0'
__application__ = 'py-tailtint'
default_config_file = '~/.py-tailtint'
