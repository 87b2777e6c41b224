"""
Command line interface
"""
import sys
import logging

from .styles import reset as reset_style
from .util import (
    Closable, term_help,
    coerce_str as _str,
)

log = logging.getLogger()

try:
    import gnureadline as readline
except ImportError:
    try:
        import readline

        if 'libedit' in (readline.__doc__ or ''):
            log.warning('MacOS X libedit readline in use, broken')
    except ImportError:
        readline = None

prompt_default = '>>> '


class Terminal:
    """Virtual terminal"""
    # Some ANSI/VT100 Terminal Control Escape Sequences
    # http://www.termsys.demon.co.uk/vtansi.htm
    esc = '\x1b['
    erase_line = esc + '2K'
    erase_screen = esc + '2J'
    cursor_home = esc + 'H'

    def __init__(self, stdout=None, stdin=None, prompt=prompt_default):
        self.prompt = prompt
        self.stdout = stdout or sys.stdout
        self.stdin = stdin or sys.stdin
        self.banner = ''

    def emit(self, *strings, sep=' ', end='', flush=True):
        """Write string to stdout"""
        self.stdout.write(_str(sep.join(strings)))
        if end:
            self.stdout.write(_str(end))
        if flush:
            self.stdout.flush()

    def emit_line(self, line):
        """Write string line to output without breaking input"""
        if not self.prompt:
            self.emit(line, end='\n')
            return
        buf = readline.get_line_buffer() if readline else ''
        self.emit('\r' + self.erase_line + line, end='\n')
        self.emit(self.prompt, buf, sep='')

    def clear(self, banner=None):
        """Clear screen and re-print the banner"""
        if banner is not None:
            self.banner = banner
        self.emit(self.erase_screen + self.cursor_home)
        if self.banner:
            self.emit(self.banner, end='\n')

    def set_title(self, title):
        self.emit('\x1b]0;' + title + '\x07')

    def reset(self):
        """restore default colors, used on exit"""
        self.emit(reset_style, end='\n')


def choose(terminal, message, choices, read=input):
    """
    Numbered selection menu.
    :param choices: list of (title, value)
    :return: selected value
    """
    if not choices:
        raise ValueError('nothing to choose for %s' % message)
    if len(choices) == 1:
        return choices[0][1]
    numbers = ['%d)' % n for n in range(1, len(choices) + 1)]
    terminal.emit(message, end='\n')
    terminal.emit(term_help(numbers, [title for title, _ in choices]),
                  end='\n')
    while True:
        answer = read('%s [1-%d]: ' % (message, len(choices))).strip()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1][1]
        terminal.emit('Invalid choice: ', answer, end='\n')


class ControlCli(Closable):
    """clear/quit command line next to the tailed output"""

    aliases = {
        'c': 'clear',
        'q': 'quit',
        'exit': 'quit',
    }

    def do_clear(self, _):
        """Clear the screen."""
        self.term.clear()

    def do_quit(self, _):
        """Stop tailing and exit."""
        raise SystemExit

    def do_help(self, _):
        """Shows this help message."""
        cmd_name = ['Commands:'] + self._do_commands
        cmd_docs = [''] + [getattr(self, 'do_' + cmd).__doc__ or ''
                           for cmd in self._do_commands]
        text = term_help(cmd_name, cmd_docs)
        self.term.emit(text, end='\n')

    def __init__(self, controller, terminal=None):
        super().__init__()
        self.controller = controller
        self.term = terminal or Terminal()

        # readline completer
        self._prefix = None
        self._possible = []
        self._do_commands = \
            sorted([c[3:] for c in dir(self) if c.startswith('do_')])

    @classmethod
    def parse(cls, line):
        """split line into cmd, args, original"""
        line = line.strip()
        if not line:
            return None, None, line
        if line[0] == '?':
            line = 'help ' + line[1:]
        args = line.split()
        return cls.aliases.get(args[0], args[0]), args[1:], line

    def onecmd(self, line):
        """execute one command"""
        cmd, args, line = self.parse(line)
        if not cmd:
            return
        method = getattr(self, 'do_' + cmd, None)
        if method is None:
            self.term.emit('Unknown command: ', line, end='\n')
        else:
            return method(args)

    def stop(self):
        self.close()
        self.controller.close()

    def loop(self):
        """input loop"""
        log.debug('cli loop')
        completer = None
        if readline:
            completer = readline.get_completer()
            readline.set_completer(self.complete)
            readline.parse_and_bind("tab: complete")
        try:
            while not self.is_closed:
                try:
                    line = input(self.term.prompt)
                except EOFError:
                    self.stop()
                else:
                    self.onecmd(line)
        except SystemExit:
            self.stop()
        except Exception:
            log.exception('cli loop error')
            self.stop()
        finally:
            if readline:
                readline.set_completer(completer)
            log.debug('finished cli loop -> closed: %s', self.is_closed)

    def complete(self, prefix, index):
        """readline complete method"""
        if prefix != self._prefix:
            # build list of possible matches to text
            self._prefix = prefix
            self._possible = \
                [n for n in self._do_commands if n.startswith(prefix)]
        result = None
        try:
            result = self._possible[index]
        except IndexError:
            pass
        return result
