"""
Main tail engine.
"""

import asyncio
import logging
import os
import re

from .colorize import LineColorizer, ColorizerState
from .util import Closable, build_repr, coerce_str as _str

log = logging.getLogger()
line_split_re = re.compile(r'\r?\n')
default_interval = 0.5


class TailFileNotFound(FileNotFoundError):
    """Tailed file does not exist when the session starts"""


class TailReadError(OSError):
    """stat or read failure during a poll"""


class TailState:
    def __init__(self, path, last_known_size=0):
        self.path = path
        self.last_known_size = last_known_size

    __repr__ = build_repr('TailState', 'path', 'last_known_size')


class TailReader:
    """Read only the bytes appended to a file since the last poll"""

    @staticmethod
    def initialize(path):
        """
        Start tracking path at its current size.
        :raises TailFileNotFound: path does not exist
        """
        try:
            size = os.stat(path).st_size
        except FileNotFoundError:
            raise TailFileNotFound('File not found: %s' % path)
        log.debug('initialize(%r) => size %d', path, size)
        return TailState(path, size)

    def poll(self, state):
        """
        Check the file for growth.
        :return: newly appended text, or None when nothing was added
        :raises TailReadError: stat or read failed
        """
        try:
            size = os.stat(state.path).st_size
        except FileNotFoundError:
            log.debug('%s missing, waiting for it to come back', state.path)
            return None
        except OSError as e:
            raise TailReadError('stat %s failed: %s' % (state.path, e))

        if size < state.last_known_size:
            log.warning('%s truncated from %d to %d bytes, reading from the '
                        'start', state.path, state.last_known_size, size)
            state.last_known_size = 0
        if size == state.last_known_size:
            return None

        start = state.last_known_size
        try:
            with open(state.path, 'rb') as fh:
                fh.seek(start)
                data = fh.read(size - start)
        except FileNotFoundError:
            log.debug('%s removed before read', state.path)
            return None
        except OSError as e:
            raise TailReadError('read %s failed: %s' % (state.path, e))

        state.last_known_size = start + len(data)
        log.debug('poll(%r) read %d bytes', state.path, len(data))
        return _str(data, errors='replace')


def split_lines(text):
    """split on \\n and \\r\\n"""
    return line_split_re.split(text)


class TailController(Closable):
    """
    Poll a file on a fixed interval and emit each new line colorized, in
    order, to sink.
    """

    def __init__(self, state, rules, sink,
                 interval=default_interval, reader=None, colorizer_state=None):
        super().__init__()
        self.state = state
        self.reader = reader or TailReader()
        self.colorizer = LineColorizer(
            rules, colorizer_state or ColorizerState())
        self.sink = sink
        self.interval = interval

    @classmethod
    def open(cls, path, rules, sink, **kwargs):
        return cls(TailReader.initialize(path), rules, sink, **kwargs)

    def process(self, text):
        """colorize chunk text, returning rendered lines"""
        return self.colorizer.process_lines(split_lines(text))

    def _poll(self):
        try:
            return self.reader.poll(self.state)
        except TailReadError as e:
            log.error('%s, retrying next poll', e)
            return None

    def _deliver(self, text):
        lines = self.process(text) if text else []
        for line in lines:
            self.sink(line)
        return lines

    def tick(self):
        """one poll cycle, returns the lines sent to sink"""
        return self._deliver(self._poll())

    async def loop(self):
        """poll until closed, one poll in flight at a time"""
        loop = asyncio.get_running_loop()
        try:
            log.debug('tail loop %r -> closed: %s', self.state, self.is_closed)
            while not self.is_closed:
                text = await loop.run_in_executor(None, self._poll)
                if self.is_closed:
                    break
                self._deliver(text)
                await asyncio.sleep(self.interval)
        except Exception:
            self.close()
            raise
        finally:
            log.debug('finished tail loop -> closed: %s', self.is_closed)

    def run(self):
        """blocking version of loop()"""
        asyncio.run(self.loop())
