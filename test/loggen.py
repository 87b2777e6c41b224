#!/usr/bin/env python3
"""
Generates a pseudo log for testing
"""

import time
import random
import logging
import argparse

from datetime import datetime

log = logging.getLogger()

levels = ['DEBUG', 'INFO', 'INFO', 'INFO', 'WARN', 'ERROR']
words = ['request', 'session', 'cache', 'billing', 'user', 'timeout',
         'queue', 'worker', 'retry', 'socket', 'commit', 'payload']
stack = [
    'java.lang.IllegalStateException: {word} not ready',
    '    at com.example.{Word}Service.handle({Word}Service.java:{n})',
    '    at com.example.Dispatcher.run(Dispatcher.java:{n})',
]


def log_line(level, rnd=random, now=None):
    """one log line, ex: '2024-01-02 10:00:00 ERROR cache timeout'"""
    now = now or datetime.now()
    text = ' '.join(rnd.choice(words) for _ in range(4))
    return '%s %s %s' % (now.strftime('%Y-%m-%d %H:%M:%S'), level, text)


def stack_trace(rnd=random):
    word = rnd.choice(words)
    return [s.format(word=word, Word=word.capitalize(),
                     n=rnd.randint(10, 400)) for s in stack]


def generate(count, rnd=random):
    """count log entries, errors are followed by a stack trace"""
    lines = []
    for _ in range(count):
        level = rnd.choice(levels)
        lines.append(log_line(level, rnd))
        if level == 'ERROR':
            lines.extend(stack_trace(rnd))
    return lines


def append(path, lines, newline='\n'):
    """append lines to path, returns bytes written"""
    data = ''.join(line + newline for line in lines).encode('utf-8')
    with open(path, 'ab') as fh:
        fh.write(data)
    return len(data)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '-s', '--sleep', default=.3, type=float,
    )
    parser.add_argument(
        'output_file', type=str,
    )
    options = parser.parse_args()

    while True:
        time.sleep(options.sleep)
        lines = generate(1)
        append(options.output_file, lines)
        print('\n'.join(lines), flush=True)


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        pass
