"""
Non-clipboard text sources and sinks: standard input, command line
arguments and standard output.
"""

import sys


def read_stdin(stream=None):
    """Reads all of standard input as one text."""
    return (stream or sys.stdin).read()


def iter_arguments(values):
    """Yields each command line value as a separate text."""
    for value in values:
        yield value


def write_stdout(text, stream=None):
    stream = stream or sys.stdout
    stream.write(text)
    if not text.endswith("\n"):
        stream.write("\n")
    stream.flush()
