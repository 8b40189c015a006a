#!/usr/bin/env python3

r"""
automate the routine input and output of command-line programs

usage as a python import:

  >>> import clio
  >>>

  >>> clio.print_info("demo", "1.0", "2024-01-01", "Ann,Bo", "ann@x.com,bo@x.com", "MIT")
  demo 1.0, 2024-01-01
  Authors:
  	1) Ann, ann@x.com
  	2) Bo, bo@x.com
  License: MIT
  >>>

  >>> parser = argparse.ArgumentParser()
  >>> _ = clio.install_usage(parser, "prog [-x] FILE", "Does a thing.", "prog -x data.txt")
  >>> _ = clio.prep_log("prog")
  >>>

  >>> def count_lines(incoming, counts):
  ...     counts.append(len(incoming.readlines()))
  ...
  >>> counts = list()
  >>> clio.parse_files(["a.txt", "b.txt"], count_lines, counts)
  >>>

quirks:
  takes no paths as meaning stdin, and also takes the path '-' as meaning stdin
  never closes stdin, but does close each other file before opening the next
  exits 1 at the first path it can't open, after logging that path
  rejects authors and emails of unequal counts, before printing anything
"""


import argparse
import contextlib
import logging
import os
import sys


#
# Iterate over a set of files, and apply the same function to each one
#


class FileOpenError(OSError):
    """Say which Path of Input we couldn't open"""

    def __init__(self, path, strerror=None):
        if strerror is None:
            super(FileOpenError, self).__init__("couldn't open {!r}".format(path))
        else:
            super(FileOpenError, self).__init__(
                "couldn't open {!r}: {}".format(path, strerror)
            )

        self.path = path
        self.strerror = strerror


def each_file(paths, fn, *args, **kwargs):
    """
    Call 'fn' once per Path with the File opened for reading, else once with Stdin

    Close each File before opening the next, but never close Stdin.
    Raise FileOpenError at the first Path we can't open, and don't call 'fn' for it
    """

    if not paths:
        prompt_tty_stdin()
        fn(sys.stdin, *args, **kwargs)

        return

    prompted = False
    for path in paths:

        # Take '-' as meaning Stdin

        if path == "-":
            if not prompted:
                prompt_tty_stdin()
                prompted = True

            fn(sys.stdin, *args, **kwargs)

            continue

        # Open the File, else fail

        try:
            incoming = open(path, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileOpenError(path, strerror=exc.strerror) from exc

        with incoming:
            fn(incoming, *args, **kwargs)


def parse_files(paths, fn, *args, logger=None, **kwargs):
    """
    Call 'each_file', but log and exit 1 at the first Path we can't open

    Log through the given Logger, else through the Root Logger.
    Don't pass the 'logger' KwArg on to 'fn'
    """

    try:
        each_file(paths, fn, *args, **kwargs)
    except FileOpenError as exc:
        log_fatal("couldn't open %r", exc.path, logger=logger)


#
# Print the Name, Version, Date, Authors, and License of a Program
#


class MismatchedAuthorEmailCount(ValueError):
    """Say we got more Authors than Emails, or more Emails than Authors"""

    def __init__(self, authors, emails):
        super(MismatchedAuthorEmailCount, self).__init__(
            "got {} authors, but {} emails".format(len(authors), len(emails))
        )

        self.authors = authors
        self.emails = emails


def format_info(name, version, date, authors, emails, license_):
    """Form the lines of Info about a Program, but don't print them yet"""

    aus = split_commas(authors)
    ems = split_commas(emails)
    if len(aus) != len(ems):
        raise MismatchedAuthorEmailCount(aus, ems)

    lines = list()
    lines.append("{} {}, {}".format(name, version, date))

    if len(aus) == 1:
        lines.append("Author: {}, {}".format(aus[0], ems[0]))
    elif len(aus) > 1:
        lines.append("Authors:")
        for (index, (au, em)) in enumerate(zip(aus, ems)):
            lines.append("\t{}) {}, {}".format(1 + index, au, em))

    lines.append("License: {}".format(license_))

    chars = "\n".join(lines) + "\n"

    return chars


def print_info(name, version, date, authors, emails, license_, file=None):
    """Print the lines of Info about a Program, to Stdout by default"""

    chars = format_info(name, version, date, authors, emails, license_=license_)

    outgoing = sys.stdout if (file is None) else file
    outgoing.write(chars)


def split_commas(words):
    """Split a Str at each "," comma, but take a List or Tuple as split already"""

    if isinstance(words, (list, tuple)):

        return list(words)

    return words.split(",")


#
# Respond to a request for Help, or to a Usage Error
#


class UsageRenderer(object):
    """Say how to call a Program, what it does, and one way of calling it"""

    def __init__(self, usage, purpose, example):
        self.usage = usage
        self.purpose = purpose
        self.example = example

    def format(self, parser):
        """Form the Usage, Purpose, Example, and Options, but don't print them yet"""

        lines = list()
        lines.append("Usage: {}".format(self.usage))
        lines.append(self.purpose)
        lines.append("Example: {}".format(self.example))
        lines.append("Options:")

        chars = "\n".join(lines) + "\n"
        chars += format_options(parser)

        return chars

    def __call__(self, parser, file=None):
        """Print the Help, to Stdout by default, such as after '--help'"""

        outgoing = sys.stdout if (file is None) else file
        outgoing.write(self.format(parser))


def install_usage(parser, usage, purpose, example):
    """Make the Parser speak our Usage, Purpose, Example, and Options for its Help"""

    renderer = UsageRenderer(usage, purpose=purpose, example=example)

    # Answer '--help' and 'parser.print_help', and also 'parser.error'

    parser.format_help = lambda: renderer.format(parser)
    parser.format_usage = lambda: renderer.format(parser)
    parser.usage_renderer = renderer

    return renderer


def format_options(parser):
    """Form the Help lines of each Option and Positional Argument of a Parser"""

    # pylint: disable=protected-access

    formatter = parser._get_formatter()

    formatter._indent()  # indent like under an 'options:' heading
    for action_group in parser._action_groups:
        for action in action_group._group_actions:
            formatter.add_argument(action_with_default_help(action))

    chars = formatter.format_help()  # formats the items at the same indent
    formatter._dedent()

    return chars


def action_with_default_help(action):
    """Copy the Action, but say its Default in its Help, if it has a Default to say"""

    if action.help in (None, argparse.SUPPRESS):

        return action

    if action.default is argparse.SUPPRESS:

        return action

    if not action.default:  # say no None, False, 0, "", nor empty List

        return action

    if action.nargs == 0:  # such as 'action="count"' counting up from zero

        return action

    if "%(default)" in action.help:

        return action

    alt_action = argparse.Action(
        option_strings=action.option_strings,
        dest=action.dest,
        nargs=action.nargs,
        default=action.default,
        choices=action.choices,
        required=action.required,
        help=action.help + " (default: %(default)s)",
        metavar=action.metavar,
    )

    return alt_action


#
# Prefix each Log Line with the Program Name, and with nothing else
#


def prep_log(name, logger=None, stream=None, level=logging.DEBUG):
    """
    Log each line as '<name>: <message>', with no Date, Time, Level, or Source

    Let every Level through, by default, like a Logger that has no Levels.
    Reformat each plain StreamHandler already there, such as from 'basicConfig',
    but leave alone its subclasses, such as FileHandler
    """

    alt_logger = logging.getLogger() if (logger is None) else logger
    alt_logger.setLevel(level)

    fmt = "{}: %(message)s".format(name.replace("%", "%%"))
    formatter = logging.Formatter(fmt)

    # Take up our Handler, else a plain StreamHandler, else add a new Handler

    plain_handlers = list(
        _ for _ in alt_logger.handlers if type(_) is logging.StreamHandler
    )
    marked_handlers = list(_ for _ in plain_handlers if hasattr(_, "clio_prefix"))

    if marked_handlers:
        handler = marked_handlers[0]
    elif plain_handlers:
        handler = plain_handlers[0]
    else:
        handler = logging.StreamHandler(stream)  # Stderr by default
        alt_logger.addHandler(handler)

    if stream is not None:
        handler.setStream(stream)

    # Speak through each plain StreamHandler with the same Prefix

    for plain_handler in plain_handlers:
        plain_handler.setFormatter(formatter)

    handler.setFormatter(formatter)
    handler.clio_prefix = "{}: ".format(name)

    return handler


def log_fatal(msg, *args, logger=None):
    """Log the Message as Critical, and then exit 1"""

    alt_logger = logging.getLogger() if (logger is None) else logger
    alt_logger.critical(msg, *args)

    sys.exit(1)  # exit 1 to give up on run


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def prompt_tty_stdin():
    if sys.stdin.isatty():
        stderr_print("Press ⌃D EOF to quit")


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with large Stdout cut sharply, such as:  cat.py big.txt |head

    More narrowly than:  signal.signal(signal.SIGPIPE, handler=signal.SIG_DFL)
    As per https://docs.python.org/3/library/signal.html#note-on-sigpipe
    """

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        (exc_type, exc, exc_traceback) = exc_info
        if isinstance(exc, BrokenPipeError):  # catch this one

            null_fileno = os.open(os.devnull, flags=os.O_WRONLY)
            os.dup2(null_fileno, sys.stdout.fileno())  # avoid the next one

            sys.exit(1)
