#!/usr/bin/env python3

r"""
Usage: cat.py [-h] [-V] [-n] [-E] [-T] [FILE ...]
copy each line of input chars to output
Example: cat.py -n cat.py
Options:
  FILE             a file to copy out (default: stdin)
  -h, --help       show this help message and exit
  -V, --version    print the name, version, date, authors, and license, and exit
  -n, --number     number each line of output
  -E, --show-ends  show each end of line as "$"
  -T, --show-tabs  show each "\t" tab as "^I"

quirks:
  counts lines across all files, like Linux 'cat -n', unlike Mac 'cat -n'
  exits 1 at the first file it can't open, without copying out any later file
  decodes input as utf-8, and replaces each undecodable byte with �

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "cat -" and "cat"
  takes '-' as meaning stdin, like bash "cat -"

examples:
  cat.py -  # copy out each line of input
  cat.py -n cat.py  # number the lines of this file
  echo $'a\tb' |cat.py -ET  # show the tab and the end of line
  cat.py --version
"""


import argparse
import sys

import clio


NAME = "cat.py"
VERSION = "0.1.0"
DATE = "2026-10-19"
AUTHORS = "Ann,Bo"
EMAILS = "ann@example.com,bo@example.com"
LICENSE = "MIT"

USAGE = "cat.py [-h] [-V] [-n] [-E] [-T] [FILE ...]"
PURPOSE = "copy each line of input chars to output"
EXAMPLE = "cat.py -n cat.py"


def main(argv=None):
    """Run a Cat Py command line"""

    clio.prep_log(NAME)

    parser = cat_py_parser()
    args = parser.parse_args(sys.argv[1:] if (argv is None) else argv)

    if args.version:
        clio.print_info(NAME, VERSION, DATE, AUTHORS, EMAILS, license_=LICENSE)

        return 0

    # Catenate each file

    counter = LineCounter()
    with clio.BrokenPipeErrorSink():
        clio.parse_files(args.files, cat_incoming, args, counter=counter)
        sys.stdout.flush()

    return 0


def cat_py_parser():
    """Form an ArgumentParser for a Cat Py command line"""

    parser = argparse.ArgumentParser(prog=NAME)

    parser.add_argument(
        "files",
        metavar="FILE",
        nargs="*",  # argparse.ZERO_OR_MORE
        help="a file to copy out (default: stdin)",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="print the name, version, date, authors, and license, and exit",
    )

    parser.add_argument(
        "-n", "--number", action="store_true", help="number each line of output"
    )

    parser.add_argument(
        "-E",
        "--show-ends",
        action="store_true",
        help='show each end of line as "$"',
    )

    parser.add_argument(
        "-T",
        "--show-tabs",
        action="store_true",
        help=r'show each "\t" tab as "^I"',
    )

    clio.install_usage(parser, USAGE, purpose=PURPOSE, example=EXAMPLE)

    return parser


class LineCounter(object):
    """Count the lines copied out, across all files"""

    def __init__(self):
        self.index = 0

    def count(self):
        self.index += 1

        return self.index


def cat_incoming(incoming, args, counter):
    """Copy out some form of each line as it arrives"""

    for line in incoming:
        chars = cat_repr_line(line, args=args)

        if args.number:
            tag = "{:6}\t".format(counter.count())
            chars = tag + chars

        sys.stdout.write(chars)


def cat_repr_line(line, args):
    """Choose how to show each line"""

    text = line[: -len("\n")] if line.endswith("\n") else line
    end = line[len(text) :]

    if args.show_tabs:
        text = text.replace("\t", "^I")

    if args.show_ends:
        if end:
            end = "$" + end

    rep = text + end

    return rep


if __name__ == "__main__":
    sys.exit(main())
