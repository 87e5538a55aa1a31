#!/usr/bin/env python3
"""
Name: cat
Description: concatenate and print files
Author: Abigail, perlpowertools@abigail.be (Original Perl Author)
License: perl
"""

import sys
import os
import argparse
from enum import Enum

# Constants
EX_SUCCESS = 0
EX_FAILURE = 1

# The only options cat understands. Any other token starting with '-',
# including -h and a bare '-', is thrown away before argparse sees it.
FLAG_TOKENS = ('-b', '-n', '-e', '-t', '-v', '-r')

class LineNumbering(Enum):
    OFF = 0
    DEFAULT = 1
    OMIT_BLANK = 2

class NonPrinting(Enum):
    OFF = 0
    DEFAULT = 1
    EOL = 2
    TABS_AND_FORM_FEEDS = 3
    BOTH = 4

# Replacement text for each visible character, per mode.
MARKERS = {
    NonPrinting.EOL: {'\n': '$\n'},
    NonPrinting.TABS_AND_FORM_FEEDS: {'\t': '^I', '\f': '^L'},
    NonPrinting.BOTH: {'\n': '$\n', '\t': '^I', '\f': '^L'},
}

class CatError(Exception):
    """A fatal problem with the input; main() reports it and exits."""

class Settings:
    """The display settings for one run, resolved once from the flags."""
    def __init__(self, line_numbering, non_printing, fold_empty_lines):
        self.line_numbering = line_numbering
        self.non_printing = non_printing
        self.fold_empty_lines = fold_empty_lines

    def __repr__(self):
        return (f"Settings({self.line_numbering}, {self.non_printing}, "
                f"fold_empty_lines={self.fold_empty_lines})")

def resolve_flags(flags) -> Settings:
    """
    Maps a set of flag tokens onto the three display settings.

    -b beats -n. For non-printing characters, -e and -t together mean both,
    either one alone means just that one, and -v on its own is the default
    (visually a no-op). Tokens that aren't flags are ignored.
    """
    flags = set(flags)

    if '-b' in flags:
        line_numbering = LineNumbering.OMIT_BLANK
    elif '-n' in flags:
        line_numbering = LineNumbering.DEFAULT
    else:
        line_numbering = LineNumbering.OFF

    if '-e' in flags and '-t' in flags:
        non_printing = NonPrinting.BOTH
    elif '-e' in flags:
        non_printing = NonPrinting.EOL
    elif '-t' in flags:
        non_printing = NonPrinting.TABS_AND_FORM_FEEDS
    elif '-v' in flags:
        non_printing = NonPrinting.DEFAULT
    else:
        non_printing = NonPrinting.OFF

    return Settings(line_numbering, non_printing, '-r' in flags)

def strip_carriage_returns(text: str) -> str:
    return text.replace('\r', '')

def split_lines(text: str) -> list:
    """
    Splits text on '\\n' only. A trailing newline does not start another
    line, so "a\\nb\\n" and "a\\nb" are both two lines and "" is none.
    """
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines

def fold_empty_lines(text: str) -> str:
    """Drops every newline past the second in a row."""
    result = []
    consecutive_newlines = 0
    for char in text:
        if char == '\n':
            consecutive_newlines += 1
        else:
            consecutive_newlines = 0

        if consecutive_newlines <= 2:
            result.append(char)
    return "".join(result)

def number_lines(text: str, mode: LineNumbering) -> str:
    """
    Prefixes lines with a four-space indent, the line number and padding.
    Every output line ends in a newline, including the last one.
    """
    if mode is LineNumbering.OFF:
        return text

    lines = split_lines(text)
    width = len(str(len(lines))) + 2

    numbered = []
    count = 0
    for line in lines:
        if mode is LineNumbering.OMIT_BLANK and line == '':
            numbered.append('\n')
            continue

        # Padding is taken from the zero-based count, not the number shown,
        # so the text column shifts by one where the two differ in digits.
        padding = ' ' * (width - len(str(count)))
        numbered.append(f"    {count + 1}{padding}{line}\n")
        count += 1

    return "".join(numbered)

def render_non_printing(text: str, mode: NonPrinting) -> str:
    """Replaces newlines, tabs and form feeds with visible markers."""
    markers = MARKERS.get(mode)
    if not markers:
        return text

    result = []
    for char in text:
        result.append(markers.get(char, char))
    return "".join(result)

def format_text(text: str, settings: Settings) -> str:
    """Runs fold, numbering and non-printing rendering, in that order."""
    if settings.fold_empty_lines:
        text = fold_empty_lines(text)
    text = number_lines(text, settings.line_numbering)
    return render_non_printing(text, settings.non_printing)

def process(text: str, flags) -> str:
    """Formats raw input text according to a set of flag tokens."""
    return format_text(strip_carriage_returns(text), resolve_flags(flags))

def display_name(path: str) -> str:
    # Last component of the path, whichever separator was used.
    return path.replace('\\', '/').split('/')[-1]

def read_source(path: str) -> str:
    """
    Reads one file whole.
    Newline translation is off so that lone '\\r' characters survive
    until they are stripped.
    """
    try:
        with open(path, encoding='utf-8', newline='') as fh:
            return fh.read()
    except FileNotFoundError:
        raise CatError(f"File {display_name(path)} not found, aborting.")
    except PermissionError:
        raise CatError("Permission denied, aborting.")
    except (OSError, UnicodeDecodeError) as e:
        raise CatError(f"An unexpected error happened, aborting: {e}")

def read_sources(paths: list) -> str:
    """Reads every source before any output, joined by single newlines."""
    if not paths:
        raise CatError("Missing file path, aborting.")
    return "\n".join(read_source(path) for path in paths)

def preprocess_argv(args_list: list) -> list:
    """
    Drops option-like tokens cat doesn't know, so they are ignored rather
    than rejected. Combined flags such as '-nt' are dropped too.
    """
    return [
        arg for arg in args_list
        if not arg.startswith('-') or arg in FLAG_TOKENS
    ]

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cat",
        description="Concatenate and print files.",
        usage="%(prog)s [-bentvr] file ...",
        add_help=False
    )
    parser.add_argument('-b', dest='flags', action='append_const', const='-b',
                        help='Number non-empty output lines (overrides -n).')
    parser.add_argument('-n', dest='flags', action='append_const', const='-n',
                        help='Number all output lines.')
    parser.add_argument('-e', dest='flags', action='append_const', const='-e',
                        help='Display $ at the end of each line.')
    parser.add_argument('-t', dest='flags', action='append_const', const='-t',
                        help='Display TAB as ^I and form feed as ^L.')
    parser.add_argument('-v', dest='flags', action='append_const', const='-v',
                        help='Display non-printing characters (no visible effect on its own).')
    parser.add_argument('-r', dest='flags', action='append_const', const='-r',
                        help='Fold runs of blank lines down to one.')
    parser.add_argument('files', nargs='*',
                        help='Files to concatenate.')
    return parser

def main(argv=None):
    """Parses arguments, reads every file and prints the formatted text."""
    program_name = os.path.basename(sys.argv[0])
    parser = build_parser()
    args = parser.parse_intermixed_args(preprocess_argv(sys.argv[1:] if argv is None else argv))

    try:
        text = read_sources(args.files)
    except CatError as e:
        print(f"{program_name}: {e}", file=sys.stderr)
        sys.exit(EX_FAILURE)

    print(process(text, args.flags or ()))
    sys.exit(EX_SUCCESS)

if __name__ == "__main__":
    main()
