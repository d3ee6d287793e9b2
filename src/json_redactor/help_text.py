"""
Help text for the json-redact command.

Styling uses click.style; click.echo strips the escape codes when the output
is not a terminal, and should_colorize() also honours NO_COLOR.
"""

import os
from typing import Optional

import click


def _b(text: str) -> str:
    return click.style(text, bold=True)


def _dim(text: str) -> str:
    return click.style(text, dim=True)


def _i(text: str) -> str:
    return click.style(text, italic=True)


def _u(text: str) -> str:
    return click.style(text, underline=True)


def should_colorize() -> Optional[bool]:
    """Return False when NO_COLOR is set, else None to let click decide."""
    if os.environ.get('NO_COLOR'):
        return False
    return None


def render_help() -> str:
    """Build the styled help text."""
    eq = _dim("=")
    ps = _dim("PS C:\\>")
    return f"""\
Preserve privacy by redacting JSON values.
This command takes UTF-8 JSON over stdin and outputs UTF-8 JSON over stdout.

{_b("OPTIONS:")}

  -h, --help              Show this message.

      --string=<str>      Use this value for strings.  [default: "[redacted]"]

      --number=<num>      Use this value for numbers.  [default: 0]

      --boolean           Use true for booleans.       [default: false]

  -k, --preserve=<keys>   Comma-separated list of keys to not redact the value.
                          Eg.  --preserve{eq}code,type,enrollType

  -d, --prune=<keys>      Comma-separated list of keys of arrays to prune.
                          Eg.  --prune{eq}devices,deviceGroups,users,userGroups

  -s, --shuffle=<keys>    Comma-separated list of keys of arrays to shuffle.
                          Eg.  --shuffle{eq}devices,deviceGroups,users,userGroups

  -p, --pretty            Pretty-print the output with 2-space indentation.

      --seed=<int>        Seed pruning and shuffling for repeatable output.

  -c, --config=<path>     Read options from a JSON file. Flags take precedence.

  -i, --input=<path>      Read JSON from a file instead of stdin.

  -o, --output=<path>     Write JSON to a file instead of stdout.

  -v, --verbose           Log debug details and statistics to stderr.

      --version           Show the version and exit.


{_b("COMMANDS:")}

  demo                    Redact a small example document and explain how.


{_b("NOTES:")}

 o  Pruning means each item in an array has between a 10% and 80% chance of
    being removed. This percentage changes between arrays. Note that because
    {_i("each element")} has a chance of being deleted, you shouldn't use this
    for small arrays.

 o  Preserving a key means its value won't be redacted. If a key is to be
    preserved {_i("and")} pruned, it will be pruned and the remaining values will not
    be changed.

 o  Without --seed, pruning and shuffling differ on every run.

 o  You can import 'redact' from the json_redactor package to use it
    programmatically. See the {_u("EXAMPLES")} section below.


{_b("EXAMPLES:")}

{_u("POSIX shell (Linux, macOS):")}

  {_dim("$")} json-redact < data.json > anon.json

{_u("PowerShell (Windows):")}

  {ps} Get-Content data.json | json-redact > anon.json

{_u("Preserve certain keys:")}

  {_dim("$")} json-redact --preserve=id,parent < data.json

{_u("Prune between 10% and 80% of values in specific arrays:")}

  {_dim("$")} json-redact --prune=devices,groups < data.json

{_u("Format the output:")}

  {_dim("$")} json-redact --pretty < data.json

{_u("Redact data in Python:")}

  from json_redactor import redact
  redact({{"a": "abc", "b": "def", "c": True}}, preserve_keys={{"a"}})
  #=> {{'a': 'abc', 'b': '[redacted]', 'c': False}}
"""
