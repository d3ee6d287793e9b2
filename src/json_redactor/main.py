"""
Main CLI entry point for the JSON Redactor.

Usage:
    json-redact < data.json > anon.json
    json-redact --preserve=id,type --prune=users --pretty < data.json
    json-redact demo
"""

import logging
import sys
from typing import Any, Dict, Optional

import click
from click.core import ParameterSource

from . import DEFAULT_CONFIG, __version__
from .help_text import render_help, should_colorize
from .ingest.loader import (
    ConfigFileError,
    InvalidNumberError,
    JSONInputError,
    dump_json,
    load_options_file,
    merge_options,
    parse_key_list,
    parse_number,
    read_json,
)
from .redaction.random_source import make_random_source
from .redaction.redactor import RedactionConfig, Redactor
from .sample.generator import EXAMPLE_COMMAND, EXAMPLE_OPTIONS, SampleGenerator, example_document

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool):
    """Send package log records to stderr; stdout carries only JSON."""
    package_logger = logging.getLogger('json_redactor')
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)


def _stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _command_line_options(ctx: click.Context, **values: Any) -> Dict[str, Any]:
    """Keep only the options actually given on the command line."""
    given = {}
    for name, value in values.items():
        if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
            given[name] = value
    return given


def build_config(options: Dict[str, Any]) -> RedactionConfig:
    """
    Turn merged command-line style options into a redaction configuration.

    Args:
        options: Options keyed by command-line name (preserve, prune, ...)

    Returns:
        RedactionConfig with a random source seeded from options['seed']
    """
    return RedactionConfig(
        preserve_keys=parse_key_list(options.get('preserve')),
        prune_keys=parse_key_list(options.get('prune')),
        shuffle_keys=parse_key_list(options.get('shuffle')),
        string_replacement=options['string'],
        number_replacement=parse_number(options['number']),
        boolean_replacement=options['boolean'],
        random_source=make_random_source(options.get('seed')),
    )


@click.group(invoke_without_command=True, add_help_option=False)
@click.version_option(version=__version__)
@click.option('--help', '-h', 'show_help', is_flag=True, help='Show this message.')
@click.option('--string', 'string', default=None, help='Use this value for strings.')
@click.option('--number', 'number', default=None, help='Use this value for numbers.')
@click.option('--boolean', 'boolean', is_flag=True, help='Use true for booleans.')
@click.option('--preserve', '-k', default=None, help='Comma-separated keys to not redact.')
@click.option('--prune', '-d', default=None, help='Comma-separated keys of arrays to prune.')
@click.option('--shuffle', '-s', default=None, help='Comma-separated keys of arrays to shuffle.')
@click.option('--pretty', '-p', is_flag=True, help='Pretty-print the output.')
@click.option('--seed', type=click.IntRange(min=0), default=None,
              help='Random seed for reproducibility.')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='JSON file with default options.')
@click.option('--input', '-i', 'input_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='Read JSON from this file instead of stdin.')
@click.option('--output', '-o', 'output_path', type=click.Path(dir_okay=False),
              default=None, help='Write JSON to this file instead of stdout.')
@click.option('--verbose', '-v', is_flag=True, help='Log details and statistics to stderr.')
@click.pass_context
def cli(ctx, show_help: bool, string: Optional[str], number: Optional[str], boolean: bool,
        preserve: Optional[str], prune: Optional[str], shuffle: Optional[str], pretty: bool,
        seed: Optional[int], config_path: Optional[str], input_path: Optional[str],
        output_path: Optional[str], verbose: bool):
    """Preserve privacy by redacting JSON values."""
    if ctx.invoked_subcommand is not None:
        given = _command_line_options(
            ctx, string=string, number=number, boolean=boolean, preserve=preserve,
            prune=prune, shuffle=shuffle, pretty=pretty, seed=seed, config_path=config_path,
            input_path=input_path, output_path=output_path, verbose=verbose,
        )
        if given:
            names = ', '.join(f"--{name.replace('_path', '')}" for name in sorted(given))
            ctx.fail(f"{names} cannot be used with the '{ctx.invoked_subcommand}' command")
        return

    _configure_logging(verbose)

    if show_help or (input_path is None and _stdin_is_interactive()):
        click.echo(render_help(), color=should_colorize())
        sys.exit(0)

    # Validate --number before reading any input
    if number is not None:
        try:
            parse_number(number)
        except InvalidNumberError:
            _fail("--number must be a finite number")

    file_options = None
    if config_path:
        try:
            file_options = load_options_file(config_path)
        except ConfigFileError as e:
            _fail(str(e))

    flag_options = _command_line_options(
        ctx, string=string, number=number, boolean=boolean, preserve=preserve,
        prune=prune, shuffle=shuffle, pretty=pretty, seed=seed,
    )
    options = merge_options(DEFAULT_CONFIG, file_options, flag_options)
    config = build_config(options)
    logger.debug(
        f"preserve={sorted(config.preserve_keys)} prune={sorted(config.prune_keys)} "
        f"shuffle={sorted(config.shuffle_keys)} random_source={config.random_source!r}"
    )

    try:
        if input_path:
            with open(input_path, 'rb') as f:
                document = read_json(f)
        else:
            document = read_json(getattr(sys.stdin, 'buffer', sys.stdin))
    except JSONInputError as e:
        _fail(f"invalid JSON input: {e}")

    redactor = Redactor(config)
    redacted = redactor.redact(document)
    try:
        text = dump_json(redacted, pretty=options['pretty'])
    except (ValueError, RecursionError) as e:
        _fail(f"cannot write output: {e}")

    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text + "\n")
    else:
        click.echo(text)

    stats = redactor.get_stats()
    logger.info(f"Redaction stats: {stats}")
    if verbose:
        click.echo(
            f"Applied {stats['total_redactions']} redactions, "
            f"preserved {stats['values_preserved']} values, "
            f"pruned {stats['elements_pruned']} elements from {stats['arrays_pruned']} arrays, "
            f"shuffled {stats['arrays_shuffled']} arrays",
            err=True,
        )


def _format_options(options: Dict[str, Any]) -> str:
    parts = []
    for name, keys in options.items():
        parts.append(f"{name}={{{', '.join(repr(k) for k in sorted(keys))}}}")
    return ", ".join(parts)


@cli.command()
@click.option('--seed', type=click.IntRange(min=0), default=None,
              help='Random seed for reproducibility.')
@click.option('--synthetic', type=int, default=0,
              help='Redact a Faker document with this many people instead.')
def demo(seed: Optional[int], synthetic: int):
    """Redact a small example document and explain how."""
    if synthetic > 0:
        data = SampleGenerator(seed=seed if seed is not None else 42).document(n_people=synthetic)
        options = {
            'prune_keys': frozenset({'people'}),
            'shuffle_keys': frozenset({'people', 'tags'}),
            'preserve_keys': frozenset({'friends'}),
        }
        command = "json-redact --prune=people --shuffle=people,tags --preserve=friends"
    else:
        data = example_document()
        options = EXAMPLE_OPTIONS
        command = EXAMPLE_COMMAND

    config = RedactionConfig.from_options(
        dict(options, random_source=make_random_source(seed))
    )

    click.echo("Input document:\n")
    click.echo(dump_json(data, pretty=True))
    click.echo("\n" + "-" * 16 + "\n")
    click.echo("Command line:\n")
    click.echo(f"    {command}\n")
    click.echo("Python:\n")
    click.echo(f"    redact(data, {_format_options(options)})\n")
    click.echo("-" * 16 + "\n")
    click.echo(dump_json(Redactor(config).redact(data), pretty=True))
    if seed is None:
        click.echo("\nRun this again and you'll get a different result.")


def main():
    """Main entry point."""
    cli(prog_name="json-redact")


if __name__ == '__main__':
    main()
