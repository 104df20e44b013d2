import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import yaml  # type: ignore
from dotenv import load_dotenv

from htmlattrs.attributes import HtmlAttributes
from htmlattrs.errors import HtmlAttributesError
from htmlattrs.json_utils import json_dumps
from htmlattrs.loader import load_attributes

try:
    __version__ = version("htmlattrs")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


def _parse_assignments(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, str]]:
    """Split ``KEY=VALUE`` options into pairs.

    Args:
        ctx: Click context (unused).
        param: The option being parsed.
        values: Raw option values.

    Returns:
        Pairs in the order they were given.
    """

    pairs = []
    for value in values:
        key, sep, text = value.partition("=")
        if not sep:
            raise click.BadParameter(
                f"expected KEY=VALUE, got {value!r}", ctx=ctx, param=param
            )
        pairs.append((key, text))
    return pairs


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="HTMLATTRS_LOG_FILE",
)
@click.version_option(__version__, prog_name="htmlattrs")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


def _load_file(path: str) -> HtmlAttributes:
    """Load an attribute file, reporting decode errors as click errors.

    Args:
        path: Location of the JSON or YAML file.

    Returns:
        The attributes stored in the file.
    """

    try:
        return load_attributes(Path(path))
    except HtmlAttributesError:
        raise
    except (yaml.YAMLError, ValueError) as exc:
        # orjson and json decode errors are both ``ValueError`` subclasses.
        raise click.FileError(
            path, hint=f"malformed content: {exc}"
        ) from exc


@cli.command()
@click.option(
    "--file",
    "files",
    multiple=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    help="JSON or YAML file with a mapping of attributes.",
)
@click.option(
    "--attr",
    "assignments",
    multiple=True,
    callback=_parse_assignments,
    metavar="KEY=VALUE",
    help="Set an attribute, replacing any previous value.",
)
@click.option(
    "--class",
    "classes",
    multiple=True,
    metavar="NAME",
    help="Append a CSS class.",
)
@click.option(
    "--tag",
    default=None,
    help="Wrap the attributes in an opening tag with this name.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write output to FILE instead of the console.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json", "yaml"]),
    default="html",
    envvar="HTMLATTRS_FORMAT",
    help="Output format.",
)
def render(
    files: tuple[str, ...] = (),
    assignments: Optional[list[tuple[str, str]]] = None,
    classes: tuple[str, ...] = (),
    tag: Optional[str] = None,
    output_path: Optional[str] = None,
    output_format: str = "html",
) -> None:
    """Merge attributes from files and options and print the result.

    Files are applied first, in order, then ``--attr`` values and finally
    ``--class`` values.

    Args:
        files: Attribute files to merge.
        assignments: ``(key, value)`` pairs from ``--attr``.
        classes: Class names from ``--class``.
        tag: Optional tag name used to wrap the rendered attributes.
        output_path: Optional file for the output.
        output_format: Format of the output.
    """

    try:
        bag = HtmlAttributes()
        for path in files:
            bag.attrs(_load_file(path))
        bag.attrs(assignments or [])
        for class_name in classes:
            bag.add_class(class_name)
    except HtmlAttributesError as exc:
        raise click.UsageError(exc.message) from exc

    logging.debug("Rendering %d attributes as %s", len(bag), output_format)

    data = bag.to_dict()

    if output_format == "json":
        content = json_dumps(data, indent=True)
    elif output_format == "yaml":
        content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    elif tag:
        content = f"<{tag}{bag}>"
    else:
        content = str(bag)

    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
    else:
        click.echo(content)
