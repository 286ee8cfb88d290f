import os
import typer
from typing import Optional
from typing_extensions import Annotated

from rich.table import Table
import rich

from pkgstub._src.config import Settings
from pkgstub._src.constants import LogLevel
from pkgstub._src.index import LocalIndex, RemoteIndex
from pkgstub._src.log import setup_logging
from pkgstub._src.outdated import find_outdated
from pkgstub.cli.spec import spec_command


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(
    spec_command,
    name="spec",
    help="inspect a single installed package",
    rich_help_panel="Packages",
)


@app.callback()
def main(
    log_level: Annotated[Optional[LogLevel], typer.Option(
        "--log-level",
        help="verbosity of log output on stderr, defaults to PKGSTUB_LOG_LEVEL"
    )] = None,
):
    """Inspect installed packages without evaluating their descriptors"""
    if log_level is None:
        log_level = Settings.from_env().log_level
    setup_logging(log_level.value)


@app.command("list")
def list_packages(
    base_dir: str = typer.Option(
        None,
        help="installation root to list"
    ),
):
    """List installed packages"""
    if base_dir is None:
        base_dir = Settings.from_env().home
    else:
        base_dir = os.path.abspath(base_dir)

    table = Table(title="Packages")
    table.add_column("name", justify="left", no_wrap=True)
    table.add_column("version", justify="left", no_wrap=True)
    table.add_column("platform", justify="left", no_wrap=True)
    table.add_column("default", justify="left", no_wrap=True)
    table.add_column("stubbed", justify="left", no_wrap=True)

    for stub in LocalIndex(base_dir).all_packages():
        table.add_row(
            stub.name,
            str(stub.version),
            str(stub.platform),
            "yes" if stub.is_default_package else "",
            "yes" if stub.is_stubbed() else "",
        )

    rich.print(table)


@app.command()
def outdated(
    base_dir: str = typer.Option(
        None,
        help="installation root to check"
    ),
    source: str = typer.Option(
        None,
        help="path to the remote package index"
    ),
):
    """Display all packages that need updates"""
    settings = Settings.from_env()
    if base_dir is None:
        base_dir = settings.home
    else:
        base_dir = os.path.abspath(base_dir)

    if source is None:
        source = settings.source
    if source is None:
        raise typer.BadParameter("no remote index given, use --source or PKGSTUB_SOURCE")

    remote = RemoteIndex.from_file(source)
    for pkg in find_outdated(LocalIndex(base_dir), remote):
        print(pkg)
