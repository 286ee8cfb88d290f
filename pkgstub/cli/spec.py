import os
import typer

from pkgstub._src.config import Settings
from pkgstub._src.exceptions import DescriptorLoadError, ExtensionBuildFailed
from pkgstub._src.index import LocalIndex
from pkgstub._src.models.version import Version
from pkgstub._src.stub_specification import StubSpecification


spec_command = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _find(name: str, version: str | None, base_dir: str | None) -> StubSpecification:
    if base_dir is None:
        base_dir = Settings.from_env().home
    else:
        base_dir = os.path.abspath(base_dir)

    stubs = LocalIndex(base_dir).find_by_name(name)
    if version is not None:
        wanted = Version(version)
        stubs = [stub for stub in stubs if stub.version == wanted]
    if not stubs:
        print(f"package {name} is not installed")
        raise typer.Exit(code=1)
    return stubs[-1]


@spec_command.command()
def show(
    ctx: typer.Context,
    name: str = typer.Argument(help="package name"),
    version: str = typer.Option(
        None,
        help="version to show, defaults to the newest installed"
    ),
    base_dir: str = typer.Option(
        None,
        help="installation root"
    ),
):
    """Show the metadata of an installed package"""
    stub = _find(name, version, base_dir)

    print(f"name: {stub.name}")
    print(f"version: {stub.version}")
    print(f"platform: {stub.platform}")
    print(f"full name: {stub.full_name}")
    print(f"require paths: {', '.join(stub.require_paths)}")
    print(f"extensions: {', '.join(stub.extensions)}")
    print(f"default: {stub.is_default_package}")
    print(f"stubbed: {stub.is_stubbed()}")
    print(f"activated: {stub.is_activated()}")
    print(f"missing extensions: {stub.has_missing_extensions()}")


@spec_command.command()
def files(
    ctx: typer.Context,
    name: str = typer.Argument(help="package name"),
    version: str = typer.Option(
        None,
        help="version to list, defaults to the newest installed"
    ),
    base_dir: str = typer.Option(
        None,
        help="installation root"
    ),
):
    """List the files of an installed package"""
    stub = _find(name, version, base_dir)
    try:
        package_files = stub.files
    except DescriptorLoadError as err:
        print(err.msg)
        raise typer.Exit(code=1)

    for path in package_files:
        print(path)


@spec_command.command()
def build_extensions(
    ctx: typer.Context,
    name: str = typer.Argument(help="package name"),
    version: str = typer.Option(
        None,
        help="version to build, defaults to the newest installed"
    ),
    base_dir: str = typer.Option(
        None,
        help="installation root"
    ),
):
    """Build the native extensions of an installed package"""
    stub = _find(name, version, base_dir)
    if not stub.has_missing_extensions():
        print(f"{stub.full_name} has no missing extensions")
        return

    try:
        stub.build_extensions()
    except (DescriptorLoadError, ExtensionBuildFailed) as err:
        print(err.msg)
        raise typer.Exit(code=1)
    print(f"built extensions for {stub.full_name}")
