#!/usr/bin/env python3
"""
fsplay - File System Playground

Main entry point for the fsplay CLI application.
"""

import click
from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table

from fsplay import FileSystemError, __version__
from fsplay.config import DEFAULT_CONFIG_PATH, load_config, build_layout, build_logger
from fsplay.file_manager import AppDirectory, AppFile, FileOperator


console = Console()

DIRECTORY_CHOICES = click.Choice([d.name.lower() for d in AppDirectory], case_sensitive=False)

EXIT_FS_ERROR = 1
EXIT_OUT_OF_BOUNDS = 3


def get_operator(ctx: click.Context) -> FileOperator:
    """Get a file operator for the configured app directories."""
    config = ctx.obj["config"]
    layout = build_layout(config)
    layout.ensure()
    return FileOperator(layout, build_logger(config))


def to_directory(name: str) -> AppDirectory:
    return AppDirectory[name.upper()]


def directory_option(default: str = "documents"):
    return click.option(
        "--dir", "directory", type=DIRECTORY_CHOICES, default=default, show_default=True,
        help="App directory to operate in."
    )


def report_error(error: FileSystemError) -> None:
    """Print a formatted error report and exit."""
    console.print(error.report.format(), style="red", markup=False, highlight=False)
    raise SystemExit(EXIT_FS_ERROR)


@click.group()
@click.version_option(version=__version__, prog_name="fsplay")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
@click.pass_context
def fsplay(ctx: click.Context, config_path: str):
    """
    fsplay - File System Playground

    Read, write, rename, move, copy, delete and inspect files in a small
    set of app directories.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


@fsplay.command()
@click.pass_context
def path(ctx):
    """Show where each app directory lives."""
    layout = build_layout(ctx.obj["config"])
    for directory in AppDirectory:
        click.echo(f"{directory.value:<10} {layout.get_path(directory)}")


@fsplay.command()
@click.argument("name")
@click.argument("text")
@directory_option()
@click.pass_context
def write(ctx, name: str, text: str, directory: str):
    """Write TEXT to file NAME."""
    try:
        written = get_operator(ctx).write_file(text, to_directory(directory), name)
    except FileSystemError as e:
        report_error(e)
    console.print(f"[green]Wrote[/green] {written}", highlight=False)


@fsplay.command()
@click.argument("name")
@directory_option()
@click.pass_context
def cat(ctx, name: str, directory: str):
    """Print the contents of file NAME."""
    try:
        text = get_operator(ctx).read_file(to_directory(directory), name)
    except FileSystemError as e:
        report_error(e)
    click.echo(text)


@fsplay.command()
@click.argument("name")
@click.argument("length", type=click.IntRange(min=0))
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True,
              help="Byte offset to start reading from.")
@directory_option()
@click.pass_context
def read(ctx, name: str, length: int, offset: int, directory: str):
    """Read LENGTH bytes of file NAME."""
    try:
        text = get_operator(ctx).read_bytes(name, length, offset, to_directory(directory))
    except FileSystemError as e:
        report_error(e)

    if text is None:
        console.print("[yellow]Cannot read out of bounds.[/yellow]")
        raise SystemExit(EXIT_OUT_OF_BOUNDS)
    click.echo(text)


@fsplay.command("ls")
@directory_option()
@click.pass_context
def list_files(ctx, directory: str):
    """List files in an app directory."""
    try:
        files = get_operator(ctx).list_directory(to_directory(directory))
    except FileSystemError as e:
        report_error(e)

    if not files:
        console.print("[dim]No files found.[/dim]")
        return

    table = Table(title=f"Listing: {to_directory(directory).value}")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")
    table.add_column("Mode")

    for info in files:
        name = f"[bold]{escape(info.name)}/[/bold]" if info.is_dir else escape(info.name)
        table.add_row(name, str(info.size), info.modified.split(".")[0], info.permissions)

    console.print(table)


@fsplay.command()
@click.argument("name")
@directory_option()
@click.pass_context
def info(ctx, name: str, directory: str):
    """Show the attributes of file NAME."""
    try:
        attribs = get_operator(ctx).attributes(to_directory(directory), name)
    except FileSystemError as e:
        report_error(e)

    table = Table(title=name, show_header=False)
    table.add_column("Attribute", style="bold")
    table.add_column("Value")
    for key, value in attribs.items():
        table.add_row(key, str(value))
    console.print(table)


@fsplay.command()
@click.argument("name")
@directory_option()
@click.pass_context
def rm(ctx, name: str, directory: str):
    """Delete file NAME."""
    try:
        get_operator(ctx).delete_file(to_directory(directory), name)
    except FileSystemError as e:
        report_error(e)
    console.print(f"[green]Deleted[/green] {name}", highlight=False)


@fsplay.command()
@click.argument("old_name")
@click.argument("new_name")
@directory_option()
@click.pass_context
def rename(ctx, old_name: str, new_name: str, directory: str):
    """Rename OLD_NAME to NEW_NAME."""
    try:
        get_operator(ctx).rename_file(to_directory(directory), old_name, new_name)
    except FileSystemError as e:
        report_error(e)
    console.print(f"[green]Renamed[/green] {old_name} → {new_name}", highlight=False)


@fsplay.command()
@click.argument("name")
@click.argument("dest", type=DIRECTORY_CHOICES)
@directory_option()
@click.pass_context
def mv(ctx, name: str, dest: str, directory: str):
    """Move file NAME into app directory DEST."""
    try:
        moved = get_operator(ctx).move_file(name, to_directory(directory), to_directory(dest))
    except FileSystemError as e:
        report_error(e)
    console.print(f"[green]Moved[/green] {name} → {moved}", highlight=False)


@fsplay.command()
@click.argument("name")
@click.argument("dest", type=DIRECTORY_CHOICES)
@click.option("--as", "new_name", default=None, help="Name of the copy (default: NAME + '1').")
@directory_option()
@click.pass_context
def cp(ctx, name: str, dest: str, new_name: str, directory: str):
    """Copy file NAME into app directory DEST."""
    try:
        copied = get_operator(ctx).copy_file(name, to_directory(directory), to_directory(dest), new_name)
    except FileSystemError as e:
        report_error(e)
    console.print(f"[green]Copied[/green] {name} → {copied}", highlight=False)


@fsplay.command()
@click.argument("name")
@click.argument("extension")
@directory_option()
@click.pass_context
def ext(ctx, name: str, extension: str, directory: str):
    """Change the extension of file NAME to EXTENSION."""
    try:
        new_name = get_operator(ctx).change_extension(name, to_directory(directory), extension)
    except FileSystemError as e:
        report_error(e)
    console.print(f"[green]Renamed[/green] {name} → {new_name}", highlight=False)


@fsplay.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.option("--failures", is_flag=True, help="Only show failed operations.")
@click.option("--export", "export_format", type=click.Choice(["json", "csv"]), default=None,
              help="Print the whole log in this format instead of a table.")
@click.option("--clear", is_flag=True, help="Clear the log, keeping a backup.")
@click.pass_context
def audit(ctx, limit: int, failures: bool, export_format: str, clear: bool):
    """View, export or clear the audit log."""
    logger = build_logger(ctx.obj["config"])

    if clear:
        click.confirm("Clear the audit log?", abort=True)
        logger.clear(confirm=True)
        console.print("[green]Audit log cleared.[/green]")
        return

    if export_format:
        click.echo(logger.export(export_format).rstrip("\n"))
        return

    entries = logger.get_failures(limit=limit) if failures else logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Description")
    table.add_column("Status")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"
        elif entry.status == "out_of_bounds":
            status_str = f"[yellow]{entry.status}[/yellow]"

        description = entry.action_description
        table.add_row(
            time_str,
            entry.action_type,
            description[:50] + "..." if len(description) > 50 else description,
            status_str
        )

    console.print(table)


@fsplay.command()
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("--length", type=click.IntRange(min=0), default=48, show_default=True)
@click.pass_context
def demo(ctx, offset: int, length: int):
    """Write the sample files to Documents and read one back."""
    operator = get_operator(ctx)
    app_file = AppFile("dharma.txt", AppDirectory.DOCUMENTS, operator)

    console.print(Panel.fit(
        f"[bold blue]fsplay demo[/bold blue]\n"
        f"[dim]{operator.layout.get_path(AppDirectory.DOCUMENTS)}[/dim]",
        title="📂 Documents"
    ))

    try:
        app_file.write()
        contents = app_file.read(offset=offset, length=length)
    except FileSystemError as e:
        report_error(e)

    if contents is None:
        console.print("[yellow]Returned nothing: the request is out of bounds.[/yellow]")
    else:
        click.echo(contents)


if __name__ == "__main__":
    fsplay()
