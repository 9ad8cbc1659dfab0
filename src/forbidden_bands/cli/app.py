"""Typer CLI application."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

import forbidden_bands as fb
from forbidden_bands.core.constants import DEFAULT_CAPACITY

# "Hello, world!" in a PETSCII block graphics border
HELLO_WORLD = bytes([
    0x0d, 0x0a, 0xb0, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60,
    0x60, 0x60, 0x60, 0xae, 0x0d, 0x0a, 0x7d, 0x20, 0x48, 0x0e, 0x45, 0x4c, 0x4c, 0x4f, 0x2c,
    0x20, 0x57, 0x4f, 0x52, 0x4c, 0x44, 0x21, 0x20, 0x8e, 0x7d, 0x0d, 0x0a, 0xad, 0x60, 0x60,
    0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0x60, 0xbd, 0x0d,
    0x0a,
])


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="forbidden-bands",
        help="Convert Commodore PETSCII to and from Unicode.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def load_tables(config: Optional[Path]) -> fb.TableSet:
        try:
            return fb.load_config(config) if config else fb.default_tables()
        except fb.ConfigError as e:
            err_console.print(f"[red]{e}[/]")
            raise typer.Exit(1)

    @app.callback()
    def main(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
    ) -> None:
        """Convert Commodore PETSCII to and from Unicode."""
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(message)s",
                handlers=[RichHandler(console=err_console, show_path=False)],
            )

    @app.command()
    def decode(
        path: Annotated[Optional[Path], typer.Argument(help="PETSCII file (default: stdin)")] = None,
        capacity: Annotated[int, typer.Option("--capacity", "-c", help="Maximum string length in bytes")] = DEFAULT_CAPACITY,
        strip_padding: Annotated[bool, typer.Option("--strip-padding", "-p", help="Drop 0xA0 padding bytes")] = False,
        identity: Annotated[bool, typer.Option("--identity", help="Map bytes to code points of the same value")] = False,
        config: Annotated[Optional[Path], typer.Option("--config", help="Character table JSON file")] = None,
    ) -> None:
        """Decode PETSCII bytes to Unicode text."""
        try:
            data = path.read_bytes() if path else sys.stdin.buffer.read()
        except OSError as e:
            err_console.print(f"[red]Cannot read {path or 'stdin'}: {e.strerror}[/]")
            raise typer.Exit(1)

        try:
            if strip_padding:
                ps = fb.PetsciiString.from_bytes_strip_padding(data, capacity)
            else:
                ps = fb.PetsciiString.from_bytes(data, capacity)
        except fb.OversizeError as e:
            err_console.print(f"[red]{e}[/]")
            raise typer.Exit(1)

        tables = None if identity else load_tables(config)
        print(fb.decode(ps, tables))

    @app.command()
    def encode(
        text: Annotated[Optional[str], typer.Argument(help="Text to encode (default: stdin)")] = None,
        capacity: Annotated[int, typer.Option("--capacity", "-c", help="Maximum string length in bytes")] = DEFAULT_CAPACITY,
        output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write raw bytes to a file")] = None,
        config: Annotated[Optional[Path], typer.Option("--config", help="Character table JSON file")] = None,
    ) -> None:
        """Encode Unicode text to PETSCII bytes."""
        if text is None:
            text = sys.stdin.read()
        tables = load_tables(config)

        try:
            ps = fb.encode(text, tables, capacity)
        except fb.OversizeError as e:
            err_console.print(f"[red]{e}[/]")
            raise typer.Exit(1)

        if output:
            try:
                output.write_bytes(bytes(ps))
            except OSError as e:
                err_console.print(f"[red]Cannot write {output}: {e.strerror}[/]")
                raise typer.Exit(1)
            console.print(f"[green]Wrote {len(ps)} bytes to {output}[/]")
        else:
            print(" ".join(f"{b:02x}" for b in ps))

    @app.command()
    def tables(
        output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output path")] = None,
    ) -> None:
        """Export the built-in character tables as JSON."""
        default = fb.load_default_config()
        if output:
            try:
                fb.save_config(default, output)
            except fb.ConfigError as e:
                err_console.print(f"[red]{e}[/]")
                raise typer.Exit(1)
            console.print(f"[green]Saved character tables to {output}[/]")
        else:
            print(fb.config_to_json(default))

    @app.command()
    def hello(
        config: Annotated[Optional[Path], typer.Option("--config", help="Character table JSON file")] = None,
    ) -> None:
        """Print "Hello, world!" in a PETSCII block graphics border."""
        ps = fb.PetsciiString.from_bytes(HELLO_WORLD, len(HELLO_WORLD))
        print(fb.decode(ps, load_tables(config)))

    return app
