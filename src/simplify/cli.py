"""elm-simplify CLI."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import fields, is_dataclass
from pathlib import Path

import click

from simplify import __version__
from simplify.config import SimplifyConfig, config_for
from simplify.errors import DiagnosticRenderer, SourceError
from simplify.parser import parse_module
from simplify.simplifier import fix_source, simplify_source
from simplify.source import SourceFile

logger = logging.getLogger(__name__)


def _is_excluded(path: Path, config: SimplifyConfig) -> bool:
    try:
        relative = path.resolve().relative_to(config.root.resolve())
    except ValueError:
        relative = path
    return any(relative.match(pattern) for pattern in config.paths.exclude)


def _elm_files(paths: tuple[str, ...], config: SimplifyConfig) -> list[Path]:
    """Every .elm file named by ``paths``, or under the configured source directories."""
    targets = [Path(p) for p in paths] or [
        config.root / d for d in config.paths.source_directories
    ]
    files: list[Path] = []
    for target in targets:
        if target.is_dir():
            files.extend(sorted(target.rglob("*.elm")))
        elif target.suffix == ".elm" and target.exists():
            files.append(target)
        else:
            logger.warning("skipping %s: not an .elm file or directory", target)
    return [f for f in files if not _is_excluded(f, config)]


def _load_config(paths: tuple[str, ...]) -> SimplifyConfig:
    return config_for(Path(paths[0]) if paths else None)


def _render_errors(e: SourceError, source: SourceFile, renderer: DiagnosticRenderer) -> None:
    for diag in e.diagnostics:
        click.echo(renderer.render(diag, source), err=True)


@click.group()
@click.version_option(__version__, prog_name="simplify")
@click.option("--verbose", is_flag=True, help="Log debug output.")
@click.option("--no-color", is_flag=True, help="Render diagnostics without colors.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, no_color: bool) -> None:
    """Simplify Elm code: find and fix expressions that can be written more simply."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = DiagnosticRenderer(color=not no_color)


@main.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.pass_obj
def check(renderer: DiagnosticRenderer, paths: tuple[str, ...]) -> None:
    """Report simplifications in Elm source files."""
    config = _load_config(paths)
    files = _elm_files(paths, config)
    if not files:
        click.echo("warning: no .elm files found", err=True)
        return

    found = 0
    had_errors = False
    for elm_file in files:
        text = elm_file.read_text()
        try:
            source, diagnostics = simplify_source(text, str(elm_file), config)
        except SourceError as e:
            had_errors = True
            _render_errors(e, SourceFile(text, str(elm_file)), renderer)
            continue
        for diag in diagnostics:
            click.echo(renderer.render(diag, source))
            click.echo()
        found += len(diagnostics)

    if found:
        click.echo(f"found {found} simplification(s) in {len(files)} file(s)")
    else:
        click.echo(f"checked {len(files)} file(s): nothing to simplify")
    if found or had_errors:
        raise SystemExit(1)


@main.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--check", "check_only", is_flag=True, help="Report files that would change without writing them.")
@click.pass_obj
def fix(renderer: DiagnosticRenderer, paths: tuple[str, ...], check_only: bool) -> None:
    """Apply simplifications to Elm source files."""
    config = _load_config(paths)
    files = _elm_files(paths, config)
    if not files:
        click.echo("warning: no .elm files found", err=True)
        return

    would_change = False
    had_errors = False
    for elm_file in files:
        text = elm_file.read_text()
        filename = str(elm_file)
        try:
            result = fix_source(text, filename, config)
        except SourceError as e:
            had_errors = True
            _render_errors(e, SourceFile(text, filename), renderer)
            continue
        if not result.changed(text):
            continue
        if check_only:
            click.echo(f"would simplify {filename}")
            would_change = True
        else:
            elm_file.write_text(result.text)
            click.echo(f"simplified {filename} ({result.applied} edit(s), {result.passes} pass(es))")

    if had_errors or (check_only and would_change):
        raise SystemExit(1)


@main.command()
def lsp() -> None:
    """Start the elm-simplify language server."""
    from simplify.lsp import main as lsp_main

    lsp_main()


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.pass_obj
def view(renderer: DiagnosticRenderer, file: str) -> None:
    """View the AST of an Elm source file."""
    text = Path(file).read_text()
    filename = str(file)

    try:
        module = parse_module(text, filename)
    except SourceError as e:
        _render_errors(e, SourceFile(text, filename), renderer)
        raise SystemExit(1)

    for line in _ast_lines(module):
        click.echo(line)


def _ast_lines(node: object, depth: int = 0) -> Iterator[str]:
    """Indented lines describing ``node``; ranges are left out."""
    indent = "  " * depth
    if not is_dataclass(node):
        yield f"{indent}{node!r}"
        return
    yield f"{indent}{type(node).__name__}"
    for f in fields(node):
        if f.name.endswith("range"):
            continue
        value = getattr(node, f.name)
        if value is None:
            continue
        if isinstance(value, list) and value:
            yield f"{indent}  {f.name}:"
            for item in value:
                yield from _ast_lines(item, depth + 2)
        elif is_dataclass(value):
            yield f"{indent}  {f.name}:"
            yield from _ast_lines(value, depth + 2)
        else:
            yield f"{indent}  {f.name}: {value!r}"
