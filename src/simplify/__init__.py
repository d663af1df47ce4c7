"""elm-simplify: find and fix Elm expressions that can be written more simply."""

__version__ = "0.1.0"

from simplify.simplifier import analyze, fix_source, simplify_source  # noqa: E402

__all__ = ["__version__", "analyze", "fix_source", "simplify_source"]
