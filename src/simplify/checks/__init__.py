"""Rule routines, one module per elm/core area.

Importing this package registers every routine with the dispatch tables.
"""

from simplify.checks import basics, containers, expressions, lists, maybes, platform, strings

__all__ = ["basics", "containers", "expressions", "lists", "maybes", "platform", "strings"]
