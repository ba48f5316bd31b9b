"""Extension layer — name source plugins via pluggy.

Discovery: entry points in the ``namebingo.plugins`` group plus single-file
plugins in ``.namebingo/plugins/``.
INVARIANT: A broken plugin is logged and skipped, never fatal.
"""

from namebingo.plugins.manager import PluginManager

__all__ = ["PluginManager"]
