"""Allow ``python -m dsjob`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m dsjob`` behaves identically to the ``dsjob`` console
script.
"""

from __future__ import annotations

from dsjob.cli.app import cli

if __name__ == "__main__":
    cli()
