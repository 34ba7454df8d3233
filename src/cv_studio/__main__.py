"""Allow ``python -m cv_studio`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m cv_studio`` behaves identically to the ``cv-studio``
console script.
"""

from __future__ import annotations

from cv_studio.cli.app import cli

if __name__ == "__main__":
    cli()
