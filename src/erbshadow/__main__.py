# topmark:header:start
#
#   project      : ErbShadow
#   file         : __main__.py
#   file_relpath : src/erbshadow/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ErbShadow via ``python -m erbshadow``.

Delegates to :func:`erbshadow.cli.main.cli`, the single authoritative CLI
entry point.

Examples:
    Render a shadow source::

        python -m erbshadow render index.html.erb --ast index.json
"""

from __future__ import annotations

from erbshadow.cli.main import cli

if __name__ == "__main__":
    cli()
