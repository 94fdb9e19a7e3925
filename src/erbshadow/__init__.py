# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErbShadow package.

ErbShadow turns ERB templates into *shadow* Ruby sources: buffers with the
exact byte length and line layout of the template that contain only Ruby
code, so a Ruby linter can analyze the embedded code and its diagnostics map
back onto the template unchanged.
"""

from __future__ import annotations
