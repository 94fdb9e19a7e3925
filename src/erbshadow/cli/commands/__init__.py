# topmark:header:start
#
#   project      : ErbShadow
#   file         : __init__.py
#   file_relpath : src/erbshadow/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands registered on the `erbshadow` group."""
