# topmark:header:start
#
#   project      : SrcTrim
#   file         : __init__.py
#   file_relpath : src/srctrim/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim CLI subcommands."""
