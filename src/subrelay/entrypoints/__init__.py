"""Entry points into SUBRELAY (currently the command-line interface)."""
