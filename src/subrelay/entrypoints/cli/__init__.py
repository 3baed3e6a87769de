"""The ``subrelay`` command-line interface."""
