"""The ``cask`` command-line interface."""
