"""Entrypoints for CASK: the ``cask`` CLI and the HTTP API.

Entrypoints only parse input, call `cask.bootstrap` and render output.
"""
