"""Domain layer for CASK.

Pure domain types and rules: catalog records, tastings, badge checks and
their evaluation, domain events and errors. Nothing here performs I/O.
"""
