"""Relational database plumbing: engine, dialects, types, schema and migrations."""
