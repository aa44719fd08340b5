"""Integration test package.

These tests exercise snapshot persistence, CSV export and the CLI
end to end against temporary directories. They need no network access.
"""
