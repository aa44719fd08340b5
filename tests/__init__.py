"""Test suite for the medical discovery pipeline.

This package contains unit tests for the detection engine (alias
matching, citations, document types, noise and confidence) and the
discovery layer (validation, normalization, statistics). To run the
tests, execute `pytest` from the project root.
"""
