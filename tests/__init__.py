"""Test suite for the cerber-ci package.

This package contains unit and integration tests validating YAML
decoding, AST building, diagnostics, the strict entry point, and the
command-line interface.
"""
