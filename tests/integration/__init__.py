"""Integration tests for page operations.

These tests run PageActions over the real requests-based transport with a
mocked Session, covering URL building, error translation and notification
sequences together.
"""
