"""Pytest root configuration.

Placing this file at the repository root puts the root on sys.path so
tests can import the quakefeed package without installing it.
"""
