"""Helpers for command-line pack tooling: flags, spinner, logging, filesystem and template functions."""

__version__ = "0.1.0"