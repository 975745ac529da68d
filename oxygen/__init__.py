"""Oxygen: a command-line companion for Rust development."""

__version__ = "0.2.0"
