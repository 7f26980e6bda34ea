"""Periodic document watcher: fetch, extract with XPath targets, follow continuations."""

__version__ = "0.1.0"
