"""Adapters that build events from tabular input."""
