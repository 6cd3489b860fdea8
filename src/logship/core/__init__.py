"""Shipping engine: splitting, throttling, bootstrap, submission, buffering."""
