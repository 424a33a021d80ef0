"""Ambient services for changeline: configuration, errors, logging, metrics."""
