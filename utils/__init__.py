"""
Shared utilities: configuration, logging, errors, metrics
"""
