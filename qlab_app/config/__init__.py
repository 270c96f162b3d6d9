"""
Configuration module.

Frozen defaults, YAML overrides and validation for the benchmark engine.
"""
