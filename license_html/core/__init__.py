"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Metafield identifiers and retry defaults
- exceptions: Custom exception hierarchy
- ingress: Invocation payload parsing
"""
