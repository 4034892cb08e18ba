"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, layer names, zone type labels
- logging: Logging setup for command-line and service hosts
- exceptions: Custom exception hierarchy
"""
