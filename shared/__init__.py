"""
Shared utilities for Command Center components.

- logging_config: consistent stdout/file logging setup for the API service and scripts
"""
