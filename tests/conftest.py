"""
Root pytest configuration for parameter-sync.
"""

from parameter_sync.config.logging import bootstrap_logging

# Fixtures from the plugin are also available when the package is not installed
pytest_plugins = ["parameter_sync.pytest_plugin"]

bootstrap_logging()
