"""Pytest plugin providing isolated fieldwire containers.

Registered automatically through the ``pytest11`` entry point when fieldwire
is installed.
"""

from fieldwire._internal.integrations.pytest_plugin import fieldwire_container, fieldwire_context

__all__ = ["fieldwire_container", "fieldwire_context"]
