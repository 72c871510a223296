"""
Connector Dungeon Pipeline Module.

Provides generator settings and debug export.
"""

from .settings import (
    GeneratorSettings,
    SettingsError,
    save_settings,
    load_settings,
)

__all__ = [
    'GeneratorSettings',
    'SettingsError',
    'save_settings',
    'load_settings',
]
