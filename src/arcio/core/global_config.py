"""
global_config.py
Central configuration for the ARCIO library: debug level and the default
archive open options that every ArchiveConfig falls back to.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os


def _env_debug_level():
    value = os.environ.get("ARCIO_DEBUG_LEVEL")
    if value is None:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0


class GlobalConfig:
    _defaults = {
        "debug_level": 0,
        # Archive open options, forwarded to the backend untouched
        "verify": False,
        "password": None,
    }
    _settings = dict(_defaults, debug_level=_env_debug_level())

    @classmethod
    def set(cls, key, value):
        cls._settings[key] = value

    @classmethod
    def get(cls, key):
        return cls._settings.get(key, cls._defaults.get(key))

    @classmethod
    def reset(cls, key=None):
        if key is None:
            cls._settings = cls._defaults.copy()
        else:
            if key in cls._defaults:
                cls._settings[key] = cls._defaults[key]
            else:
                cls._settings.pop(key, None)

    @classmethod
    def keys(cls):
        return set(cls._defaults) | set(cls._settings)

    @classmethod
    def set_debug_level(cls, value: int):
        cls.set("debug_level", int(value))

    @classmethod
    def get_debug_level(cls) -> int:
        return cls.get("debug_level")
