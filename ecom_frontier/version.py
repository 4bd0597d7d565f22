"""Version and configuration-schema constants for ecom_frontier."""

__all__ = ["__version__", "CONFIG_SCHEMA_VERSION"]

#: Package version (SemVer); also used in the default User-Agent.
__version__ = "0.1.0"

#: Bump when a config change needs a step in ``config.migrate_config``.
CONFIG_SCHEMA_VERSION = 1
