from .loader import load_config, load_config_with_overrides
from .schema import IndexConfig, OutputConfig, VersionFilter

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "IndexConfig",
    "OutputConfig",
    "VersionFilter",
]
