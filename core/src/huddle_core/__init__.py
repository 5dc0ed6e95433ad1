from huddle_core.config import CoreConfig, LiveKitConfig, load_core_config

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "LiveKitConfig",
    "__version__",
    "load_core_config",
]
