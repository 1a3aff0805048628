"""Processor configuration loading."""

from echonexus.config.settings import (
    ProcessorConfig,
    ProcessorConfigError,
    ResolvedPaths,
    SyncSettings,
    dump_default_config,
    load_processor_config,
)

__all__ = [
    "ProcessorConfig",
    "ProcessorConfigError",
    "ResolvedPaths",
    "SyncSettings",
    "dump_default_config",
    "load_processor_config",
]
