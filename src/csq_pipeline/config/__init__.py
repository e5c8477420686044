from .loader import load_config, load_config_with_overrides
from .schema import AnnotationConfig, IOConfig, PipelineConfig

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "PipelineConfig",
    "AnnotationConfig",
    "IOConfig",
]
