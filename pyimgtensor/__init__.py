"""pyimgtensor - convert images into raw model input tensors.

Keep top-level imports lightweight: heavy deps (cv2, PIL) are only imported
when the pipeline or its stages are first accessed.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "io",
    "normalization",
    "preprocessing",
    "reporting",
    # Pipeline
    "generate_tensor",
    "PipelineStage",
    "TensorGenConfig",
    "TensorGenResult",
    # Types
    "DataLayout",
    "ModelFrontEnd",
    "OutputElementType",
    "NormalizationParameters",
    "get_normalization_parameters",
    # Errors
    "ConfigurationError",
    "ImageLoadError",
    "TensorGenError",
    "TensorWriteError",
]


_LAZY_SUBMODULES = {
    "config",
    "io",
    "normalization",
    "preprocessing",
    "reporting",
}

_LAZY_EXPORTS = {
    "generate_tensor": ("pipeline", "generate_tensor"),
    "PipelineStage": ("pipeline", "PipelineStage"),
    "TensorGenResult": ("pipeline", "TensorGenResult"),
    "TensorGenConfig": ("config.schema", "TensorGenConfig"),
    "DataLayout": ("types", "DataLayout"),
    "ModelFrontEnd": ("types", "ModelFrontEnd"),
    "OutputElementType": ("types", "OutputElementType"),
    "NormalizationParameters": ("normalization.profiles", "NormalizationParameters"),
    "get_normalization_parameters": ("normalization.profiles", "get_normalization_parameters"),
    "ConfigurationError": ("errors", "ConfigurationError"),
    "ImageLoadError": ("errors", "ImageLoadError"),
    "TensorGenError": ("errors", "TensorGenError"),
    "TensorWriteError": ("errors", "TensorWriteError"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
