from __future__ import annotations

from .io import load_config
from .schema import TensorGenConfig

__all__ = ["TensorGenConfig", "load_config"]
