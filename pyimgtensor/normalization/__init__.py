from __future__ import annotations

from .profiles import PROFILES, NormalizationParameters, get_normalization_parameters

__all__ = [
    "PROFILES",
    "NormalizationParameters",
    "get_normalization_parameters",
]
