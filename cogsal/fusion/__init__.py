"""
Fusion 模块 - 跨尺度组合与特征融合

职责：
- 将同语义、不同尺度的子带重采样到统一分辨率并相加
- 将两张特征图按加权均值或逐点最大值融合
"""

from .combiner import (
    across_scale_addition,
    mean_fusion,
    max_fusion,
    resize_to,
    as_feature_map,
)
from .base import FusionModule

__all__ = [
    "across_scale_addition",
    "mean_fusion",
    "max_fusion",
    "resize_to",
    "as_feature_map",
    "FusionModule"
]
