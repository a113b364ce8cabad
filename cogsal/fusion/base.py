"""
FusionModule - 融合模块入口

根据配置选择融合方法，并将两两融合推广到多张特征图。
"""

from typing import Sequence

import numpy as np
from omegaconf import DictConfig

from .combiner import as_feature_map, max_fusion, mean_fusion


FUSION_METHODS = ("mean", "max")


class FusionModule:
    """融合模块"""

    def __init__(self, cfg: DictConfig):
        """
        初始化融合模块

        Args:
            cfg: 配置对象，需包含 fusion 段
        """
        self.cfg = cfg.fusion
        self.feature_method = self.cfg.get("feature_method", "mean")
        self.conspicuity_method = self.cfg.get("conspicuity_method", "mean")

    def fuse(
        self,
        maps: Sequence[np.ndarray],
        method: str | None = None,
        weights: Sequence[float] | None = None
    ) -> np.ndarray:
        """
        融合多张特征图

        输出分辨率与第一张图一致。
        mean：整体加权均值；max：先按权重缩放再逐点取最大值。

        Args:
            maps: 特征图列表，至少一张
            method: "mean" | "max"，默认使用 feature_method
            weights: 每张图的权重，默认全为 1.0

        Returns:
            float32 融合结果
        """
        method = method or self.feature_method
        if method not in FUSION_METHODS:
            raise ValueError(f"未知的融合方法: {method}，可选: {FUSION_METHODS}")
        if len(maps) == 0:
            raise ValueError("融合至少需要一张特征图")
        if weights is None:
            weights = [1.0] * len(maps)
        if len(weights) != len(maps):
            raise ValueError(
                f"权重数量 {len(weights)} 与特征图数量 {len(maps)} 不一致"
            )

        if method == "mean":
            fused = as_feature_map(maps[0]).copy()
            acc_weight = weights[0]
            for image, w in zip(maps[1:], weights[1:]):
                # 将新图对齐到已融合结果的分辨率
                fused = mean_fusion(image, fused, w, acc_weight)
                acc_weight += w
            return fused

        # max 融合需要预先缩放
        fused = as_feature_map(maps[0]) * weights[0]
        for image, w in zip(maps[1:], weights[1:]):
            fused = max_fusion(as_feature_map(image) * w, fused)
        return fused.astype(np.float32)
