"""
CenterSurround - Center-surround 对比

center 金字塔：对通道图构建 Gaussian 金字塔（sigma = center_sigma）
surround 金字塔：在 center 金字塔每层上再模糊（sigma = surround_sigma）

on_off = max(center - surround, 0)  亮中心、暗周围
off_on = max(surround - center, 0)  暗中心、亮周围
"""

import math

import numpy as np

from ..context import ContrastMaps
from ..fusion import across_scale_addition
from ..pyramid import GaussianPyramid


class CenterSurround:
    """Center-surround 对比计算器"""

    def __init__(
        self,
        num_layers: int = 4,
        center_sigma: float = 2.0,
        surround_sigma: float = math.sqrt(5),
        border: str = "replicate"
    ):
        """
        初始化

        Args:
            num_layers: 金字塔层数
            center_sigma: center 金字塔的模糊尺度
            surround_sigma: surround 相对 center 的再模糊尺度
            border: 边界策略
        """
        self.num_layers = num_layers
        self.center_sigma = center_sigma
        self.surround_sigma = surround_sigma
        self.border = border

    def build_pyramids(
        self,
        channel: np.ndarray
    ) -> tuple[GaussianPyramid, GaussianPyramid]:
        """构建 center / surround 金字塔"""
        center = GaussianPyramid(
            channel,
            self.num_layers,
            sigma=self.center_sigma,
            border=self.border
        )
        surround = GaussianPyramid.from_pyramid(
            center, self.surround_sigma, border=self.border
        )
        return center, surround

    def compute(self, channel: np.ndarray) -> ContrastMaps:
        """
        计算单通道的对比图

        Args:
            channel: float32 (H,W) 通道图

        Returns:
            ContrastMaps，跨尺度和的分辨率与 channel 一致
        """
        center, surround = self.build_pyramids(channel)

        on_off = []
        off_on = []
        for i in range(center.num_layers()):
            c = center.get(i)
            s = surround.get(i)
            on_off.append(np.maximum(c - s, 0).astype(np.float32))
            off_on.append(np.maximum(s - c, 0).astype(np.float32))

        return ContrastMaps(
            on_off=on_off,
            off_on=off_on,
            on_off_sum=across_scale_addition(on_off),
            off_on_sum=across_scale_addition(off_on)
        )
