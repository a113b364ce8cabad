"""
OrientedPyramid - 方向金字塔

二维结构 [layer][orientation]：每个单元是 Laplacian 层与一个方向核的卷积结果。
核组可以自动生成（Gabor），也可以由调用方注入，以便替换为其他核族。
"""

from __future__ import annotations

from typing import Sequence

import cv2
import numpy as np

from .base import check_index, freeze
from .kernels import gabor_kernel_bank
from .laplacian import LaplacianPyramid


class OrientedPyramid:
    """方向选择金字塔"""

    def __init__(
        self,
        pyramid: LaplacianPyramid,
        num_orientations: int | None = None,
        kernels: Sequence[np.ndarray] | None = None
    ):
        """
        构建方向金字塔

        Args:
            pyramid: 源 Laplacian 金字塔
            num_orientations: 自动生成 Gabor 核的方向数
            kernels: 显式核组（原样使用），与 num_orientations 二选一

        Raises:
            ValueError: 两个参数都未给出、同时给出，或核组为空
        """
        if (num_orientations is None) == (kernels is None):
            raise ValueError("num_orientations 与 kernels 必须且只能指定一个")

        if kernels is None:
            kernels = gabor_kernel_bank(num_orientations)
        if len(kernels) == 0:
            raise ValueError("核组不能为空")

        self.kernels = [freeze(np.array(k, dtype=np.float32, copy=True)) for k in kernels]
        self._maps: list[list[np.ndarray]] = []

        for i in range(pyramid.num_layers()):
            layer = pyramid.get(i)
            orientations = []
            for kernel in self.kernels:
                dst = cv2.filter2D(layer, cv2.CV_32F, kernel)
                orientations.append(freeze(dst))
            self._maps.append(orientations)

    def get(self, layer: int, orientation: int) -> np.ndarray:
        """获取 (layer, orientation) 单元（只读视图）"""
        check_index(layer, len(self._maps), "layer")
        check_index(orientation, len(self._maps[layer]), "orientation")
        return self._maps[layer][orientation].view()

    def num_layers(self) -> int:
        return len(self._maps)

    def num_orientations(self) -> int:
        # 每层方向数相同，由构造保证
        return len(self.kernels)

    def scales_of(self, orientation: int) -> list[np.ndarray]:
        """返回某一方向在所有层上的响应，用于跨尺度相加"""
        return [self.get(i, orientation) for i in range(self.num_layers())]
