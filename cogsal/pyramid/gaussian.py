"""
GaussianPyramid - Gaussian 尺度空间金字塔

逐层模糊并减半：
- 第 k 层 = blur(current)，保持 current 的分辨率
- 下一层的 current = nearest_resize(current, 1/2)，对未模糊的 current 降采样

注意：模糊作用在降采样前的图像上，而降采样作用在模糊前的图像上。
这一不对称顺序与参考实现保持一致，修改会改变数值结果。
"""

from __future__ import annotations

import cv2
import numpy as np

from .base import as_float_image, check_index, freeze, gaussian_blur


DEFAULT_KSIZE = 5


def half_size(shape: tuple[int, ...]) -> tuple[int, int]:
    """
    计算下一层的分辨率（向下取整，最小为 1）

    Args:
        shape: 当前图像 shape

    Returns:
        (new_h, new_w)
    """
    h, w = shape[:2]
    return max(1, h // 2), max(1, w // 2)


class GaussianPyramid:
    """Gaussian 尺度空间金字塔"""

    def __init__(
        self,
        image: np.ndarray,
        num_layers: int,
        ksize: int | None = None,
        sigma: float | None = None,
        border: str = "constant"
    ):
        """
        从源图像构建金字塔

        Args:
            image: 源图像 (H,W) 或 (H,W,C)，不会被修改
            num_layers: 层数，必须 >= 1
            ksize: 固定核大小；与 sigma 都未指定时使用 5x5
            sigma: 连续尺度参数
            border: 边界策略 "constant"（零填充）| "replicate"（边缘复制）
        """
        if num_layers < 1:
            raise ValueError(f"num_layers 必须 >= 1，当前: {num_layers}")
        if ksize is None and sigma is None:
            ksize = DEFAULT_KSIZE

        self.ksize = ksize
        self.sigma = sigma
        self.border = border
        self._layers: list[np.ndarray] = []

        current = as_float_image(image)
        for _ in range(num_layers):
            blurred = gaussian_blur(current, ksize=ksize, sigma=sigma, border=border)
            self._layers.append(freeze(blurred))

            new_h, new_w = half_size(current.shape)
            current = cv2.resize(
                current,
                (new_w, new_h),  # cv2.resize 使用 (width, height)
                interpolation=cv2.INTER_NEAREST
            )

    @classmethod
    def from_pyramid(
        cls,
        pyramid: GaussianPyramid,
        sigma: float,
        border: str = "replicate"
    ) -> GaussianPyramid:
        """
        对已有金字塔的每一层再次模糊，构建新金字塔

        层数与各层分辨率均继承自原金字塔，不重新降采样。
        常用于由 center 金字塔导出 surround 金字塔。

        Args:
            pyramid: 源金字塔（只读）
            sigma: 再次模糊的标准差
            border: 边界策略

        Returns:
            新的 GaussianPyramid
        """
        derived = cls.__new__(cls)
        derived.ksize = None
        derived.sigma = sigma
        derived.border = border
        derived._layers = [
            freeze(gaussian_blur(as_float_image(layer), sigma=sigma, border=border))
            for layer in pyramid._layers
        ]
        return derived

    def get(self, layer: int) -> np.ndarray:
        """
        获取指定层（只读视图）

        Raises:
            IndexError: layer 不在 [0, num_layers) 内
        """
        check_index(layer, len(self._layers))
        return self._layers[layer].view()

    def num_layers(self) -> int:
        return len(self._layers)

    def shape_of(self, layer: int) -> tuple[int, int]:
        """返回指定层的 (H, W)"""
        return self.get(layer).shape[:2]

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self):
        for i in range(len(self._layers)):
            yield self.get(i)

