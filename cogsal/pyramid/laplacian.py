"""
LaplacianPyramid - Laplacian 带通金字塔

每层 = blur(layer, sigma) - layer，边界使用复制策略，分辨率与源层一致。
"""

import numpy as np

from .base import check_index, freeze, gaussian_blur
from .gaussian import GaussianPyramid


class LaplacianPyramid:
    """Laplacian 带通金字塔"""

    def __init__(self, pyramid: GaussianPyramid, sigma: float):
        """
        由 Gaussian 金字塔导出带通层

        Args:
            pyramid: 源 Gaussian 金字塔（只读，不会被修改）
            sigma: 再次模糊的标准差
        """
        self.sigma = sigma
        self._layers: list[np.ndarray] = []

        for i in range(pyramid.num_layers()):
            layer = pyramid.get(i)
            blurred = gaussian_blur(layer, sigma=sigma, border="replicate")
            self._layers.append(freeze(blurred - layer))

    def get(self, layer: int) -> np.ndarray:
        """获取指定层（只读视图）"""
        check_index(layer, len(self._layers))
        return self._layers[layer].view()

    def num_layers(self) -> int:
        return len(self._layers)

    def __len__(self) -> int:
        return len(self._layers)
