"""
Pyramid 模块 - 多尺度金字塔

职责：
- 构建 Gaussian 尺度空间金字塔（模糊 + 减半）
- 由 Gaussian 金字塔导出 Laplacian 带通金字塔
- 由 Laplacian 金字塔导出方向选择（Gabor）金字塔
"""

from .base import as_float_image, gaussian_blur, BORDER_TYPES
from .gaussian import GaussianPyramid
from .laplacian import LaplacianPyramid
from .oriented import OrientedPyramid
from .kernels import gabor_kernel_bank, orientation_angles

__all__ = [
    "GaussianPyramid",
    "LaplacianPyramid",
    "OrientedPyramid",
    "gabor_kernel_bank",
    "orientation_angles",
    "as_float_image",
    "gaussian_blur",
    "BORDER_TYPES"
]
