"""
CrossScaleCombiner - 跨尺度组合

所有函数都是纯函数：不修改输入，返回新分配的 float32 图像。
重采样统一使用 bicubic 插值。
单通道图像统一为 (H,W)，(H,W,1) 会先去掉通道轴。
"""

from typing import Sequence

import cv2
import numpy as np


def as_feature_map(image: np.ndarray) -> np.ndarray:
    """转为 float32，并将 (H,W,1) 压缩为 (H,W)"""
    image = np.asarray(image, dtype=np.float32)
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    return image


def _channel_shape(image: np.ndarray) -> tuple[int, ...]:
    return image.shape[2:]


def resize_to(image: np.ndarray, size: tuple[int, int]) -> np.ndarray:
    """
    Bicubic 重采样到指定分辨率

    Args:
        image: 输入图像
        size: 目标 (H, W)

    Returns:
        新的 float32 图像；尺寸相同时返回副本，单通道输出为 (H,W)
    """
    image = as_feature_map(image)
    h, w = size
    if image.shape[:2] == (h, w):
        return image.copy()

    return cv2.resize(
        image,
        (w, h),  # cv2.resize 使用 (width, height)
        interpolation=cv2.INTER_CUBIC
    )


def across_scale_addition(scale_images: Sequence[np.ndarray]) -> np.ndarray:
    """
    跨尺度相加

    每张图重采样到第一张图的分辨率后逐元素求和。

    Args:
        scale_images: 不同尺度上的同语义图像序列，至少一张

    Returns:
        float32 图像，分辨率与第一张一致

    Raises:
        ValueError: 序列为空或通道数不一致
    """
    if len(scale_images) == 0:
        raise ValueError("跨尺度相加至少需要一张图像")

    first = as_feature_map(scale_images[0])
    target = first.shape[:2]
    result = np.zeros(first.shape, dtype=np.float32)

    for i, image in enumerate(scale_images):
        image = as_feature_map(image)
        if _channel_shape(image) != _channel_shape(first):
            raise ValueError(
                f"第 {i} 张图像通道 {_channel_shape(image)} 与第一张 {_channel_shape(first)} 不一致"
            )
        result += resize_to(image, target)

    return result


def _align(f1: np.ndarray, f2: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """将 f1 对齐到 f2 的分辨率，并检查通道数"""
    f1 = as_feature_map(f1)
    f2 = as_feature_map(f2)
    if _channel_shape(f1) != _channel_shape(f2):
        raise ValueError(
            f"融合的两张特征图通道不一致: {_channel_shape(f1)} vs {_channel_shape(f2)}"
        )
    return resize_to(f1, f2.shape[:2]), f2


def mean_fusion(
    f1: np.ndarray,
    f2: np.ndarray,
    w1: float = 1.0,
    w2: float = 1.0
) -> np.ndarray:
    """
    加权均值融合：(w1·f1 + w2·f2) / (w1 + w2)

    分辨率不同时先将 f1 重采样到 f2 的分辨率。
    输入先转为 float32，因此 float64 输入与自身融合只在 float32 精度内不变。

    Args:
        f1, f2: 特征图
        w1, w2: 权重

    Returns:
        float32 融合结果，分辨率与 f2 一致
    """
    if w1 + w2 == 0:
        raise ValueError("权重之和不能为 0")

    resized, f2 = _align(f1, f2)
    fused = (w1 * resized + w2 * f2) / (w1 + w2)
    return fused.astype(np.float32)


def max_fusion(f1: np.ndarray, f2: np.ndarray) -> np.ndarray:
    """
    逐点最大值融合

    max 不对加法分配，因此没有内部权重；需要加权时请在调用前预先缩放输入。
    输入先转为 float32，float32 输入与自身融合时结果完全不变。

    Args:
        f1, f2: 特征图

    Returns:
        float32 融合结果，分辨率与 f2 一致
    """
    resized, f2 = _align(f1, f2)
    return np.maximum(resized, f2)
