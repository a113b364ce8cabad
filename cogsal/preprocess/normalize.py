"""
归一化工具

融合输出为任意范围的浮点图，显示或评估前需映射回固定范围。
"""

import cv2
import numpy as np


def normalize_range(
    image: np.ndarray,
    low: float = 0.0,
    high: float = 1.0
) -> np.ndarray:
    """
    Min-max 归一化到 [low, high]

    Args:
        image: 输入图像
        low: 目标下界
        high: 目标上界

    Returns:
        float32 新图像；常数图像映射为 low
    """
    image = np.asarray(image, dtype=np.float32)
    if image.size == 0:
        raise ValueError("输入图像不能为空")

    if float(image.max() - image.min()) == 0.0:
        return np.full_like(image, low)

    return cv2.normalize(
        image, None, alpha=low, beta=high, norm_type=cv2.NORM_MINMAX
    )


def to_display_u8(image: np.ndarray) -> np.ndarray:
    """
    归一化到 uint8 [0,255]

    Args:
        image: 浮点特征图

    Returns:
        uint8 图像
    """
    scaled = normalize_range(image, 0.0, 255.0)
    return np.clip(np.round(scaled), 0, 255).astype(np.uint8)
