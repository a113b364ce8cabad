"""
金字塔公共工具

图像统一为 float32 numpy 数组 (H,W) 或 (H,W,C)。
各金字塔自行持有图像副本，层以只读方式存储。
"""

import cv2
import numpy as np


# 边界扩展策略
BORDER_TYPES = {
    "constant": cv2.BORDER_CONSTANT,    # 零填充
    "replicate": cv2.BORDER_REPLICATE,  # 边缘复制
}


def as_float_image(image: np.ndarray) -> np.ndarray:
    """
    复制输入图像并转换为 float32

    Args:
        image: 输入图像 (H,W) 或 (H,W,C)，任意数值类型

    Returns:
        新分配的 float32 图像（不与输入共享内存）；单通道 (H,W,1) 返回为 (H,W)

    Raises:
        ValueError: 如果输入不是二维或三维数组
    """
    if image is None:
        raise ValueError("输入图像不能为空")
    image = np.asarray(image)
    if image.ndim not in (2, 3):
        raise ValueError(f"图像必须是 (H,W) 或 (H,W,C) 格式，当前: {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"图像尺寸不能为 0，当前: {image.shape}")
    # cv2 会丢弃单通道轴，统一为 (H,W)
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    return np.array(image, dtype=np.float32, copy=True)


def resolve_border(border: str) -> int:
    """将边界策略名称映射为 OpenCV 常量"""
    if border not in BORDER_TYPES:
        raise ValueError(
            f"未知的边界策略: {border}，可选: {sorted(BORDER_TYPES)}"
        )
    return BORDER_TYPES[border]


def gaussian_blur(
    image: np.ndarray,
    ksize: int | None = None,
    sigma: float | None = None,
    border: str = "replicate"
) -> np.ndarray:
    """
    可分离 Gaussian 模糊

    ksize 与 sigma 至少给出一个；只给 sigma 时核大小由 OpenCV 推导，
    只给 ksize 时 sigma 由核大小推导。

    Args:
        image: float32 图像
        ksize: 核大小（奇数）
        sigma: 标准差
        border: "constant" | "replicate"

    Returns:
        模糊后的新图像
    """
    if ksize is None and sigma is None:
        raise ValueError("ksize 与 sigma 至少需要指定一个")
    if ksize is not None and (ksize <= 0 or ksize % 2 == 0):
        raise ValueError(f"ksize 必须是正奇数，当前: {ksize}")
    if sigma is not None and sigma <= 0:
        raise ValueError(f"sigma 必须为正数，当前: {sigma}")

    size = (ksize, ksize) if ksize is not None else (0, 0)
    s = sigma if sigma is not None else 0
    return cv2.GaussianBlur(
        image, size, sigmaX=s, sigmaY=s, borderType=resolve_border(border)
    )


def freeze(image: np.ndarray) -> np.ndarray:
    """将图像标记为只读后返回"""
    image.setflags(write=False)
    return image


def check_index(index: int, size: int, axis: str = "layer") -> None:
    """范围检查：index 必须位于 [0, size)"""
    if not 0 <= index < size:
        raise IndexError(f"{axis} 索引越界: {index}，有效范围 [0, {size})")
