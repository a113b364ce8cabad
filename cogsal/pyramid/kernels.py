"""
方向选择核（Gabor）

核的方向均匀分布在半圈 [0, π) 内：θ_j = j·π/K。
Gabor 核关于 π 对称，因此不需要覆盖整圈。
"""

import cv2
import numpy as np


# 默认 Gabor 参数
GABOR_KSIZE = 6            # cv2 生成 2*(ksize//2)+1 = 7 的核
GABOR_SIGMA = 1.0
GABOR_LAMBDA = 2.0
GABOR_GAMMA = 1.0
GABOR_PSI = 0.0


def orientation_angles(num_orientations: int) -> list[float]:
    """
    计算 K 个均匀分布的方向角

    Args:
        num_orientations: 方向数 K

    Returns:
        [0, π/K, 2π/K, ..., (K-1)π/K]
    """
    if num_orientations < 1:
        raise ValueError(f"num_orientations 必须 >= 1，当前: {num_orientations}")
    return [j * np.pi / num_orientations for j in range(num_orientations)]


def gabor_kernel_bank(
    num_orientations: int,
    ksize: int = GABOR_KSIZE,
    sigma: float = GABOR_SIGMA,
    lambd: float = GABOR_LAMBDA,
    gamma: float = GABOR_GAMMA,
    psi: float = GABOR_PSI
) -> list[np.ndarray]:
    """
    生成 Gabor 核组

    Args:
        num_orientations: 方向数
        ksize: 请求的核大小，cv2 实际生成 2*(ksize//2)+1 的奇数核
        sigma: 高斯包络标准差
        lambd: 正弦波长
        gamma: 空间纵横比
        psi: 相位偏移

    Returns:
        float32 核列表，顺序与 orientation_angles 一致
    """
    return [
        cv2.getGaborKernel(
            (ksize, ksize), sigma, theta, lambd, gamma, psi, ktype=cv2.CV_32F
        )
        for theta in orientation_angles(num_orientations)
    ]
