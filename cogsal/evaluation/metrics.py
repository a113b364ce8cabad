"""
Precision / Recall 评估

方法见 R. Achanta, S. Hemami, F. Estrada and S. Süsstrunk,
"Frequency-tuned Salient Region Detection", CVPR 2009：
对显著图的每个灰度阈值 t ∈ [0,255]，将 >= t 的像素视为显著，与 ground truth 比较。
"""

from typing import Sequence

import cv2
import numpy as np

from ..preprocess.normalize import to_display_u8


NUM_GREYSCALES = 256

PRECISION = 0
RECALL = 1


def binarize_ground_truth(ground_truth: np.ndarray, threshold: float = 0.5) -> np.ndarray:
    """
    将 ground truth 转为布尔掩码

    Args:
        ground_truth: uint8 [0,255] 或 float [0,1] 的 (H,W) 图像
        threshold: 二值化阈值，截断到 [0,1]；严格大于阈值的像素为显著

    Returns:
        bool (H,W)
    """
    gt = np.asarray(ground_truth)
    if gt.ndim == 3:
        gt = gt[:, :, 0]
    if gt.dtype == np.bool_:
        return gt.copy()
    if np.issubdtype(gt.dtype, np.integer):
        gt = gt.astype(np.float32) / 255.0
    threshold = min(max(threshold, 0.0), 1.0)
    return gt > threshold


def relative_object_size(mask: np.ndarray) -> float:
    """显著目标占整幅图像的比例 [0,1]"""
    mask = np.asarray(mask, dtype=bool)
    return float(mask.sum()) / mask.size


def prepare_saliency_map(saliency: np.ndarray, size: tuple[int, int]) -> np.ndarray:
    """
    将显著图转换为 uint8 灰度并缩放到 ground truth 尺寸

    Args:
        saliency: 显著图，uint8 或浮点（浮点图先 min-max 归一化）
        size: 目标 (H, W)

    Returns:
        uint8 (H, W)
    """
    sal = np.asarray(saliency)
    if sal.ndim == 3:
        sal = cv2.cvtColor(sal, cv2.COLOR_RGB2GRAY) if sal.shape[2] == 3 else sal[:, :, 0]
    if sal.dtype != np.uint8:
        sal = to_display_u8(sal)

    h, w = size
    if sal.shape[:2] != (h, w):
        sal = cv2.resize(sal, (w, h), interpolation=cv2.INTER_LINEAR)
    return sal


def _check_sizes(saliency_u8: np.ndarray, mask: np.ndarray) -> None:
    if saliency_u8.shape[:2] != mask.shape[:2]:
        raise ValueError(
            f"显著图尺寸 {saliency_u8.shape[:2]} 与 ground truth 尺寸 {mask.shape[:2]} 不一致"
        )


def precision_recall(
    saliency_u8: np.ndarray,
    mask: np.ndarray,
    threshold: int
) -> tuple[float, float]:
    """
    单一阈值下的 precision / recall

    Args:
        saliency_u8: uint8 显著图
        mask: bool ground truth
        threshold: 灰度阈值 [0,255]

    Returns:
        (precision, recall)；分母为 0 时对应值为 0.0
    """
    _check_sizes(saliency_u8, mask)
    mask = np.asarray(mask, dtype=bool)
    predicted = saliency_u8 >= threshold

    n_match = int(np.count_nonzero(predicted & mask))
    n_saliency = int(np.count_nonzero(predicted))
    n_truth = int(np.count_nonzero(mask))

    precision = n_match / n_saliency if n_saliency > 0 else 0.0
    recall = n_match / n_truth if n_truth > 0 else 0.0
    return precision, recall


def precision_recall_curve(saliency_u8: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """
    所有灰度阈值下的 precision / recall

    Returns:
        float64 (256, 2)，第 t 行为阈值 t 的 (precision, recall)
    """
    _check_sizes(saliency_u8, mask)
    mask = np.asarray(mask, dtype=bool)
    values = np.asarray(saliency_u8, dtype=np.uint8)

    # 直方图累加：>= t 的像素数 = 从高到低的累计和
    hist_all = np.bincount(values.ravel(), minlength=NUM_GREYSCALES)
    hist_fg = np.bincount(values[mask].ravel(), minlength=NUM_GREYSCALES)
    n_saliency = np.cumsum(hist_all[::-1])[::-1].astype(np.float64)
    n_match = np.cumsum(hist_fg[::-1])[::-1].astype(np.float64)
    n_truth = float(np.count_nonzero(mask))

    result = np.zeros((NUM_GREYSCALES, 2), dtype=np.float64)
    np.divide(n_match, n_saliency, out=result[:, PRECISION], where=n_saliency > 0)
    if n_truth > 0:
        result[:, RECALL] = n_match / n_truth
    return result


def f_measure(precision: float, recall: float, beta: float = 1.0) -> float:
    """
    F-measure：(1 + β²)·P·R / (β²·P + R)

    Args:
        precision: 精确率
        recall: 召回率
        beta: β，Achanta 等人使用 β² = 0.3

    Returns:
        F 值；P 与 R 都为 0 时返回 0.0
    """
    beta_sq = beta ** 2
    denominator = beta_sq * precision + recall
    if denominator == 0:
        return 0.0
    return (1.0 + beta_sq) * precision * recall / denominator


def mean_per_threshold(curves: Sequence[np.ndarray]) -> np.ndarray:
    """
    多幅图像的平均 precision / recall 曲线

    Args:
        curves: precision_recall_curve 输出的列表

    Returns:
        (256, 2) 平均曲线
    """
    if len(curves) == 0:
        raise ValueError("至少需要一条评估曲线")
    return np.mean(np.stack(curves, axis=0), axis=0)
