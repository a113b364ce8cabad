"""
Evaluation 模块 - 显著图评估

职责：
- 以二值 ground truth 为参照，逐灰度阈值计算 precision / recall
- 计算 F-measure 与多图平均曲线
"""

from .metrics import (
    NUM_GREYSCALES,
    binarize_ground_truth,
    relative_object_size,
    prepare_saliency_map,
    precision_recall,
    precision_recall_curve,
    f_measure,
    mean_per_threshold,
)

__all__ = [
    "NUM_GREYSCALES",
    "binarize_ground_truth",
    "relative_object_size",
    "prepare_saliency_map",
    "precision_recall",
    "precision_recall_curve",
    "f_measure",
    "mean_per_threshold",
]
