"""
Contrast 模块 - Center-surround 对比

职责：
- 构建 center / surround 两个 Gaussian 金字塔
- 计算每层的 on-off 与 off-on 对比并跨尺度相加
"""

from .center_surround import CenterSurround

__all__ = ["CenterSurround"]
