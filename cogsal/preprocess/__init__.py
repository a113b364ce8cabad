"""
Preprocess 模块 - 图像预处理

职责：
- 输入图像统一到标准格式与尺度
- 转换到工作色彩空间（Lab）并拆分通道
- 将浮点特征图归一化回可显示范围
"""

from .preprocessor import Preprocessor
from .normalize import normalize_range, to_display_u8

__all__ = ["Preprocessor", "normalize_range", "to_display_u8"]
