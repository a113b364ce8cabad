"""
Context - 处理上下文与结果数据结构

贯穿 Pipeline 的核心数据结构。
"""

from dataclasses import dataclass, field
from typing import Any
import hashlib
import numpy as np


@dataclass
class Context:
    """单张图像的处理上下文"""

    # 图像信息
    image_f32: np.ndarray           # float32 (H,W,3) 或 (H,W) [0,1] - 预处理后
    channels: dict[str, np.ndarray]  # {通道名: float32 (H,W)} - 工作色彩空间下的各通道
    orig_size: tuple[int, int]      # (H_orig, W_orig) - 原始尺寸
    proc_size: tuple[int, int]      # (H_proc, W_proc) - 处理尺寸
    scale: float                    # proc_size / orig_size 的比例

    cache: dict[str, Any] = field(default_factory=dict)
    image_hash: str = ""

    def __post_init__(self):
        """初始化后计算图像哈希"""
        if not self.image_hash and self.image_f32 is not None:
            self.image_hash = self._compute_hash(self.image_f32)

    @staticmethod
    def _compute_hash(image: np.ndarray) -> str:
        """计算图像哈希值用于缓存键"""
        small = np.ascontiguousarray(image[::16, ::16]).tobytes()
        return hashlib.md5(small).hexdigest()[:12]

    def get_cache(self, key: str) -> Any | None:
        """获取缓存值"""
        return self.cache.get(key)

    def set_cache(self, key: str, value: Any) -> None:
        """设置缓存值"""
        self.cache[key] = value

    def make_cache_key(self, *args: str) -> str:
        """生成缓存键"""
        return f"{self.image_hash}_{'_'.join(args)}"


@dataclass
class ContrastMaps:
    """单通道的 center-surround 对比结果"""

    on_off: list[np.ndarray]        # 每层 max(center - surround, 0)
    off_on: list[np.ndarray]        # 每层 max(surround - center, 0)
    on_off_sum: np.ndarray          # on_off 跨尺度相加
    off_on_sum: np.ndarray          # off_on 跨尺度相加


@dataclass
class SaliencyResult:
    """Pipeline 输出"""

    saliency_map: np.ndarray                       # float32 (H,W) [0,1]，原始分辨率
    feature_maps: dict[str, np.ndarray] = field(default_factory=dict)      # {通道名: 特征图}
    conspicuity_maps: dict[str, np.ndarray] = field(default_factory=dict)  # {"color"/"orientation": 显著图}
    info: dict[str, Any] = field(default_factory=dict)
