"""
Preprocessor - 图像预处理器

核心功能：
- resize_max_side: 最长边限制为 max_image_size（0 表示不限制）
- normalize: 输出 float32，范围 [0,1]
- 转换到工作色彩空间并拆分通道
- 创建 Context 管理全局状态
"""

import cv2
import numpy as np
from omegaconf import DictConfig

from ..context import Context


COLOR_SPACES = ("lab", "gray")


class Preprocessor:
    """图像预处理器"""

    def __init__(self, cfg: DictConfig):
        """
        初始化预处理器

        Args:
            cfg: 配置对象，需包含 preprocess.max_image_size 和 preprocess.color_space
        """
        pre_cfg = cfg.preprocess
        self.max_image_size = pre_cfg.get("max_image_size", 0)
        self.color_space = pre_cfg.get("color_space", "lab")
        if self.color_space not in COLOR_SPACES:
            raise ValueError(
                f"未知的色彩空间: {self.color_space}，可选: {COLOR_SPACES}"
            )

    def process(self, image: np.ndarray) -> Context:
        """
        预处理输入图像

        Args:
            image: 输入图像，uint8 或 float [0,1]，(H,W) 灰度或 (H,W,3) RGB

        Returns:
            Context 对象

        Raises:
            ValueError: 如果输入图像格式不正确
        """
        if image is None:
            raise ValueError("输入图像不能为空")
        image = np.asarray(image)
        if image.ndim == 3 and image.shape[2] == 1:
            image = image[:, :, 0]
        if not (image.ndim == 2 or (image.ndim == 3 and image.shape[2] == 3)):
            raise ValueError(f"输入图像必须是 (H,W) 或 (H,W,3) 格式，当前: {image.shape}")

        image_u8 = self._to_u8(image)

        orig_h, orig_w = image_u8.shape[:2]
        image_resized, proc_size, scale = self._resize_max_side(
            image_u8, self.max_image_size
        )

        ctx = Context(
            image_f32=image_resized.astype(np.float32) / 255.0,
            channels=self.split_channels(image_resized),
            orig_size=(orig_h, orig_w),
            proc_size=proc_size,
            scale=scale
        )
        return ctx

    def split_channels(self, image_u8: np.ndarray) -> dict[str, np.ndarray]:
        """
        转换色彩空间并拆分为 float32 [0,1] 通道

        Args:
            image_u8: uint8 (H,W) 或 (H,W,3) RGB

        Returns:
            {"L": ..., "a": ..., "b": ...} 或 {"I": ...}
        """
        if image_u8.ndim == 2:
            return {"I": image_u8.astype(np.float32) / 255.0}

        if self.color_space == "gray":
            gray = cv2.cvtColor(image_u8, cv2.COLOR_RGB2GRAY)
            return {"I": gray.astype(np.float32) / 255.0}

        # uint8 Lab 各通道范围均为 [0,255]
        lab = cv2.cvtColor(image_u8, cv2.COLOR_RGB2Lab).astype(np.float32) / 255.0
        return {
            "L": np.ascontiguousarray(lab[:, :, 0]),
            "a": np.ascontiguousarray(lab[:, :, 1]),
            "b": np.ascontiguousarray(lab[:, :, 2]),
        }

    def postprocess(self, saliency: np.ndarray, ctx: Context) -> np.ndarray:
        """
        后处理：将显著图恢复到原始尺寸

        Args:
            saliency: float32 (H_proc, W_proc)
            ctx: Context 对象

        Returns:
            float32 (H_orig, W_orig)
        """
        orig_h, orig_w = ctx.orig_size
        if saliency.shape[:2] != (orig_h, orig_w):
            saliency = cv2.resize(
                saliency,
                (orig_w, orig_h),  # cv2.resize 使用 (width, height)
                interpolation=cv2.INTER_CUBIC
            )
        return saliency.astype(np.float32)

    @staticmethod
    def _to_u8(image: np.ndarray) -> np.ndarray:
        """浮点图像视为 [0,1]，其余类型截断到 [0,255]"""
        if image.dtype == np.uint8:
            return image.copy()
        if np.issubdtype(image.dtype, np.floating):
            return np.clip(image * 255.0 + 0.5, 0, 255).astype(np.uint8)
        return np.clip(image, 0, 255).astype(np.uint8)

    def _resize_max_side(
        self,
        image: np.ndarray,
        max_size: int
    ) -> tuple[np.ndarray, tuple[int, int], float]:
        """
        按最长边缩放图像

        Returns:
            (resized_image, (new_h, new_w), scale)
        """
        h, w = image.shape[:2]
        max_side = max(h, w)

        if not max_size or max_side <= max_size:
            return image, (h, w), 1.0

        scale = max_size / max_side
        new_w = max(1, int(w * scale))
        new_h = max(1, int(h * scale))

        resized = cv2.resize(
            image,
            (new_w, new_h),
            interpolation=cv2.INTER_AREA  # 缩小时使用 INTER_AREA 效果更好
        )
        return resized, (new_h, new_w), scale
