"""
SaliencyPipeline - 主处理流水线

多尺度显著性计算的核心入口：
预处理 → center-surround 对比 → 方向特征 → 跨尺度组合 → 融合 → 显著图
"""

from pathlib import Path
from typing import Any

import numpy as np
from omegaconf import OmegaConf, DictConfig

from .context import Context, SaliencyResult
from .fusion import across_scale_addition
from .preprocess import normalize_range


class SaliencyPipeline:
    """多尺度显著性主 Pipeline"""

    def __init__(self, config_path: str | Path | DictConfig | None = None):
        """
        初始化 Pipeline

        Args:
            config_path: 配置文件路径或 DictConfig，默认使用 config/default.yaml
        """
        if isinstance(config_path, DictConfig):
            self.cfg = config_path
        else:
            if config_path is None:
                config_path = Path(__file__).parent.parent / "config" / "default.yaml"
            self.cfg: DictConfig = OmegaConf.load(config_path)
            print(f"[SaliencyPipeline] Loaded config: {config_path}")

        # 初始化各模块（延迟加载）
        self._preprocessor = None
        self._contrast = None
        self._fuser = None

    # ==================== 模块懒加载 ====================

    @property
    def preprocessor(self):
        """预处理模块（懒加载）"""
        if self._preprocessor is None:
            from .preprocess import Preprocessor
            self._preprocessor = Preprocessor(self.cfg)
        return self._preprocessor

    @property
    def contrast(self):
        """Center-surround 对比模块（懒加载）"""
        if self._contrast is None:
            from .contrast import CenterSurround
            c_cfg = self.cfg.contrast
            self._contrast = CenterSurround(
                num_layers=c_cfg.num_layers,
                center_sigma=c_cfg.center_sigma,
                surround_sigma=c_cfg.surround_sigma,
                border=self.cfg.pyramid.get("border", "replicate")
            )
        return self._contrast

    @property
    def fuser(self):
        """融合模块（懒加载）"""
        if self._fuser is None:
            from .fusion import FusionModule
            self._fuser = FusionModule(self.cfg)
        return self._fuser

    # ==================== 主处理流程 ====================

    def process(
        self,
        image: np.ndarray,
        overrides: dict[str, Any] | None = None
    ) -> SaliencyResult:
        """
        计算单张图像的显著图

        Args:
            image: 输入图像，uint8 或 float [0,1]，(H,W) 或 (H,W,3) RGB
            overrides: 参数覆盖，如 {"feature_method": "max", "orientation_enabled": False}

        Returns:
            SaliencyResult，saliency_map 为原始分辨率的 float32 [0,1]
        """
        overrides = overrides or {}

        # A. 预处理
        ctx = self.preprocessor.process(image)

        # B. 各通道 center-surround 特征
        feature_method = overrides.get("feature_method", self.fuser.feature_method)
        feature_maps = {}
        for name, channel in ctx.channels.items():
            contrast = self._get_or_build_contrast(ctx, name, channel)
            feature_maps[name] = self.fuser.fuse(
                [contrast.on_off_sum, contrast.off_on_sum],
                method=feature_method
            )

        conspicuity_maps = {
            "color": self.fuser.fuse(list(feature_maps.values()), method=feature_method)
        }
        weights = [overrides.get("weight_color", self.cfg.fusion.get("weight_color", 1.0))]

        # C. 方向特征
        o_cfg = self.cfg.orientation
        if overrides.get("orientation_enabled", o_cfg.get("enabled", True)):
            channel_name = o_cfg.get("channel", "L")
            if channel_name not in ctx.channels:
                channel_name = next(iter(ctx.channels))
            conspicuity_maps["orientation"] = self._orientation_map(
                ctx.channels[channel_name], feature_method
            )
            weights.append(
                overrides.get("weight_orientation", self.cfg.fusion.get("weight_orientation", 1.0))
            )

        # D. 显著图融合
        conspicuity_method = overrides.get(
            "conspicuity_method", self.fuser.conspicuity_method
        )
        saliency = self.fuser.fuse(
            list(conspicuity_maps.values()),
            method=conspicuity_method,
            weights=weights
        )

        # E. 归一化并恢复原始尺寸
        saliency = normalize_range(saliency)
        saliency = np.clip(self.preprocessor.postprocess(saliency, ctx), 0.0, 1.0)

        print(
            f"[SaliencyPipeline] Processed {ctx.proc_size[1]}x{ctx.proc_size[0]}: "
            f"channels={list(ctx.channels)}, maps={list(conspicuity_maps)}, "
            f"fusion={feature_method}/{conspicuity_method}"
        )

        return SaliencyResult(
            saliency_map=saliency,
            feature_maps=feature_maps,
            conspicuity_maps=conspicuity_maps,
            info={
                "proc_size": ctx.proc_size,
                "orig_size": ctx.orig_size,
                "channels": list(ctx.channels),
                "feature_method": feature_method,
                "conspicuity_method": conspicuity_method,
            }
        )

    def evaluate(
        self,
        saliency: np.ndarray,
        ground_truth: np.ndarray
    ) -> dict[str, Any]:
        """
        以 ground truth 评估显著图

        Args:
            saliency: 显著图（任意尺寸，会缩放到 ground truth 尺寸）
            ground_truth: ground truth 图像

        Returns:
            {"curve": (256,2), "best_threshold": int, "best_f": float}
        """
        from .evaluation import (
            binarize_ground_truth,
            f_measure,
            precision_recall_curve,
            prepare_saliency_map,
        )

        e_cfg = self.cfg.get("evaluation", {})
        mask = binarize_ground_truth(ground_truth, e_cfg.get("gt_threshold", 0.5))
        sal_u8 = prepare_saliency_map(saliency, mask.shape)
        curve = precision_recall_curve(sal_u8, mask)

        beta = e_cfg.get("beta", 1.0)
        scores = [f_measure(p, r, beta) for p, r in curve]
        best = int(np.argmax(scores))
        return {"curve": curve, "best_threshold": best, "best_f": float(scores[best])}

    def _get_or_build_contrast(self, ctx: Context, name: str, channel: np.ndarray):
        """生成或获取缓存的通道对比图"""
        cache_key = ctx.make_cache_key("contrast", name)
        cached = ctx.get_cache(cache_key)
        if cached is not None:
            return cached

        contrast = self.contrast.compute(channel)
        ctx.set_cache(cache_key, contrast)
        return contrast

    def _orientation_map(self, channel: np.ndarray, method: str) -> np.ndarray:
        """
        方向显著图

        Gaussian → Laplacian → Oriented 金字塔；
        每个方向跨尺度相加后，各方向再融合为一张图。
        """
        from .pyramid import GaussianPyramid, LaplacianPyramid, OrientedPyramid

        o_cfg = self.cfg.orientation
        gaussian = GaussianPyramid(
            channel,
            o_cfg.num_layers,
            sigma=o_cfg.gaussian_sigma,
            border=self.cfg.pyramid.get("border", "replicate")
        )
        laplacian = LaplacianPyramid(gaussian, o_cfg.laplacian_sigma)
        oriented = OrientedPyramid(laplacian, num_orientations=o_cfg.num_orientations)

        # Gabor 响应有正负，取幅值
        per_orientation = [
            np.abs(across_scale_addition(oriented.scales_of(j)))
            for j in range(oriented.num_orientations())
        ]
        return self.fuser.fuse(per_orientation, method=method)


def load_pipeline(config_path: str | Path | None = None) -> SaliencyPipeline:
    """
    便捷函数：加载 Pipeline

    Args:
        config_path: 配置文件路径

    Returns:
        SaliencyPipeline 实例
    """
    return SaliencyPipeline(config_path)
