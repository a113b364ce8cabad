"""
集成测试 - 测试完整 Pipeline 流程
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest
from omegaconf import OmegaConf

from cogsal.context import SaliencyResult
from cogsal.pipeline import SaliencyPipeline, load_pipeline


@pytest.fixture
def disk_mask():
    """圆形目标掩码 (128x160)"""
    yy, xx = np.mgrid[:128, :160]
    return (yy - 64) ** 2 + (xx - 100) ** 2 <= 18 ** 2


@pytest.fixture
def sample_image(disk_mask):
    """灰色背景上的红色圆形"""
    img = np.full((128, 160, 3), 110, dtype=np.uint8)
    img[disk_mask] = (220, 30, 30)
    return img


@pytest.fixture
def pipeline():
    """创建 Pipeline"""
    return load_pipeline()


class TestPipelineIntegration:
    """Pipeline 集成测试"""

    def test_load_pipeline(self):
        """测试加载 Pipeline"""
        pipe = load_pipeline()
        assert isinstance(pipe, SaliencyPipeline)
        assert pipe.cfg.contrast.num_layers == 4

    def test_process_basic(self, pipeline, sample_image):
        """测试基本处理流程"""
        result = pipeline.process(sample_image)

        assert isinstance(result, SaliencyResult)
        assert result.saliency_map.shape == (128, 160)
        assert result.saliency_map.dtype == np.float32
        assert result.saliency_map.min() >= 0.0
        assert result.saliency_map.max() <= 1.0

    def test_feature_and_conspicuity_maps(self, pipeline, sample_image):
        """测试中间结果"""
        result = pipeline.process(sample_image)

        assert set(result.feature_maps) == {"L", "a", "b"}
        assert set(result.conspicuity_maps) == {"color", "orientation"}
        assert result.info["channels"] == ["L", "a", "b"]

    def test_salient_object_stands_out(self, pipeline, sample_image, disk_mask):
        """测试显著目标区域的显著值更高"""
        saliency = pipeline.process(sample_image).saliency_map

        inside = saliency[disk_mask].mean()
        outside = saliency[~disk_mask].mean()
        assert inside > outside

    def test_process_prints_summary(self, pipeline, sample_image, capsys):
        """测试处理完成后输出摘要"""
        pipeline.process(sample_image)
        out = capsys.readouterr().out
        assert "[SaliencyPipeline] Processed 160x128" in out

    def test_orientation_disabled(self, pipeline, sample_image):
        """测试禁用方向特征"""
        result = pipeline.process(sample_image, {"orientation_enabled": False})
        assert set(result.conspicuity_maps) == {"color"}

    def test_max_fusion(self, pipeline, sample_image):
        """测试 max 融合"""
        result = pipeline.process(
            sample_image,
            {"feature_method": "max", "conspicuity_method": "max"}
        )
        assert result.info["feature_method"] == "max"
        assert result.saliency_map.shape == (128, 160)

    def test_grayscale_input(self, pipeline):
        """测试灰度输入"""
        gray = np.full((96, 96), 40, dtype=np.uint8)
        gray[40:56, 40:56] = 220
        result = pipeline.process(gray)

        assert set(result.feature_maps) == {"I"}
        assert result.saliency_map.shape == (96, 96)

    def test_large_image_restored(self, pipeline):
        """测试大图缩放处理后恢复原始尺寸"""
        image = np.random.randint(0, 256, (300, 700, 3), dtype=np.uint8)
        result = pipeline.process(image)

        assert result.saliency_map.shape == (300, 700)
        assert max(result.info["proc_size"]) <= 512

    def test_evaluate(self, pipeline, sample_image, disk_mask):
        """测试评估"""
        result = pipeline.process(sample_image)
        gt = np.where(disk_mask, 255, 0).astype(np.uint8)
        report = pipeline.evaluate(result.saliency_map, gt)

        assert report["curve"].shape == (256, 2)
        assert 0 <= report["best_threshold"] < 256
        assert 0.0 < report["best_f"] <= 1.0

    def test_custom_config(self, sample_image):
        """测试传入 DictConfig"""
        cfg = OmegaConf.create({
            "preprocess": {"max_image_size": 0, "color_space": "gray"},
            "pyramid": {"border": "replicate"},
            "contrast": {"num_layers": 3, "center_sigma": 1.0, "surround_sigma": 2.0},
            "orientation": {
                "enabled": True,
                "num_layers": 3,
                "gaussian_sigma": 1.0,
                "laplacian_sigma": 2.0,
                "num_orientations": 4,
            },
            "fusion": {"feature_method": "max", "conspicuity_method": "mean"},
        })
        pipe = SaliencyPipeline(cfg)
        result = pipe.process(sample_image)

        assert set(result.feature_maps) == {"I"}
        assert result.saliency_map.shape == (128, 160)
