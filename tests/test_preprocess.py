"""
Preprocess 模块单元测试
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest
from omegaconf import OmegaConf

from cogsal.preprocess import Preprocessor, normalize_range, to_display_u8
from cogsal.context import Context


@pytest.fixture
def config():
    """测试配置"""
    return OmegaConf.create({
        "preprocess": {
            "max_image_size": 128,
            "color_space": "lab"
        }
    })


@pytest.fixture
def preprocessor(config):
    """创建预处理器"""
    return Preprocessor(config)


@pytest.fixture
def sample_image():
    """创建测试图像 (300x200)"""
    return np.random.randint(0, 256, (200, 300, 3), dtype=np.uint8)


@pytest.fixture
def small_image():
    """创建小图像 (64x96)"""
    return np.random.randint(0, 256, (64, 96, 3), dtype=np.uint8)


class TestPreprocessor:
    """Preprocessor 测试类"""

    def test_init(self, preprocessor):
        """测试初始化"""
        assert preprocessor.max_image_size == 128
        assert preprocessor.color_space == "lab"

    def test_process_returns_context(self, preprocessor, small_image):
        """测试返回 Context"""
        ctx = preprocessor.process(small_image)
        assert isinstance(ctx, Context)
        assert ctx.image_hash != ""

    def test_lab_channels(self, preprocessor, small_image):
        """测试 Lab 通道拆分"""
        ctx = preprocessor.process(small_image)

        assert list(ctx.channels) == ["L", "a", "b"]
        for channel in ctx.channels.values():
            assert channel.shape == (64, 96)
            assert channel.dtype == np.float32
            assert channel.min() >= 0.0
            assert channel.max() <= 1.0

    def test_no_resize_for_small_image(self, preprocessor, small_image):
        """测试小图不缩放"""
        ctx = preprocessor.process(small_image)
        assert ctx.proc_size == (64, 96)
        assert ctx.scale == 1.0

    def test_resize_large_image(self, preprocessor, sample_image):
        """测试大图按最长边缩放"""
        ctx = preprocessor.process(sample_image)

        assert ctx.orig_size == (200, 300)
        assert max(ctx.proc_size) <= 128
        assert ctx.scale < 1.0
        assert ctx.channels["L"].shape == ctx.proc_size

    def test_grayscale_input(self, preprocessor):
        """测试灰度输入只有一个强度通道"""
        gray = np.random.randint(0, 256, (50, 40), dtype=np.uint8)
        ctx = preprocessor.process(gray)

        assert list(ctx.channels) == ["I"]
        np.testing.assert_allclose(ctx.channels["I"], gray / 255.0, atol=1e-6)

    def test_gray_color_space(self, small_image):
        """测试 gray 色彩空间"""
        cfg = OmegaConf.create({"preprocess": {"color_space": "gray"}})
        ctx = Preprocessor(cfg).process(small_image)
        assert list(ctx.channels) == ["I"]

    def test_float_input(self, preprocessor):
        """测试浮点输入"""
        image = np.random.rand(32, 32, 3).astype(np.float32)
        ctx = preprocessor.process(image)
        assert ctx.image_f32.shape == (32, 32, 3)
        assert ctx.image_f32.max() <= 1.0

    def test_invalid_input(self, preprocessor):
        """测试无效输入"""
        with pytest.raises(ValueError):
            preprocessor.process(None)
        with pytest.raises(ValueError):
            preprocessor.process(np.zeros((10, 10, 4), dtype=np.uint8))

    def test_invalid_color_space(self):
        """测试未知色彩空间"""
        cfg = OmegaConf.create({"preprocess": {"color_space": "hsv"}})
        with pytest.raises(ValueError):
            Preprocessor(cfg)

    def test_postprocess_restores_size(self, preprocessor, sample_image):
        """测试后处理恢复原始尺寸"""
        ctx = preprocessor.process(sample_image)
        saliency = np.random.rand(*ctx.proc_size).astype(np.float32)

        restored = preprocessor.postprocess(saliency, ctx)
        assert restored.shape == (200, 300)
        assert restored.dtype == np.float32

    def test_input_not_modified(self, preprocessor, small_image):
        """测试不修改输入图像"""
        original = small_image.copy()
        preprocessor.process(small_image)
        np.testing.assert_array_equal(small_image, original)


class TestNormalize:
    """归一化工具测试"""

    def test_normalize_range(self):
        """测试 min-max 归一化"""
        image = np.linspace(-3.0, 5.0, 100, dtype=np.float32).reshape(10, 10)
        result = normalize_range(image)

        assert result.min() == pytest.approx(0.0, abs=1e-6)
        assert result.max() == pytest.approx(1.0, abs=1e-6)

    def test_normalize_custom_range(self):
        """测试自定义范围"""
        image = np.random.rand(10, 10).astype(np.float32)
        result = normalize_range(image, 2.0, 4.0)

        assert result.min() == pytest.approx(2.0, abs=1e-5)
        assert result.max() == pytest.approx(4.0, abs=1e-5)

    def test_constant_maps_to_low(self):
        """测试常数图像映射为下界"""
        image = np.full((8, 8), 3.0, dtype=np.float32)
        result = normalize_range(image)
        assert not result.any()

    def test_to_display_u8(self):
        """测试转换为 uint8"""
        image = np.random.rand(16, 16).astype(np.float32) * 40 - 20
        result = to_display_u8(image)

        assert result.dtype == np.uint8
        assert result.min() == 0
        assert result.max() == 255
