#!/usr/bin/env python
"""
cogsal Demo - 命令行演示脚本

使用方法:
    python examples/demo.py [input_image] [output_image]

示例:
    python examples/demo.py examples/input.jpg examples/saliency.png
    python examples/demo.py examples/input.jpg --fusion max --ground-truth examples/gt.png
"""

import sys
from pathlib import Path

# 添加项目根目录到路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import numpy as np
from PIL import Image

from cogsal.pipeline import load_pipeline
from cogsal.preprocess import to_display_u8


def create_sample_image(width: int = 320, height: int = 240) -> np.ndarray:
    """
    创建一个示例图像（灰色背景上的红色圆形与若干竖条）

    Returns:
        uint8 RGB 图像
    """
    img = np.full((height, width, 3), 110, dtype=np.uint8)

    # 竖条纹理（方向特征）
    for x in range(20, width // 3, 12):
        img[40:height - 40, x:x + 4, :] = 160

    # 红色圆形（颜色特征）
    yy, xx = np.mgrid[:height, :width]
    cy, cx, r = height // 2, int(width * 0.7), min(height, width) // 8
    disk = (yy - cy) ** 2 + (xx - cx) ** 2 <= r ** 2
    img[disk] = (220, 30, 30)

    noise = np.random.randint(-6, 6, img.shape, dtype=np.int16)
    img = np.clip(img.astype(np.int16) + noise, 0, 255).astype(np.uint8)
    return img


def main():
    parser = argparse.ArgumentParser(description="cogsal Demo")
    parser.add_argument("input", nargs="?", help="输入图像路径")
    parser.add_argument("output", nargs="?", default="saliency.png", help="输出显著图路径")
    parser.add_argument("--config", default=None, help="配置文件路径")
    parser.add_argument("--create-sample", action="store_true", help="创建示例图像")
    parser.add_argument("--fusion", choices=["mean", "max"], default=None, help="特征融合方法")
    parser.add_argument("--no-orientation", action="store_true", help="禁用方向特征")
    parser.add_argument("--ground-truth", default=None, help="ground truth 图像路径（可选，用于评估）")

    args = parser.parse_args()

    if args.create_sample or args.input is None:
        print("创建示例图像...")
        input_image = create_sample_image()
        sample_path = project_root / "examples" / "sample_input.png"
        Image.fromarray(input_image).save(sample_path)
        print(f"示例图像已保存到: {sample_path}")
    else:
        print(f"加载图像: {args.input}")
        input_image = np.array(Image.open(args.input).convert("RGB"))

    print(f"图像尺寸: {input_image.shape}")

    pipe = load_pipeline(args.config)

    overrides = {"orientation_enabled": not args.no_orientation}
    if args.fusion is not None:
        overrides["feature_method"] = args.fusion
        overrides["conspicuity_method"] = args.fusion

    print("计算显著图...")
    result = pipe.process(input_image, overrides)

    output_path = Path(args.output)
    if not output_path.is_absolute():
        output_path = project_root / "examples" / output_path
    Image.fromarray(to_display_u8(result.saliency_map)).save(output_path)
    print(f"显著图已保存到: {output_path}")

    if args.ground_truth:
        gt = np.array(Image.open(args.ground_truth).convert("L"))
        report = pipe.evaluate(result.saliency_map, gt)
        print(f"最佳阈值: {report['best_threshold']}, F-measure: {report['best_f']:.4f}")

    print("完成!")


if __name__ == "__main__":
    main()
