"""应力计算场景流水线

从 YAML 配置解析材料参数、叠加图参数与应变场文件，计算八个应力场并写出：

- ``stress_fields.npz``：八个命名标量场（键名同 ``FIELD_NAMES``）
- ``overlay.npz``：叠加图像素坐标 ``x_px``、``y_px`` （配置了 ``overlay.image_height`` 时）
- ``summary.json``：材料参数、叠加图参数与各场统计量
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import asdict

import numpy as np

from ...core.fields import FIELD_NAMES, StrainField, StressField
from ...elastic.materials import MaterialParameters
from ...elastic.stress_evaluator import StressEvaluator
from ...utils.utils import field_statistics
from ...visualization.overlay import OverlaySettings, overlay_coordinates

logger = logging.getLogger(__name__)


def load_strain_field(path: str) -> StrainField:
    """读取 ``.npz`` 格式的应变场记录

    Parameters
    ----------
    path : str
        文件路径；键名见 :meth:`StrainField.from_mapping`。

    Returns
    -------
    StrainField
    """
    with np.load(path) as data:
        return StrainField.from_mapping(data)


def _json_stats(values) -> dict:
    # 无有效点时统计量为 NaN，JSON 中写为 null
    return {
        k: (None if isinstance(v, float) and math.isnan(v) else v)
        for k, v in field_statistics(values).items()
    }


def write_stress_outputs(
    outdir: str,
    stress: StressField,
    material: MaterialParameters,
    overlay: OverlaySettings | None = None,
) -> dict:
    """写出应力场与统计摘要，返回摘要字典"""
    np.savez(os.path.join(outdir, "stress_fields.npz"), **stress.as_dict())
    summary = {
        "material": {
            "model": material.model.name.lower(),
            "youngs_modulus": material.youngs_modulus,
            "poissons_ratio": material.poissons_ratio,
            "name": material.name,
        },
        "grid_shape": list(stress.shape),
        "fields": {name: _json_stats(getattr(stress, name)) for name in FIELD_NAMES},
    }
    if overlay is not None:
        summary["overlay"] = asdict(overlay)
    with open(os.path.join(outdir, "summary.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False, allow_nan=False)
    return summary


def write_overlay_coordinates(
    outdir: str, strain: StrainField, image_height: int, settings: OverlaySettings
) -> str:
    """写出叠加图像素坐标 ``overlay.npz``，返回文件路径"""
    x_px, y_px = overlay_coordinates(strain, image_height, settings)
    path = os.path.join(outdir, "overlay.npz")
    np.savez(path, x_px=x_px, y_px=y_px)
    return path


def run_stress_pipeline(cfg, outdir: str, strain_file: str | None = None) -> StressField:
    """运行应力计算。

    Parameters
    ----------
    cfg : ConfigManager
        配置对象。
    outdir : str
        输出目录。
    strain_file : str, optional
        应变场文件；为 ``None`` 时读取 ``input.strain_file``。

    Returns
    -------
    StressField

    Raises
    ------
    ValueError
        未指定应变场文件，或 ``overlay`` 配置不合法。
    StressEvaluationError
        材料参数或输入网格不合法。
    """
    strain_file = strain_file or cfg.get("input.strain_file")
    if not strain_file:
        raise ValueError("未指定应变场文件：请在 input.strain_file 或 --strain 中给出")

    material = MaterialParameters.from_config(cfg.section("material"))
    overlay = OverlaySettings.from_config(cfg.section("overlay"))
    image_height = cfg.get("overlay.image_height")
    logger.info(
        f"材料: {material.name or '自定义'} | 模型: {material.model.name} | "
        f"E={material.youngs_modulus:g} | ν={material.poissons_ratio:g}"
    )

    strain = load_strain_field(strain_file)
    logger.info(f"应变场: {strain_file} | 网格 {strain.shape}")

    stress = StressEvaluator().evaluate(strain, material)
    if image_height is not None:
        path = write_overlay_coordinates(outdir, strain, int(image_height), overlay)
        logger.info(f"叠加图坐标: {path}")
    else:
        logger.info("未配置 overlay.image_height，跳过叠加图坐标输出")
    summary = write_stress_outputs(outdir, stress, material, overlay)
    vm = summary["fields"]["von_mises"]
    if vm["valid"]:
        logger.info(f"von Mises 应力: min={vm['min']:.4g}, max={vm['max']:.4g}")
    else:
        logger.warning("von Mises 应力场没有有效点")
    return stress
