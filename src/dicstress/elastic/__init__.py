"""线弹性应力计算模块"""

from .materials import (
    ALUMINUM_6061_T6,
    PMMA,
    STRUCTURAL_STEEL,
    TITANIUM_TI6AL4V,
    MaterialModel,
    MaterialParameters,
    get_all_materials,
    get_material_by_name,
)
from .stress_evaluator import (
    StressEvaluator,
    evaluate_stress,
    plane_strain_components,
    plane_stress_components,
)

__all__ = [
    # 材料参数
    "MaterialModel",
    "MaterialParameters",
    "ALUMINUM_6061_T6",
    "STRUCTURAL_STEEL",
    "TITANIUM_TI6AL4V",
    "PMMA",
    "get_material_by_name",
    "get_all_materials",
    # 应力计算
    "StressEvaluator",
    "evaluate_stress",
    "plane_stress_components",
    "plane_strain_components",
]
