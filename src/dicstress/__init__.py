"""
dicstress - DIC 应力场计算

由数字图像相关（DIC）测得的二维应变场，按线弹性本构（平面应力/平面应变）
计算应力分量、主应力、最大剪应力与 von Mises 等效应力。
"""

__version__ = "1.0.0"

from . import core, elastic, utils, visualization
from .core.errors import (
    InvalidMaterialParameters,
    ShapeMismatch,
    StressEvaluationError,
    UnsupportedMaterialModel,
)
from .core.fields import FIELD_NAMES, StrainField, StressField
from .elastic.materials import MaterialModel, MaterialParameters
from .elastic.stress_evaluator import StressEvaluator, evaluate_stress

__all__ = [
    "core",
    "elastic",
    "utils",
    "visualization",
    "FIELD_NAMES",
    "StrainField",
    "StressField",
    "MaterialModel",
    "MaterialParameters",
    "StressEvaluator",
    "evaluate_stress",
    "StressEvaluationError",
    "ShapeMismatch",
    "InvalidMaterialParameters",
    "UnsupportedMaterialModel",
]
