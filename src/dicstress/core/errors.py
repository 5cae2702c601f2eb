"""应力计算相关的异常类型

所有异常均继承自 :class:`StressEvaluationError` （其本身是 ``ValueError``），
调用方既可以按具体类型捕获，也可以统一捕获基类。
"""

from __future__ import annotations

from typing import Any


class StressEvaluationError(ValueError):
    """应力计算输入错误的基类

    Attributes
    ----------
    parameter : str
        出错的参数名（可能为空字符串）。
    value : Any
        传入的参数值。
    """

    def __init__(self, message: str, parameter: str = "", value: Any = None):
        self.parameter = parameter
        self.value = value
        super().__init__(message)


class ShapeMismatch(StressEvaluationError):
    """输入网格形状不一致"""


class InvalidMaterialParameters(StressEvaluationError):
    """杨氏模量或泊松比不合法（非正、非有限或导致分母为零）"""


class UnsupportedMaterialModel(StressEvaluationError):
    """材料模型未实现（仅支持平面应力与平面应变线弹性）"""
