#!/usr/bin/env python3
r"""
材料参数模块

定义线弹性应力计算所需的材料模型与材料参数，并提供常用各向同性
工程材料的预定义参数。

主要组件：

MaterialModel
    材料模型枚举（平面应力 / 平面应变 / 未实现的超弹性）

MaterialParameters
    材料参数数据类，构造时完成合法性校验

预定义材料常量
    `ALUMINUM_6061_T6`, `STRUCTURAL_STEEL` 等

基本使用：
    >>> from dicstress.elastic.materials import MaterialModel, MaterialParameters
    >>> mat = MaterialParameters(MaterialModel.PLANE_STRESS, 70000.0, 0.3)
    >>> print(f"G = {mat.shear_modulus:.1f} MPa")
    G = 26923.1 MPa
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from dicstress.core.errors import InvalidMaterialParameters, UnsupportedMaterialModel

logger = logging.getLogger(__name__)


class MaterialModel(Enum):
    """材料模型

    枚举值沿用 DIC 参数中的数字编码：1 为平面应力，2 为平面应变，
    3 为 Neo-Hookean 等需用户自行实现的模型。
    """

    PLANE_STRESS = 1
    PLANE_STRAIN = 2
    NEO_HOOKEAN = 3

    @property
    def is_supported(self) -> bool:
        return self in (MaterialModel.PLANE_STRESS, MaterialModel.PLANE_STRAIN)

    @classmethod
    def parse(cls, value: Any) -> MaterialModel:
        """将枚举、数字编码或字符串别名解析为材料模型

        Parameters
        ----------
        value : MaterialModel | int | float | str
            例如 ``1``、``2.0``、``numpy.int64(2)``、``"plane_strain"``。

        Returns
        -------
        MaterialModel

        Raises
        ------
        UnsupportedMaterialModel
            无法识别的模型标识。
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise UnsupportedMaterialModel(
                f"无法识别的材料模型: {value!r}", parameter="model", value=value
            )
        # DIC 参数记录中的编码常为 numpy 整数或整值浮点数（如 2.0）
        if isinstance(value, numbers.Real) and not isinstance(value, numbers.Integral):
            if not float(value).is_integer():
                raise UnsupportedMaterialModel(
                    f"材料模型编码必须为整数，得到: {value!r}", parameter="model", value=value
                )
            value = int(value)
        if isinstance(value, numbers.Integral):
            try:
                return cls(int(value))
            except ValueError:
                raise UnsupportedMaterialModel(
                    f"未知的材料模型编码: {value}", parameter="model", value=value
                ) from None
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            if key.isdigit():
                return cls.parse(int(key))
            model = _MODEL_ALIASES.get(key)
            if model is not None:
                return model
        raise UnsupportedMaterialModel(
            f"无法识别的材料模型: {value!r}", parameter="model", value=value
        )


_MODEL_ALIASES: dict[str, MaterialModel] = {
    "plane_stress": MaterialModel.PLANE_STRESS,
    "planestress": MaterialModel.PLANE_STRESS,
    "plane_strain": MaterialModel.PLANE_STRAIN,
    "planestrain": MaterialModel.PLANE_STRAIN,
    "neo_hookean": MaterialModel.NEO_HOOKEAN,
    "neohookean": MaterialModel.NEO_HOOKEAN,
}


@dataclass(frozen=True)
class MaterialParameters:
    """
    材料参数数据类

    Attributes
    ----------
    model : MaterialModel
        材料模型。
    youngs_modulus : float
        杨氏模量 E，必须为正；应力结果与其单位相同。
    poissons_ratio : float
        泊松比 ν。
    name : str, optional
        材料名称。
    description : str, optional
        材料描述信息。

    Raises
    ------
    InvalidMaterialParameters
        E 非正或非有限；ν 非有限或使本构公式分母为零
        （平面应力 ν = ±1；平面应变 ν = -1, 0.5, 1）。

    Notes
    -----
    ν 落在物理可行区间 (-1, 0.5] 之外但不导致分母为零时，仅记录警告。
    对未实现的模型只校验 E 与 ν 的有限性，模型本身在计算时报错。
    """

    model: MaterialModel
    youngs_modulus: float
    poissons_ratio: float
    name: str = ""
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "model", MaterialModel.parse(self.model))
        E = _to_float(self.youngs_modulus, "youngs_modulus")
        nu = _to_float(self.poissons_ratio, "poissons_ratio")

        if not math.isfinite(E) or E <= 0:
            raise InvalidMaterialParameters(
                f"杨氏模量必须为有限正数，得到: {E}",
                parameter="youngs_modulus",
                value=E,
            )
        if not math.isfinite(nu):
            raise InvalidMaterialParameters(
                f"泊松比必须为有限实数，得到: {nu}",
                parameter="poissons_ratio",
                value=nu,
            )
        object.__setattr__(self, "youngs_modulus", E)
        object.__setattr__(self, "poissons_ratio", nu)

        if self.model is MaterialModel.PLANE_STRESS:
            denominators = {"1-ν²": 1 - nu**2, "1+ν": 1 + nu}
        elif self.model is MaterialModel.PLANE_STRAIN:
            denominators = {"1+ν": 1 + nu, "1-2ν": 1 - 2 * nu, "1-ν": 1 - nu}
        else:
            denominators = {}
        for label, value in denominators.items():
            if value == 0:
                raise InvalidMaterialParameters(
                    f"泊松比 ν={nu} 使 {self.model.name} 公式中的 {label} 为零",
                    parameter="poissons_ratio",
                    value=nu,
                )

        if not -1.0 < nu <= 0.5:
            logger.warning(f"泊松比 ν={nu} 超出物理可行区间 (-1, 0.5]")

    @property
    def shear_modulus(self) -> float:
        """
        剪切模量 G = E / (2(1+ν))

        Returns
        -------
        float
            与杨氏模量同单位。
        """
        return self.youngs_modulus / (2 * (1 + self.poissons_ratio))

    def with_model(self, model: MaterialModel | int | str) -> MaterialParameters:
        """返回仅替换材料模型的新参数对象（重新校验）"""
        return replace(self, model=MaterialModel.parse(model))

    @classmethod
    def from_config(cls, section: Mapping[str, Any]) -> MaterialParameters:
        """从配置中的 ``material`` 段构建材料参数

        支持的键：``model``、``youngs_modulus``、``poissons_ratio``、
        ``preset``、``name``。给出 ``preset`` 时以预定义材料为基础，
        其余显式给出的键覆盖预设值。

        Parameters
        ----------
        section : Mapping
            ``material`` 配置段。

        Returns
        -------
        MaterialParameters

        Raises
        ------
        KeyError
            未给出预设且缺少 ``youngs_modulus`` 或 ``poissons_ratio``。
        """
        section = dict(section or {})
        model = section.get("model", MaterialModel.PLANE_STRESS)
        preset = section.get("preset")
        if preset:
            base = get_material_by_name(str(preset), model=model)
            overrides = {
                k: section[k]
                for k in ("youngs_modulus", "poissons_ratio", "name")
                if k in section
            }
            return replace(base, **overrides)

        missing = [k for k in ("youngs_modulus", "poissons_ratio") if k not in section]
        if missing:
            raise KeyError(f"material 配置缺少字段: {missing}")
        return cls(
            model=model,
            youngs_modulus=section["youngs_modulus"],
            poissons_ratio=section["poissons_ratio"],
            name=str(section.get("name", "")),
        )


def _to_float(value: Any, parameter: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidMaterialParameters(
            f"{parameter} 必须为实数，得到: {value!r}", parameter=parameter, value=value
        ) from None


# ==================== 预定义材料参数 ====================
# 单位：MPa。默认按平面应力构造，可用 with_model 切换。

ALUMINUM_6061_T6 = MaterialParameters(
    model=MaterialModel.PLANE_STRESS,
    youngs_modulus=68900.0,
    poissons_ratio=0.33,
    name="Aluminum 6061-T6",
    description="常用铝合金板材",
)

STRUCTURAL_STEEL = MaterialParameters(
    model=MaterialModel.PLANE_STRESS,
    youngs_modulus=200000.0,
    poissons_ratio=0.30,
    name="Structural steel",
    description="低碳结构钢",
)

TITANIUM_TI6AL4V = MaterialParameters(
    model=MaterialModel.PLANE_STRESS,
    youngs_modulus=113800.0,
    poissons_ratio=0.342,
    name="Ti-6Al-4V",
    description="退火态钛合金",
)

PMMA = MaterialParameters(
    model=MaterialModel.PLANE_STRESS,
    youngs_modulus=3000.0,
    poissons_ratio=0.37,
    name="PMMA",
    description="有机玻璃，室温短时加载",
)

_MATERIAL_REGISTRY: dict[str, MaterialParameters] = {
    "aluminum_6061_t6": ALUMINUM_6061_T6,
    "structural_steel": STRUCTURAL_STEEL,
    "ti6al4v": TITANIUM_TI6AL4V,
    "pmma": PMMA,
}


def get_all_materials() -> dict[str, MaterialParameters]:
    """
    获取所有预定义材料参数

    Returns
    -------
    dict
        键为注册名，值为 MaterialParameters（平面应力）。
    """
    return dict(_MATERIAL_REGISTRY)


def get_material_by_name(
    name: str, model: MaterialModel | int | str = MaterialModel.PLANE_STRESS
) -> MaterialParameters:
    """
    根据注册名获取材料参数

    Parameters
    ----------
    name : str
        注册名（大小写、连字符不敏感），如 ``"aluminum_6061_t6"``、``"PMMA"``。
    model : MaterialModel | int | str, optional
        返回参数使用的材料模型，默认平面应力。

    Returns
    -------
    MaterialParameters

    Raises
    ------
    KeyError
        未找到该材料。

    Examples
    --------
    >>> steel = get_material_by_name("structural-steel", model="plane_strain")
    >>> steel.model
    <MaterialModel.PLANE_STRAIN: 2>
    """
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    if key not in _MATERIAL_REGISTRY:
        raise KeyError(f"未知材料: {name}，可选: {sorted(_MATERIAL_REGISTRY)}")
    return _MATERIAL_REGISTRY[key].with_model(model)
