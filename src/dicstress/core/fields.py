r"""
场数据模块

定义 DIC 应变场输入与应力场输出两个不可变数据结构。

StrainField
    坐标网格、位移梯度网格及可选的位移网格。小应变分量由位移梯度导出：

    .. math::
        \varepsilon_{xx} = \frac{\partial u}{\partial x}, \quad
        \varepsilon_{yy} = \frac{\partial v}{\partial y}, \quad
        \varepsilon_{xy} = \frac{1}{2}\left(\frac{\partial v}{\partial x}
        + \frac{\partial u}{\partial y}\right)

StressField
    八个同网格的标量应力场（以及仅在内部保留的面外正应力 :math:`\sigma_{zz}`）。

所有数组在构造时转换为浮点数组并设为只读。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from .errors import ShapeMismatch

if TYPE_CHECKING:
    from dicstress.elastic.materials import MaterialModel


FIELD_NAMES: tuple[str, ...] = (
    "sxx",
    "sxy",
    "syy",
    "principal_max",
    "principal_min",
    "maxshear_xyplane",
    "maxshear_xyz3d",
    "von_mises",
)
"""输出应力场的固定顺序，每个名称对应一幅叠加图。"""

# 原始 DIC 结果中的字段名 -> StrainField 属性名
_KEY_ALIASES: dict[str, str] = {
    "strainxCoord": "x",
    "strainyCoord": "y",
    "dispu": "u",
    "dispv": "v",
}


def _as_readonly(values: Any) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


def check_same_shape(**grids: np.ndarray) -> tuple[int, ...]:
    """检查若干网格形状一致，返回公共形状

    Parameters
    ----------
    **grids
        名称 -> 数组。名称仅用于错误信息。

    Returns
    -------
    tuple of int
        公共形状。

    Raises
    ------
    ShapeMismatch
        任意两个网格形状不同。
    """
    shapes = {name: np.shape(arr) for name, arr in grids.items()}
    distinct = set(shapes.values())
    if len(distinct) > 1:
        detail = ", ".join(f"{k}={v}" for k, v in shapes.items())
        raise ShapeMismatch(f"输入网格形状不一致: {detail}", value=shapes)
    return next(iter(distinct)) if distinct else ()


@dataclass(frozen=True)
class StrainField:
    """DIC 应变场记录

    Attributes
    ----------
    x, y : numpy.ndarray
        坐标网格（物理单位）。
    dudx, dvdx, dudy, dvdy : numpy.ndarray
        位移梯度网格。
    u, v : numpy.ndarray or None
        位移网格，仅用于叠加图定位，不参与应力计算。

    Raises
    ------
    ShapeMismatch
        网格不是二维，或任意两个网格形状不同。
    """

    x: np.ndarray
    y: np.ndarray
    dudx: np.ndarray
    dvdx: np.ndarray
    dudy: np.ndarray
    dvdy: np.ndarray
    u: np.ndarray | None = None
    v: np.ndarray | None = None

    def __post_init__(self):
        grids = {}
        for name in ("x", "y", "dudx", "dvdx", "dudy", "dvdy", "u", "v"):
            value = getattr(self, name)
            if value is None:
                continue
            arr = _as_readonly(value)
            object.__setattr__(self, name, arr)
            grids[name] = arr

        shape = check_same_shape(**grids)
        if len(shape) != 2:
            raise ShapeMismatch(f"应变场网格必须为二维，得到形状: {shape}", value=shape)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StrainField:
        """从键值映射构建应变场

        既接受短键名（``x, y, dudx, dvdx, dudy, dvdy, u, v``），也接受 DIC
        结果中的原始字段名（``strainxCoord, strainyCoord, dispu, dispv``）。
        多余的键被忽略。

        Parameters
        ----------
        data : Mapping
            例如 ``numpy.load`` 返回的 ``NpzFile``。

        Returns
        -------
        StrainField

        Raises
        ------
        KeyError
            缺少坐标或位移梯度网格。
        """
        kwargs: dict[str, Any] = {}
        for key in data.keys():
            name = _KEY_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = data[key]

        required = ("x", "y", "dudx", "dvdx", "dudy", "dvdy")
        missing = [k for k in required if k not in kwargs]
        if missing:
            raise KeyError(f"应变场缺少字段: {missing}")
        return cls(**kwargs)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.x.shape

    @property
    def has_displacement(self) -> bool:
        return self.u is not None and self.v is not None

    @property
    def exx(self) -> np.ndarray:
        return self.dudx

    @property
    def eyy(self) -> np.ndarray:
        return self.dvdy

    @property
    def exy(self) -> np.ndarray:
        """剪切应变（张量分量，非工程剪应变）"""
        return 0.5 * (self.dvdx + self.dudy)

    def strain_components(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """返回 ``(exx, exy, eyy)``"""
        return self.exx, self.exy, self.eyy


@dataclass(frozen=True)
class StressField:
    """应力场计算结果

    八个输出场与输入网格同形，顺序见 :data:`FIELD_NAMES`。``szz`` 为面外
    正应力，平面应力时为零，仅用于内部计算与张量组装。

    Attributes
    ----------
    sxx, sxy, syy : numpy.ndarray
        Cauchy 应力分量（与杨氏模量同单位）。
    principal_max, principal_min : numpy.ndarray
        xy 平面内最大/最小主应力。
    maxshear_xyplane : numpy.ndarray
        xy 平面内最大剪应力。
    maxshear_xyz3d : numpy.ndarray
        三维最大剪应力。
    von_mises : numpy.ndarray
        von Mises 等效应力。
    model : MaterialModel
        计算所用材料模型。
    szz : numpy.ndarray
        面外正应力。
    """

    sxx: np.ndarray
    sxy: np.ndarray
    syy: np.ndarray
    principal_max: np.ndarray
    principal_min: np.ndarray
    maxshear_xyplane: np.ndarray
    maxshear_xyz3d: np.ndarray
    von_mises: np.ndarray
    model: MaterialModel
    szz: np.ndarray = field(repr=False, default=None)

    def __post_init__(self):
        for name in FIELD_NAMES:
            object.__setattr__(self, name, _as_readonly(getattr(self, name)))
        szz = np.zeros_like(self.sxx) if self.szz is None else self.szz
        object.__setattr__(self, "szz", _as_readonly(szz))
        check_same_shape(
            **{name: getattr(self, name) for name in FIELD_NAMES}, szz=self.szz
        )

    @property
    def shape(self) -> tuple[int, ...]:
        return self.sxx.shape

    def as_dict(self) -> dict[str, np.ndarray]:
        """按 :data:`FIELD_NAMES` 顺序返回八个命名标量场"""
        return {name: getattr(self, name) for name in FIELD_NAMES}

    def tensor(self) -> np.ndarray:
        """组装每个网格点的 3x3 Cauchy 应力张量

        Returns
        -------
        numpy.ndarray
            形状 ``shape + (3, 3)``；面外剪应力为零，``[2, 2]`` 分量为 ``szz``。
        """
        out = np.zeros(self.shape + (3, 3))
        out[..., 0, 0] = self.sxx
        out[..., 1, 1] = self.syy
        out[..., 2, 2] = self.szz
        out[..., 0, 1] = self.sxy
        out[..., 1, 0] = self.sxy
        return out
