#!/usr/bin/env python3
r"""
应力叠加图数据接口

本模块不负责绘图。它把应力场整理成渲染器可直接使用的叠加图层
（:class:`OverlayLayer`），由外部渲染器（实现 :class:`StressRenderer`
协议）绘制到实验图像之上。

叠加坐标
--------
应力场网格坐标为物理单位，图像坐标为像素，且图像按上下翻转显示：

.. math::
    x_{px} = \frac{x + k\,u}{s}, \qquad
    y_{px} = H + 1 - \frac{y - k\,v}{s}

其中 :math:`s` 为每像素物理长度 ``um2px``，:math:`H` 为图像高度（像素），
:math:`k` 为 ``image_to_plot`` （0 画在参考图上，1 画在变形图上）。

Notes
-----
色图以字符串值放在 :class:`OverlaySettings` 中随图层传递，本模块不加载、
不注册任何全局色图资源。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np

from dicstress.core.fields import FIELD_NAMES, StrainField, StressField

logger = logging.getLogger(__name__)

FIELD_TITLES: dict[str, str] = {
    "sxx": r"Stress $s_{xx}$",
    "sxy": r"Stress $s_{xy}$",
    "syy": r"Stress $s_{yy}$",
    "principal_max": r"$xy$-plane principal stress $s_{\max}$",
    "principal_min": r"$xy$-plane principal stress $s_{\min}$",
    "maxshear_xyplane": r"$xy$-plane max shear stress",
    "maxshear_xyz3d": r"$xyz$-3D max shear stress",
    "von_mises": r"von Mises equivalent stress",
}


@dataclass(frozen=True)
class OverlaySettings:
    """叠加图显示参数

    Attributes
    ----------
    um2px : float
        每像素对应的物理长度，必须为正。
    transparency : float
        叠加层不透明度，取值 [0, 1]。
    image_to_plot : int
        0 表示画在参考图上（不平移），1 表示按位移平移后画在变形图上。
    colormap : str
        叠加层色图名称。
    background_colormap : str
        背景图像色图名称。
    """

    um2px: float = 1.0
    transparency: float = 0.7
    image_to_plot: int = 1
    colormap: str = "RdYlBu"
    background_colormap: str = "gray"

    def __post_init__(self):
        if not self.um2px > 0:
            raise ValueError(f"um2px 必须为正数，得到: {self.um2px}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"transparency 必须在 [0, 1] 内，得到: {self.transparency}")
        if self.image_to_plot not in (0, 1):
            raise ValueError(f"image_to_plot 只能为 0 或 1，得到: {self.image_to_plot}")

    @classmethod
    def from_config(cls, section: Mapping[str, Any] | None) -> OverlaySettings:
        """从配置中的 ``overlay`` 段构建；缺省键使用默认值"""
        section = dict(section or {})
        kwargs: dict[str, Any] = {}
        if "um2px" in section:
            kwargs["um2px"] = float(section["um2px"])
        if "transparency" in section:
            kwargs["transparency"] = float(section["transparency"])
        if "image_to_plot" in section:
            kwargs["image_to_plot"] = int(section["image_to_plot"])
        for key in ("colormap", "background_colormap"):
            if key in section:
                kwargs[key] = str(section[key])
        return cls(**kwargs)


@dataclass(frozen=True)
class OverlayLayer:
    """单幅叠加图的全部数据

    Attributes
    ----------
    name : str
        应力场名称（见 ``FIELD_NAMES``）。
    title : str
        图标题（LaTeX）。
    values : numpy.ndarray
        标量场数值。
    x_px, y_px : numpy.ndarray
        每个网格点在图像中的像素坐标。
    alpha : float
        叠加层不透明度。
    colormap, background_colormap : str
        色图名称。
    """

    name: str
    title: str
    values: np.ndarray
    x_px: np.ndarray
    y_px: np.ndarray
    alpha: float
    colormap: str
    background_colormap: str


class StressRenderer(Protocol):
    """外部渲染器协议"""

    def render(self, layer: OverlayLayer, image: Any) -> Any:
        """把一个图层绘制到背景图像上，返回值由渲染器自行定义"""
        ...


def overlay_coordinates(
    strain: StrainField, image_height: int, settings: OverlaySettings
) -> tuple[np.ndarray, np.ndarray]:
    """
    计算应力网格点在图像中的像素坐标

    Parameters
    ----------
    strain : StrainField
        应变场（提供坐标与位移）。
    image_height : int
        背景图像高度（像素）。
    settings : OverlaySettings
        显示参数。

    Returns
    -------
    tuple of numpy.ndarray
        ``(x_px, y_px)``，与网格同形。

    Raises
    ------
    ValueError
        ``image_to_plot == 1`` 但应变场不含位移网格。
    """
    k = settings.image_to_plot
    if k and not strain.has_displacement:
        raise ValueError("image_to_plot=1 需要应变场提供位移网格 u, v")
    u = strain.u if k else 0.0
    v = strain.v if k else 0.0
    x_px = (strain.x + k * u) / settings.um2px
    y_px = image_height + 1 - (strain.y - k * v) / settings.um2px
    return x_px, y_px


def build_overlay_layers(
    stress: StressField,
    strain: StrainField,
    image_height: int,
    settings: OverlaySettings | None = None,
) -> list[OverlayLayer]:
    """按 ``FIELD_NAMES`` 顺序构建八个叠加图层

    Parameters
    ----------
    stress : StressField
        应力计算结果。
    strain : StrainField
        与之对应的应变场。
    image_height : int
        背景图像高度（像素）。
    settings : OverlaySettings, optional
        显示参数，默认 ``OverlaySettings()``。

    Returns
    -------
    list of OverlayLayer
    """
    settings = settings or OverlaySettings()
    if stress.shape != strain.shape:
        raise ValueError(f"应力场形状 {stress.shape} 与应变场形状 {strain.shape} 不一致")
    x_px, y_px = overlay_coordinates(strain, image_height, settings)
    fields = stress.as_dict()
    return [
        OverlayLayer(
            name=name,
            title=FIELD_TITLES[name],
            values=fields[name],
            x_px=x_px,
            y_px=y_px,
            alpha=settings.transparency,
            colormap=settings.colormap,
            background_colormap=settings.background_colormap,
        )
        for name in FIELD_NAMES
    ]


def render_stress_overlays(
    renderer: StressRenderer,
    stress: StressField,
    strain: StrainField,
    image: Any,
    settings: OverlaySettings | None = None,
) -> list[Any]:
    """
    将八个应力场逐一交给渲染器绘制

    Parameters
    ----------
    renderer : StressRenderer
        外部渲染器。
    stress : StressField
        应力计算结果。
    strain : StrainField
        对应的应变场。
    image : array_like
        已解码的背景图像，形状 ``(H, W)`` 或 ``(H, W, C)``。
    settings : OverlaySettings, optional
        显示参数。

    Returns
    -------
    list
        每个图层的渲染器返回值，顺序同 ``FIELD_NAMES``。
    """
    image_height = int(np.shape(image)[0])
    layers = build_overlay_layers(stress, strain, image_height, settings)
    results = []
    for layer in layers:
        logger.debug(f"渲染叠加图: {layer.name}")
        results.append(renderer.render(layer, image))
    return results
