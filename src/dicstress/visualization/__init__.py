#!/usr/bin/env python3
"""叠加图数据接口（绘制由外部渲染器完成）"""

from .overlay import (
    FIELD_TITLES,
    OverlayLayer,
    OverlaySettings,
    StressRenderer,
    build_overlay_layers,
    overlay_coordinates,
    render_stress_overlays,
)

__all__ = [
    "FIELD_TITLES",
    "OverlayLayer",
    "OverlaySettings",
    "StressRenderer",
    "build_overlay_layers",
    "overlay_coordinates",
    "render_stress_overlays",
]
