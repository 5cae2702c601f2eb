"""
核心模块 - 场数据结构、异常类型和配置管理
"""

__all__ = ["StrainField", "StressField", "FIELD_NAMES", "ConfigManager"]

# 延迟导入：ConfigManager 依赖 yaml，纯计算场景无需加载
def __getattr__(name):
    if name in ("StrainField", "StressField", "FIELD_NAMES"):
        from . import fields
        return getattr(fields, name)
    elif name == "ConfigManager":
        from .config import ConfigManager
        return ConfigManager
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
