"""配置加载模块

提供轻量的 YAML 配置加载与工具函数：

- 递归合并多份 YAML（后者覆盖前者）
- 点路径访问（如 ``material.youngs_modulus``）
- 基于模板创建输出目录并保存配置快照

配置键约定
----------
``run``
    ``name`` 与 ``output_dir`` 模板
``input``
    ``strain_file`` 应变场 ``.npz`` 路径
``material``
    见 :meth:`dicstress.elastic.materials.MaterialParameters.from_config`
``overlay``
    见 :meth:`dicstress.visualization.overlay.OverlaySettings.from_config`；
    ``image_height`` 为背景图像高度（像素），给出时 CLI 写出叠加图坐标
``logging``
    ``level`` 日志级别名
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATTERN = "outputs/{name}_{timestamp}"


def _deep_update(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def _get_by_path(d: dict, path: str, default: Any = None) -> Any:
    cur = d
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def _read_yaml(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"配置文件顶层必须为映射: {path}")
    return data


@dataclass
class _Resolved:
    data: dict
    sources: list[str]


class ConfigManager:
    """配置管理器

    先加载仓库内 ``config/default.yaml`` （若存在），再按顺序合并用户文件。
    不存在的用户文件被跳过并记录警告；格式错误的 YAML 抛出 ``yaml.YAMLError``。

    Parameters
    ----------
    files : Iterable[str] | None, optional
        需要加载的 YAML 文件列表，后者覆盖前者。

    Attributes
    ----------
    data : dict
        合并后的配置数据。
    """

    def __init__(self, files: Iterable[str] | None = None) -> None:
        self._resolved = self._load_all(files)

    def _load_all(self, files: Iterable[str] | None) -> _Resolved:
        repo_root = Path(__file__).resolve().parents[3]
        default_path = repo_root / "config" / "default.yaml"
        data: dict[str, Any] = {}
        sources: list[str] = []
        if default_path.exists():
            data = _read_yaml(default_path)
            sources.append(str(default_path))
        for p in files or []:
            path = Path(p)
            if not path.exists():
                logger.warning(f"配置文件不存在，已跳过: {path}")
                continue
            data = _deep_update(data, _read_yaml(path))
            sources.append(str(path))
        return _Resolved(data=data, sources=sources)

    @property
    def data(self) -> dict:
        return self._resolved.data

    @property
    def sources(self) -> list[str]:
        """实际加载的配置文件路径（按合并顺序）"""
        return list(self._resolved.sources)

    def get(self, path: str, default: Any | None = None) -> Any:
        """获取配置值（点路径）

        Parameters
        ----------
        path : str
            点路径键名，例如 ``"overlay.um2px"``。
        default : Any, optional
            当键不存在时返回的默认值。

        Returns
        -------
        Any
        """
        return _get_by_path(self._resolved.data, path, default)

    def section(self, path: str) -> dict:
        """获取嵌套配置段；不存在或不是映射时返回空字典"""
        value = self.get(path)
        return dict(value) if isinstance(value, dict) else {}

    def make_output_dir(self, name: str | None = None) -> str:
        """创建输出目录

        依据模板 ``run.output_dir`` 创建目录，支持 ``{name}`` 与 ``{timestamp}``
        占位符，默认 ``outputs/{name}_{timestamp}``。

        Parameters
        ----------
        name : str | None, optional
            运行名；若为 ``None``，则读取 ``run.name``（默认 ``"stress"``）。

        Returns
        -------
        str
            创建的输出目录路径。
        """
        pattern = str(self.get("run.output_dir", DEFAULT_OUTPUT_PATTERN))
        name = name or str(self.get("run.name", "stress"))
        ts = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
        out = pattern.format(name=name, timestamp=ts)
        os.makedirs(out, exist_ok=True)
        return out

    def snapshot(self, output_dir: str) -> None:
        """保存配置快照

        在输出目录写入 ``resolved_config.yaml`` 与 ``manifest.json``。
        快照失败只记录警告，不中断主流程。

        Parameters
        ----------
        output_dir : str
            输出目录路径。
        """
        try:
            path = Path(output_dir) / "resolved_config.yaml"
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self._resolved.data, f, allow_unicode=True, sort_keys=True
                )
            manifest = {
                "timestamp": _dt.datetime.now().isoformat(),
                "sources": self._resolved.sources,
            }
            with open(Path(output_dir) / "manifest.json", "w", encoding="utf-8") as f:
                json.dump(manifest, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"配置快照写入失败: {e}")
