# 文件名: utils.py
# 修改日期: 2026-10-18
# 文件描述: 日志配置与标量场统计工具。

"""
工具模块

包含运行日志配置函数 ``setup_logging`` 与标量场统计函数 ``field_statistics``。
"""

import logging
import os

import numpy as np

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(output_dir: str | None = None, level: int = logging.INFO) -> None:
    """配置根日志记录器

    控制台 handler 若不存在则添加，存在则调整到期望级别；给出输出目录时
    追加一个写入 ``run.log`` 的文件 handler（DEBUG 级别）。

    Parameters
    ----------
    output_dir : str, optional
        运行输出目录。
    level : int, optional
        控制台日志级别，默认 ``logging.INFO``。
    """
    root = logging.getLogger()
    root.setLevel(min(level, logging.DEBUG) if output_dir else level)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    streams = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    if not streams:
        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        root.addHandler(sh)
        streams = [sh]
    for h in streams:
        h.setLevel(level)

    if output_dir:
        try:
            os.makedirs(output_dir, exist_ok=True)
            fh = logging.FileHandler(
                os.path.join(output_dir, "run.log"), mode="w", encoding="utf-8"
            )
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            root.addHandler(fh)
        except OSError:
            logger.warning("无法创建日志文件处理器，继续仅输出到控制台。")


def field_statistics(values) -> dict[str, float]:
    """
    计算标量场的统计量（忽略 NaN）

    Parameters
    ----------
    values : array_like
        任意形状的标量场。

    Returns
    -------
    dict
        ``min``、``max``、``mean``、``std`` 以及有效点数 ``valid``；
        没有有效点时前四项为 NaN。
    """
    arr = np.asarray(values, dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        nan = float("nan")
        return {"min": nan, "max": nan, "mean": nan, "std": nan, "valid": 0}
    return {
        "min": float(finite.min()),
        "max": float(finite.max()),
        "mean": float(finite.mean()),
        "std": float(finite.std()),
        "valid": int(finite.size),
    }
