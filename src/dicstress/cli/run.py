#!/usr/bin/env python3
"""YAML 驱动的应力计算入口（CLI）

使用示例::

    python -m dicstress.cli.run -c examples/plate_plane_stress.yaml
    python -m dicstress.cli.run -c my.yaml -s results/strain_frame_012.npz

说明
----
- 本入口只负责 YAML 解析、输出目录与日志配置；计算见 ``pipelines/stress.py``。
"""

from __future__ import annotations

import argparse
import logging
import os

from dicstress.core.config import ConfigManager
from dicstress.core.errors import StressEvaluationError
from dicstress.utils.utils import setup_logging

from .pipelines.stress import run_stress_pipeline


def main(argv: list[str] | None = None) -> int:
    """解析参数与 YAML 并运行应力计算。"""
    ap = argparse.ArgumentParser(description="dicstress: 由 DIC 应变场计算应力场")
    ap.add_argument("-c", "--config", required=True, help="YAML配置文件路径")
    ap.add_argument(
        "-s", "--strain", default=None, help="应变场 .npz 文件（覆盖 input.strain_file）"
    )
    ap.add_argument("-o", "--output", default=None, help="输出目录（覆盖 run.output_dir）")
    args = ap.parse_args(argv)

    cfg = ConfigManager(files=[args.config])
    if not (args.strain or cfg.get("input.strain_file")):
        ap.error("需要应变场文件：使用 -s/--strain 或在配置中设置 input.strain_file")

    if args.output:
        outdir = args.output
        os.makedirs(outdir, exist_ok=True)
    else:
        outdir = cfg.make_output_dir(cfg.get("run.name", "stress"))
    level_name = str(cfg.get("logging.level", "INFO")).upper()
    setup_logging(outdir, level=getattr(logging, level_name, logging.INFO))
    log = logging.getLogger(__name__)
    log.info(f"配置来源: {cfg.sources or ['(无)']}")

    try:
        run_stress_pipeline(cfg, outdir, strain_file=args.strain)
    except StressEvaluationError as e:
        log.error(f"应力计算失败: {e}")
        raise
    cfg.snapshot(outdir)

    log.info(f"完成。输出目录: {outdir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
