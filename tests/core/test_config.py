#!/usr/bin/env python3
"""配置系统测试模块

测试ConfigManager的配置加载、合并、配置段访问和输出目录管理功能。
"""

import json
import logging
import os
from pathlib import Path

import pytest
import yaml

from dicstress.core.config import ConfigManager


class TestConfigManagerBasic:
    """基本配置加载测试"""

    def test_empty_config_initialization(self):
        """测试空配置初始化"""
        cfg = ConfigManager()
        assert cfg.data == {}
        assert cfg.sources == []

    def test_single_file_loading(self, tmp_path):
        """测试单个YAML文件加载"""
        config_file = tmp_path / "test.yaml"
        config_data = {
            "material": {"model": "plane_stress", "youngs_modulus": 70000.0},
            "overlay": {"um2px": 0.5},
        }
        config_file.write_text(yaml.dump(config_data))

        cfg = ConfigManager(files=[str(config_file)])
        assert cfg.get("material.youngs_modulus") == 70000.0
        assert cfg.get("overlay.um2px") == 0.5
        assert cfg.sources == [str(config_file)]

    def test_multiple_file_merging(self, tmp_path):
        """测试多个配置文件合并"""
        # 基础配置
        base_config = tmp_path / "base.yaml"
        base_data = {
            "material": {"model": 1, "youngs_modulus": 70000.0, "poissons_ratio": 0.3},
            "overlay": {"um2px": 1.0, "transparency": 0.7},
        }
        base_config.write_text(yaml.dump(base_data))

        # 覆盖配置
        override_config = tmp_path / "override.yaml"
        override_data = {
            "material": {"model": 2},  # 切换为平面应变
            "overlay": {"transparency": 0.5},
            "logging": {"level": "DEBUG"},  # 新增配置
        }
        override_config.write_text(yaml.dump(override_data))

        cfg = ConfigManager(files=[str(base_config), str(override_config)])

        # 验证覆盖
        assert cfg.get("material.model") == 2  # 被覆盖
        assert cfg.get("material.poissons_ratio") == 0.3  # 保持原值
        assert cfg.get("overlay.transparency") == 0.5  # 被覆盖
        assert cfg.get("overlay.um2px") == 1.0  # 保持原值
        assert cfg.get("logging.level") == "DEBUG"  # 新增
        assert len(cfg.sources) == 2

    def test_nonexistent_file_handling(self, caplog):
        """不存在的文件被跳过并记录警告"""
        with caplog.at_level(logging.WARNING, logger="dicstress.core.config"):
            cfg = ConfigManager(files=["nonexistent.yaml"])
        assert cfg.data == {}
        assert "nonexistent.yaml" in caplog.text


class TestConfigManagerAccess:
    """配置访问和查询测试"""

    @pytest.fixture
    def sample_config(self, tmp_path):
        """创建示例配置"""
        config_file = tmp_path / "sample.yaml"
        config_data = {
            "run": {"name": "plate"},
            "material": {"youngs_modulus": 200000.0, "poissons_ratio": 0.3},
            "overlay": {
                "colormap": "RdYlBu",
                "nested": {"deep": {"value": 42}},
            },
            "list_param": [1, 2, 3, 4, 5],
        }
        config_file.write_text(yaml.dump(config_data))
        return ConfigManager(files=[str(config_file)])

    def test_simple_path_access(self, sample_config):
        """测试简单路径访问"""
        assert sample_config.get("run.name") == "plate"
        assert sample_config.get("material.poissons_ratio") == 0.3
        assert sample_config.get("overlay.colormap") == "RdYlBu"

    def test_nested_path_access(self, sample_config):
        """测试深层嵌套路径访问"""
        assert sample_config.get("overlay.nested.deep.value") == 42

    def test_default_value_handling(self, sample_config):
        """测试默认值处理"""
        assert sample_config.get("nonexistent.path") is None
        assert sample_config.get("nonexistent.path", "default") == "default"
        assert sample_config.get("material.nonexistent", 100.0) == 100.0

    def test_type_preservation(self, sample_config):
        """测试数据类型保持"""
        assert isinstance(sample_config.get("material.youngs_modulus"), float)
        assert isinstance(sample_config.get("overlay.nested.deep.value"), int)
        assert isinstance(sample_config.get("list_param"), list)

    def test_section_access(self, sample_config):
        """配置段返回字典副本，缺失或非映射时为空字典"""
        section = sample_config.section("material")
        assert section == {"youngs_modulus": 200000.0, "poissons_ratio": 0.3}
        section["youngs_modulus"] = 1.0
        assert sample_config.get("material.youngs_modulus") == 200000.0
        assert sample_config.section("input") == {}
        assert sample_config.section("list_param") == {}


class TestConfigManagerOutput:
    """输出目录管理测试"""

    def test_output_directory_creation(self, tmp_path):
        """测试输出目录创建"""
        cfg = ConfigManager()

        # 临时设置输出基础路径
        original_cwd = os.getcwd()
        os.chdir(tmp_path)

        try:
            output_dir = cfg.make_output_dir("test_run")

            assert Path(output_dir).exists()
            assert Path(output_dir).is_dir()
            assert "test_run" in output_dir
            assert output_dir.startswith("outputs")

        finally:
            os.chdir(original_cwd)

    def test_output_directory_template(self, tmp_path):
        """run.output_dir 模板与 run.name 默认值"""
        config_file = tmp_path / "run.yaml"
        pattern = str(tmp_path / "results" / "{name}")
        config_file.write_text(yaml.dump({"run": {"output_dir": pattern, "name": "frame12"}}))

        cfg = ConfigManager(files=[str(config_file)])
        output_dir = cfg.make_output_dir()
        assert Path(output_dir) == tmp_path / "results" / "frame12"
        assert Path(output_dir).is_dir()

    def test_config_snapshot_saving(self, tmp_path):
        """测试配置快照保存"""
        config_file = tmp_path / "test.yaml"
        config_data = {"material": {"youngs_modulus": 123.0}}
        config_file.write_text(yaml.dump(config_data))

        cfg = ConfigManager(files=[str(config_file)])
        output_dir = tmp_path / "out"
        output_dir.mkdir()

        cfg.snapshot(str(output_dir))

        # 验证快照内容
        with open(output_dir / "resolved_config.yaml") as f:
            snapshot_data = yaml.safe_load(f)
        assert snapshot_data["material"]["youngs_modulus"] == 123.0

        with open(output_dir / "manifest.json") as f:
            manifest = json.load(f)
        assert manifest["sources"] == [str(config_file)]
        assert "timestamp" in manifest

    def test_snapshot_failure_only_warns(self, tmp_path, caplog):
        """快照写入失败不抛出异常"""
        cfg = ConfigManager()
        with caplog.at_level(logging.WARNING, logger="dicstress.core.config"):
            cfg.snapshot(str(tmp_path / "missing" / "dir"))
        assert "配置快照写入失败" in caplog.text


class TestConfigManagerEdgeCases:
    """边界情况和错误处理测试"""

    def test_empty_yaml_file(self, tmp_path):
        """测试空YAML文件"""
        empty_file = tmp_path / "empty.yaml"
        empty_file.write_text("")

        cfg = ConfigManager(files=[str(empty_file)])
        assert cfg.data == {}

    def test_malformed_yaml_handling(self, tmp_path):
        """测试格式错误的YAML文件"""
        bad_file = tmp_path / "bad.yaml"
        bad_file.write_text("invalid: yaml: content: [unclosed")

        with pytest.raises(yaml.YAMLError):
            ConfigManager(files=[str(bad_file)])

    def test_non_mapping_top_level(self, tmp_path):
        """顶层不是映射的YAML被拒绝"""
        list_file = tmp_path / "list.yaml"
        list_file.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError):
            ConfigManager(files=[str(list_file)])

    def test_path_with_empty_segments(self, tmp_path):
        """测试包含空段的路径"""
        config_file = tmp_path / "test.yaml"
        config_data = {"test": {"value": 123}}
        config_file.write_text(yaml.dump(config_data))

        cfg = ConfigManager(files=[str(config_file)])

        # 路径中的空段应该被正确处理
        assert cfg.get("test..value") is None  # 双点
        assert cfg.get(".test.value") is None  # 开头的点
        assert cfg.get("test.value.") is None  # 结尾的点
