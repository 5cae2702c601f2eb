"""
pytest配置文件 - 提供全局fixtures和测试配置
"""

import logging

import numpy as np
import pytest

from dicstress.core.fields import StrainField
from dicstress.elastic.materials import MaterialModel, MaterialParameters


def make_strain_field(exx, exy, eyy, with_displacement=True):
    """由应变分量网格构造应变场（dvdx = dudy = exy）"""
    exx = np.asarray(exx, dtype=float)
    ny, nx = exx.shape
    x, y = np.meshgrid(np.arange(nx) * 2.0, np.arange(ny) * 2.0)
    kwargs = {}
    if with_displacement:
        kwargs = {"u": np.full_like(exx, 0.5), "v": np.full_like(exx, -0.25)}
    return StrainField(
        x=x,
        y=y,
        dudx=exx,
        dvdx=np.asarray(exy, dtype=float),
        dudy=np.asarray(exy, dtype=float),
        dvdy=np.asarray(eyy, dtype=float),
        **kwargs,
    )


@pytest.fixture
def strain_factory():
    """返回 make_strain_field，便于测试按需构造应变场"""
    return make_strain_field


@pytest.fixture
def plane_stress_aluminum():
    """E=70000 MPa, ν=0.3 的平面应力材料"""
    return MaterialParameters(MaterialModel.PLANE_STRESS, 70000.0, 0.3)


@pytest.fixture
def plane_strain_aluminum():
    """E=70000 MPa, ν=0.3 的平面应变材料"""
    return MaterialParameters(MaterialModel.PLANE_STRAIN, 70000.0, 0.3)


@pytest.fixture
def random_strain_field():
    """5x4 网格上的随机小应变场"""
    rng = np.random.default_rng(2020)
    shape = (5, 4)
    return make_strain_field(
        rng.uniform(-2e-3, 2e-3, shape),
        rng.uniform(-1e-3, 1e-3, shape),
        rng.uniform(-2e-3, 2e-3, shape),
    )


@pytest.fixture
def uniaxial_strain_field():
    """3x3 网格上 exx=0.001、其余为零的均匀应变场"""
    shape = (3, 3)
    return make_strain_field(np.full(shape, 1e-3), np.zeros(shape), np.zeros(shape))


@pytest.fixture
def restore_root_logger():
    """测试结束后恢复根日志记录器的级别与 handler"""
    root = logging.getLogger()
    level = root.level
    handlers = {h: h.level for h in root.handlers}
    yield root
    for h in list(root.handlers):
        if h in handlers:
            h.setLevel(handlers[h])
        else:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


# 全局测试配置
def pytest_configure(config):
    """pytest全局配置"""
    # 设置numpy错误处理
    np.seterr(all="raise")
