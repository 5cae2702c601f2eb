# 文件名: stress_evaluator.py
# 修改日期: 2026-10-18
# 文件描述: 由 DIC 应变场按线弹性本构计算应力分量、主应力、最大剪应力与 von Mises 应力。

r"""
应力计算模块

对二维应变场逐点应用线弹性本构关系，得到八个同网格的标量应力场。
所有运算均为逐元素的 numpy 向量化运算，网格点之间没有耦合。

平面应力（:math:`\sigma_{zz}=0`）

.. math::
    \sigma_{xx} = \frac{E}{1-\nu^2}(\varepsilon_{xx} + \nu\varepsilon_{yy}), \quad
    \sigma_{yy} = \frac{E}{1-\nu^2}(\nu\varepsilon_{xx} + \varepsilon_{yy}), \quad
    \sigma_{xy} = \frac{E}{1+\nu}\varepsilon_{xy}

平面应变（:math:`\varepsilon_{zz}=0`）

.. math::
    \sigma_{xx} = \frac{E(1-\nu)}{(1+\nu)(1-2\nu)}
        \left(\varepsilon_{xx} + \frac{\nu}{1-\nu}\varepsilon_{yy}\right), \quad
    \sigma_{zz} = \nu(\sigma_{xx} + \sigma_{yy})

导出量以第三主应力 :math:`\sigma_3` （平面应力为 0，平面应变为
:math:`\sigma_{zz}`）计算：

.. math::
    \tau_{xy} = \sqrt{\left(\tfrac{\sigma_{xx}-\sigma_{yy}}{2}\right)^2 + \sigma_{xy}^2},
    \quad \sigma_{\max,\min} = \tfrac{\sigma_{xx}+\sigma_{yy}}{2} \pm \tau_{xy}

.. math::
    \sigma_{vM} = \sqrt{\tfrac{1}{2}\left[(\sigma_{\max}-\sigma_{\min})^2
        + (\sigma_{\max}-\sigma_3)^2 + (\sigma_{\min}-\sigma_3)^2\right]}

Notes
-----
平面应力的三维最大剪应力只取 :math:`\max(\tau_{xy}, |\sigma_{\max}|/2)`，
不包含 :math:`|\sigma_{\min}|/2` 一项；平面应变则取三项的最大值。
"""

import logging

import numpy as np

from dicstress.core.errors import UnsupportedMaterialModel
from dicstress.core.fields import StrainField, StressField, check_same_shape
from dicstress.elastic.materials import MaterialModel, MaterialParameters

logger = logging.getLogger(__name__)


def plane_stress_components(exx, exy, eyy, E: float, nu: float):
    """平面应力本构，返回 ``(sxx, sxy, syy, szz)``，其中 ``szz`` 恒为零"""
    factor = E / (1 - nu**2)
    sxx = factor * (exx + nu * eyy)
    syy = factor * (nu * exx + eyy)
    sxy = E / (1 + nu) * exy
    return sxx, sxy, syy, np.zeros_like(sxx)


def plane_strain_components(exx, exy, eyy, E: float, nu: float):
    """平面应变本构，返回 ``(sxx, sxy, syy, szz)``"""
    factor = E * (1 - nu) / ((1 + nu) * (1 - 2 * nu))
    ratio = nu / (1 - nu)
    sxx = factor * (exx + ratio * eyy)
    syy = factor * (eyy + ratio * exx)
    sxy = E / (1 + nu) * exy
    szz = nu * (sxx + syy)
    return sxx, sxy, syy, szz


_CONSTITUTIVE_LAWS = {
    MaterialModel.PLANE_STRESS: plane_stress_components,
    MaterialModel.PLANE_STRAIN: plane_strain_components,
}


class StressEvaluator:
    r"""线弹性应力计算器

    无状态；同一实例可重复用于不同应变场与材料参数。

    Examples
    --------
    >>> import numpy as np
    >>> from dicstress.elastic.materials import MaterialModel, MaterialParameters
    >>> mat = MaterialParameters(MaterialModel.PLANE_STRESS, 70000.0, 0.3)
    >>> z = np.zeros((1, 1))
    >>> out = StressEvaluator().evaluate_components(z + 1e-3, z, z, mat)
    >>> round(float(out.sxx[0, 0]), 2), round(float(out.syy[0, 0]), 2)
    (76.92, 23.08)
    """

    def evaluate(self, strain: StrainField, material: MaterialParameters) -> StressField:
        """由应变场计算应力场

        Parameters
        ----------
        strain : StrainField
            DIC 应变场。
        material : MaterialParameters
            材料参数。

        Returns
        -------
        StressField
            八个同网格标量场。

        Raises
        ------
        UnsupportedMaterialModel
            材料模型未实现。
        """
        exx, exy, eyy = strain.strain_components()
        return self.evaluate_components(exx, exy, eyy, material)

    def evaluate_components(
        self, exx, exy, eyy, material: MaterialParameters
    ) -> StressField:
        """由应变分量网格计算应力场

        Parameters
        ----------
        exx, exy, eyy : array_like
            同形的应变分量网格，``exy`` 为张量剪应变。
        material : MaterialParameters
            材料参数。

        Returns
        -------
        StressField

        Raises
        ------
        ShapeMismatch
            三个应变网格形状不一致。
        UnsupportedMaterialModel
            材料模型未实现。
        """
        exx = np.asarray(exx, dtype=np.float64)
        exy = np.asarray(exy, dtype=np.float64)
        eyy = np.asarray(eyy, dtype=np.float64)
        shape = check_same_shape(exx=exx, exy=exy, eyy=eyy)

        model = material.model
        law = _CONSTITUTIVE_LAWS.get(model)
        if law is None:
            raise UnsupportedMaterialModel(
                f"材料模型 {model.name} 尚未实现，仅支持平面应力与平面应变线弹性",
                parameter="model",
                value=model,
            )

        E = material.youngs_modulus
        nu = material.poissons_ratio
        logger.debug(f"应力计算: 模型={model.name}, E={E}, ν={nu}, 网格={shape}")

        # DIC 结果中 ROI 之外的点常为 NaN，逐点传播即可
        with np.errstate(invalid="ignore"):
            sxx, sxy, syy, szz = law(exx, exy, eyy, E, nu)

            maxshear_xyplane = np.sqrt((0.5 * (sxx - syy)) ** 2 + sxy**2)
            mean = 0.5 * (sxx + syy)
            principal_max = mean + maxshear_xyplane
            principal_min = mean - maxshear_xyplane

            if model is MaterialModel.PLANE_STRESS:
                maxshear_xyz3d = np.maximum(
                    maxshear_xyplane, 0.5 * np.abs(principal_max)
                )
                von_mises = np.sqrt(
                    0.5
                    * (
                        (principal_max - principal_min) ** 2
                        + principal_max**2
                        + principal_min**2
                    )
                )
            else:
                candidates = np.stack(
                    [
                        maxshear_xyplane,
                        0.5 * np.abs(principal_max - szz),
                        0.5 * np.abs(principal_min - szz),
                    ]
                )
                maxshear_xyz3d = np.max(candidates, axis=0)
                von_mises = np.sqrt(
                    0.5
                    * (
                        (principal_max - principal_min) ** 2
                        + (principal_max - szz) ** 2
                        + (principal_min - szz) ** 2
                    )
                )

        if von_mises.size and np.isfinite(von_mises).any():
            logger.debug(
                f"von Mises 应力范围: [{np.nanmin(von_mises):.4g}, "
                f"{np.nanmax(von_mises):.4g}]"
            )

        return StressField(
            sxx=sxx,
            sxy=sxy,
            syy=syy,
            principal_max=principal_max,
            principal_min=principal_min,
            maxshear_xyplane=maxshear_xyplane,
            maxshear_xyz3d=maxshear_xyz3d,
            von_mises=von_mises,
            model=model,
            szz=szz,
        )


def evaluate_stress(strain: StrainField, material: MaterialParameters) -> StressField:
    """:meth:`StressEvaluator.evaluate` 的函数式入口"""
    return StressEvaluator().evaluate(strain, material)
