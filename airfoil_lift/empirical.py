"""
Empirical distributions from alternative sample curves.

A handful of curves (for instance pressure-coefficient profiles measured
at 0°, 5° and 10° angle of attack) are treated as equally likely
scenarios. Each position along the curves becomes one UncertainValue
whose observations are the values the scenarios put at that position.
"""

import logging
from typing import List, Sequence

from .errors import ShapeMismatch
from .uncertain_value import UncertainValue

logger = logging.getLogger(__name__)


class EmpiricalDistributionBuilder:
    """Turn k curves of n values into n empirical UncertainValues."""

    @staticmethod
    def check_shape(curves: Sequence[Sequence[float]]) -> int:
        """Return the common curve length, raising ShapeMismatch otherwise."""
        if len(curves) == 0:
            raise ShapeMismatch("At least one sample curve is required")
        lengths = [len(curve) for curve in curves]
        if len(set(lengths)) != 1:
            raise ShapeMismatch(f"Sample curves differ in length: {lengths}")
        if lengths[0] == 0:
            raise ShapeMismatch("Sample curves are empty")
        return lengths[0]

    @classmethod
    def build(cls, curves: Sequence[Sequence[float]]) -> List[UncertainValue]:
        """
        Build one empirical UncertainValue per position.

        Parameters
        ----------
        curves : sequence of sequences
            ``curves[j][i]`` is the value scenario j puts at position i.

        Returns
        -------
        list of UncertainValue
            Element i has observations ``(curves[0][i], ..., curves[k-1][i])``.
            Positions are drawn independently of one another.
        """
        n = cls.check_shape(curves)
        logger.debug("Building %d empirical values from %d scenarios", n, len(curves))
        return [
            UncertainValue.empirical([curve[i] for curve in curves])
            for i in range(n)
        ]
