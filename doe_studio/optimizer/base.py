"""
Optimizer capability.

An optimizer turns a parameter set into an OptimizationResultData. Real
numerical solvers and the mock generator share this interface so the
task layer never depends on a particular implementation.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..api.response import OptimizationResultData
from ..params.base import DOEParams
from ..pipeline.progress import CancellationToken, ProgressInfo


ProgressCallback = Callable[[ProgressInfo], None]


class Optimizer(ABC):
    """Base class for DOE optimizers."""

    name: str = "base"

    @abstractmethod
    def optimize(
        self,
        params: DOEParams,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None
    ) -> OptimizationResultData:
        """Run the optimization.

        Args:
            params: Typed parameter record
            progress_callback: Called with ProgressInfo as work proceeds
            cancellation_token: Checked between steps

        Returns:
            Complete optimization result

        Raises:
            OptimizationCancelled: If the token was cancelled
            OptimizationTimeout: If the token was cancelled for timeout
            OptimizationError: For any other failure
        """
        pass
