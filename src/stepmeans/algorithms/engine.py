"""
Observable k-means clustering engine.

Refines k centroids one pass at a time and reports every pass through an
event bus, so a caller can render or log convergence as it happens.
"""

from typing import (
    Any, Callable, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, Union
)
import asyncio
import time
import warnings
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import (
    Extent, EngineState, EngineStatus, compute_extents, compute_ranges
)
from ..base.observable import Observable
from ..assignments.hard import HardAssignment
from ..initialization.random import UniformBoxInit
from ..updates.damped import DampedMeanUpdater
from ..utils.validation import (
    validate_data, check_n_clusters, check_max_iter, check_random_state, check_delay
)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with asyncio's ``call_later`` signature."""

    def call_later(self, delay: float, callback: Callable[..., Any],
                   *args: Any) -> TimerHandle: ...


class ClusteringEngine:
    """K-means with damped centroid moves and per-pass events.

    Each pass assigns every point to its nearest centroid and then moves each
    centroid towards the mean of its points. Passes repeat until a pass
    leaves every centroid where it was.

    Parameters
    ----------
    data : sequence of points, ndarray or Tensor of shape (n_samples, n_features)
        Points to cluster. Never modified.
    k : int
        Number of centroids, 1 <= k <= n_samples
    random_state : int or torch.Generator, optional
        Seed for centroid seeding and empty-cluster re-seeding
    max_iter : int, optional
        Maximum passes per run; unbounded by default
    verbose : int, default=0
        Verbosity level (0=silent, 1=progress, 2=every pass)
    scheduler : object with ``call_later``, optional
        Used by :meth:`run` to pace passes; the running asyncio loop by default

    Attributes
    ----------
    extents : list of Extent
        Per-dimension min/max of the data
    ranges : Tensor of shape (n_features,)
        Per-dimension max - min
    means : Tensor of shape (k, n_features)
        Current centroids
    assignments : Tensor of shape (n_samples,)
        Centroid index per point; empty until the first pass
    iterations : int
        Number of passes run so far
    events : Observable
        Event bus emitting ``'iteration'`` and ``'end'`` with an EngineState

    Example
    -------
    >>> engine = ClusteringEngine(data=[[6, 5], [9, 10], [10, 1]], k=2)
    >>> engine.on('end', lambda state: print(state.iterations))
    >>> engine.fit()
    """

    def __init__(self,
                 data: Union[Tensor, np.ndarray, Sequence[Sequence[float]]],
                 k: int,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 max_iter: Optional[int] = None,
                 verbose: int = 0,
                 scheduler: Optional[Scheduler] = None):
        self.data = validate_data(data)
        check_n_clusters(k, self.data.shape[0])
        check_max_iter(max_iter)

        self.k = k
        self.random_state = random_state
        self.max_iter = max_iter
        self.verbose = verbose
        self.scheduler = scheduler
        self._generator = check_random_state(random_state)

        self.events = Observable()

        # Keeps track of which centroid each point belongs to.
        self.assignments = torch.empty(0, dtype=torch.long, device=self.data.device)

        self.extents: List[Extent] = compute_extents(self.data)
        self.ranges: Tensor = compute_ranges(self.extents).to(self.data.device)
        self._mins = torch.tensor([e.min for e in self.extents],
                                  dtype=self.data.dtype, device=self.data.device)

        self._create_components()
        self.means: Tensor = self.seeds()
        self.iterations = 0

        self.status = EngineStatus.IDLE
        self._timer: Optional[TimerHandle] = None
        self._active_scheduler: Optional[Scheduler] = None
        self._delay = 0.0
        self._passes = 0
        self._run_id = 0

    def _create_components(self) -> None:
        """Create the strategies used by a pass."""
        self.initialization_strategy = UniformBoxInit()
        self.assignment_strategy = HardAssignment()
        self.update_strategy = DampedMeanUpdater(
            self._mins, self.ranges,
            generator=self._generator,
            initializer=self.initialization_strategy
        )

    # Events

    def on(self, name: str, handler: Callable[..., Any]) -> 'ClusteringEngine':
        self.events.on(name, handler)
        return self

    def one(self, name: str, handler: Callable[..., Any]) -> 'ClusteringEngine':
        self.events.one(name, handler)
        return self

    def off(self, name: str, handler: Optional[Callable[..., Any]] = None) -> None:
        self.events.off(name, handler)

    def trigger(self, name: str, *args: Any) -> 'ClusteringEngine':
        self.events.trigger(name, *args)
        return self

    # Pass building blocks

    def seeds(self) -> Tensor:
        """Random centroids drawn uniformly within the data extents."""
        return self.initialization_strategy.initialize(
            self._mins, self.ranges, self.k, generator=self._generator
        )

    def assign_clusters(self) -> Tensor:
        """Index of the nearest centroid for every point."""
        return self.assignment_strategy.compute_assignments(self.data, self.means)

    def move_means(self) -> bool:
        """Relocate centroids towards their cluster means; True if any moved."""
        return self.update_strategy.update(self.data, self.means, self.assignments)

    def snapshot(self) -> EngineState:
        """Copy of the current engine state."""
        return EngineState(
            data=self.data,
            means=self.means.clone(),
            assignments=self.assignments.clone(),
            extents=list(self.extents),
            ranges=self.ranges.clone(),
            iterations=self.iterations,
            k=self.k
        )

    def _advance(self) -> Tuple[bool, EngineState]:
        """Run one pass and emit its event."""
        previous = self.means.clone()

        self.iterations += 1
        self.assignments = self.assign_clusters()
        moved = self.move_means()
        state = self.snapshot()

        if moved:
            if self.verbose >= 2 or (self.verbose >= 1 and self.iterations % 10 == 0):
                shift = (self.means - previous).abs().max().item()
                n_empty = int(self.update_strategy.empty_clusters_.sum())
                print(f"Iteration {self.iterations:3d}: max shift = {shift:.2f}, "
                      f"empty clusters = {n_empty}")
            self.trigger('iteration', state)
        else:
            self.status = EngineStatus.CONVERGED
            if self.verbose:
                print(f"Iterations took for completion: {self.iterations}")
            self.trigger('end', state)

        return moved, state

    def _limit_reached(self, passes: int) -> bool:
        if self.max_iter is None or passes < self.max_iter:
            return False
        warnings.warn(f"Failed to converge after {self.max_iter} iterations")
        self.status = EngineStatus.IDLE
        self.trigger('end', self.snapshot())
        return True

    def _check_not_running(self) -> None:
        if self.status is EngineStatus.RUNNING:
            raise RuntimeError("Engine is already running; wait for 'end' or call stop()")

    # Drivers

    def step(self) -> bool:
        """Run a single pass, emitting ``'iteration'`` or ``'end'``.

        Returns:
            True if the centroids moved
        """
        self._check_not_running()
        if self.status is EngineStatus.CONVERGED:
            self.status = EngineStatus.IDLE
        moved, _ = self._advance()
        return moved

    def run(self, delay: float = 0.0) -> None:
        """Refine until convergence without blocking the event loop.

        The first pass runs immediately; each following pass is scheduled
        ``delay`` seconds after the previous one through the scheduler.

        Args:
            delay: Non-negative pause between passes, in seconds

        Raises:
            RuntimeError: If already running, or if no scheduler was given
                and no asyncio event loop is running
        """
        delay = check_delay(delay)
        self._check_not_running()

        scheduler = self.scheduler
        if scheduler is None:
            try:
                scheduler = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError("run() needs a running asyncio event loop or a "
                                   "scheduler; use fit() for a blocking loop") from e

        self._run_id += 1
        self._active_scheduler = scheduler
        self._delay = delay
        self._passes = 0
        self.status = EngineStatus.RUNNING
        self._run_pass(self._run_id)

    def _run_pass(self, run_id: int) -> None:
        self._timer = None
        try:
            moved, _ = self._advance()
        except Exception:
            # A raising handler ends this run; nothing is pending any more.
            if run_id == self._run_id and self.status is EngineStatus.RUNNING:
                self.status = EngineStatus.IDLE
            raise
        self._passes += 1

        # A handler may have stopped or restarted the engine.
        if not moved or run_id != self._run_id or self.status is not EngineStatus.RUNNING:
            return
        if self._limit_reached(self._passes):
            return

        self._timer = self._active_scheduler.call_later(self._delay, self._run_pass, run_id)

    def stop(self) -> bool:
        """Cancel a scheduled pass and return to idle.

        Returns:
            True if a pending pass was cancelled
        """
        cancelled = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            cancelled = True
        if self.status is EngineStatus.RUNNING:
            self.status = EngineStatus.IDLE
        self._run_id += 1
        return cancelled

    def iterate(self) -> Iterator[EngineState]:
        """Yield one state per pass until convergence.

        The caller decides the pacing. Events are emitted as with :meth:`run`.
        """
        self._check_not_running()
        self.status = EngineStatus.RUNNING
        passes = 0
        try:
            while self.status is EngineStatus.RUNNING:
                moved, state = self._advance()
                passes += 1
                yield state
                if not moved or self._limit_reached(passes):
                    return
        finally:
            if self.status is EngineStatus.RUNNING:
                self.status = EngineStatus.IDLE

    def fit(self, delay: float = 0.0) -> 'ClusteringEngine':
        """Blocking loop until convergence.

        Args:
            delay: Seconds to sleep between passes

        Returns:
            Self
        """
        delay = check_delay(delay)
        for _ in self.iterate():
            if delay and self.status is EngineStatus.RUNNING:
                time.sleep(delay)
        return self

    @property
    def converged(self) -> bool:
        return self.status is EngineStatus.CONVERGED

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'k': self.k,
            'random_state': self.random_state,
            'max_iter': self.max_iter,
            'verbose': self.verbose
        }

    def set_params(self, **params) -> 'ClusteringEngine':
        """Set parameters (sklearn compatibility).

        Changing ``k`` re-seeds the centroids and clears the assignments.
        """
        self._check_not_running()
        valid = self.get_params()
        for key in params:
            if key not in valid:
                raise ValueError(f"Invalid parameter {key!r} for ClusteringEngine")

        if 'k' in params:
            check_n_clusters(params['k'], self.data.shape[0])
        if 'max_iter' in params:
            check_max_iter(params['max_iter'])
        if 'random_state' in params:
            self._generator = check_random_state(params['random_state'])
            self.update_strategy.generator = self._generator

        for key, value in params.items():
            setattr(self, key, value)

        if 'k' in params:
            self.means = self.seeds()
            self.assignments = torch.empty(0, dtype=torch.long, device=self.data.device)
            self.status = EngineStatus.IDLE
        return self

    def __repr__(self) -> str:
        return (f"ClusteringEngine(k={self.k}, n_points={self.data.shape[0]}, "
                f"dimension={self.data.shape[1]}, iterations={self.iterations}, "
                f"status={self.status.value})")
