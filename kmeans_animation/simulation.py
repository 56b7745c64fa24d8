"""
The simulation state machine.

    CLUSTERING ──(worklist empty, moved)──▶ REPOSITIONING
        ▲  │                                     │
        │  └──(worklist empty, converged)──▶ FINAL
        └────────(all centroids at target)───────┘
                                   FINAL ──(reset)──▶ CLUSTERING

One call to tick() does one bounded step of work: a batch of
assignments, or one interpolation step. Whoever owns the frame clock
decides how often to call it.
"""

import logging

from .config import SimulationConfig
from .clustering import SimulationContext, SimulationState, advance_clustering
from .datasets import generate_run
from .reposition import advance_reposition

logger = logging.getLogger(__name__)

FINAL_MESSAGE = "All done! Click to re-run"


class Simulation:
    """
    Owns one k-means run and steps it forward on demand.

    Parameters:
    -----------
    config : SimulationConfig (defaults used if None)
    renderer : RenderAdapter called after every tick, or None
    generator : callable(config, random_state) -> (points, centroids)
    random_state : seed of the first run; run i uses random_state + i,
                   so every run differs but the sequence is reproducible
    """

    def __init__(self, config=None, renderer=None, generator=generate_run,
                 random_state=None):
        self.config = (config or SimulationConfig()).validate()
        self.renderer = renderer
        self.generator = generator
        self.random_state = random_state
        self.runs = 0
        self.ticks = 0
        self._reset_requested = False
        self.context = None
        self._start_run()

    def _start_run(self):
        seed = None if self.random_state is None else self.random_state + self.runs
        points, centroids = self.generator(self.config, seed)
        self.context = SimulationContext(points=points, centroids=centroids)
        self.runs += 1
        self._reset_requested = False
        logger.info("Run %d: %d points, k=%d", self.runs, len(points), len(centroids))

    @property
    def state(self):
        return self.context.state

    @property
    def points(self):
        return self.context.points

    @property
    def centroids(self):
        return self.context.centroids

    @property
    def clusters(self):
        return self.context.clusters

    @property
    def worklist(self):
        return self.context.worklist

    @property
    def is_final(self):
        return self.context.state is SimulationState.FINAL

    def request_reset(self):
        """
        Ask for a fresh run. Only honoured once the current run is final;
        the new run is built at the start of the next tick.
        """
        if not self.is_final:
            logger.debug("Reset ignored in state %s", self.state.name)
            return False
        self._reset_requested = True
        return True

    def tick(self):
        """Advance the simulation by one step, then render. Returns the state."""
        self.ticks += 1
        ctx = self.context

        if self._reset_requested:
            self._start_run()
        elif ctx.state is SimulationState.CLUSTERING:
            advance_clustering(ctx, self.config.batch_size)
        elif ctx.state is SimulationState.REPOSITIONING:
            advance_reposition(ctx, self.config.smoothing, self.config.snap_threshold)

        if self.renderer is not None:
            self.render(self.renderer)
        return self.state

    def render(self, renderer):
        """Describe the current frame to `renderer`. Never mutates the run."""
        ctx = self.context
        renderer.begin_frame()
        if ctx.state is not SimulationState.FINAL:
            for centroid, cluster in zip(ctx.centroids, ctx.clusters):
                for point in cluster:
                    renderer.draw_line(centroid, point)
            for centroid in ctx.centroids:
                renderer.draw_centroid(centroid)
        for point in ctx.points:
            renderer.draw_point(point)
        if ctx.state is SimulationState.FINAL:
            renderer.draw_overlay_text(FINAL_MESSAGE)
        renderer.end_frame()

    def run_until_final(self, max_ticks=100000):
        """Tick until the run converges. Returns the number of ticks taken."""
        for n in range(1, max_ticks + 1):
            if self.tick() is SimulationState.FINAL:
                return n
        raise RuntimeError(f"run did not converge within {max_ticks} ticks")
