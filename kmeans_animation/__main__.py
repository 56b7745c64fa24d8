"""
Run the animated k-means demo.

    python -m kmeans_animation                 # interactive window
    python -m kmeans_animation --headless --save final.png
"""

import argparse
import logging

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .config import SimulationConfig, ConfigurationError
from .rendering import MatplotlibRenderer
from .simulation import Simulation


def build_parser():
    defaults = SimulationConfig()
    p = argparse.ArgumentParser(prog='kmeans_animation',
                                description='Watch k-means converge, one frame at a time.')
    p.add_argument('--canvas-extent', type=float, default=defaults.canvas_extent)
    p.add_argument('--point-count', type=int, default=defaults.point_count)
    p.add_argument('--point-radius', type=float, default=defaults.point_radius)
    p.add_argument('--centroid-radius', type=float, default=None,
                   help='default: 8x point radius')
    p.add_argument('--batch-size', type=int, default=None,
                   help='points assigned per frame (default: point count / 30)')
    p.add_argument('-k', type=int, default=defaults.k)
    p.add_argument('--smoothing', type=float, default=defaults.smoothing)
    p.add_argument('--snap-threshold', type=float, default=defaults.snap_threshold)
    p.add_argument('--max-placement-retries', type=int, default=defaults.max_placement_retries)
    p.add_argument('--seed', type=int, default=None)
    p.add_argument('--interval', type=int, default=16, help='milliseconds per frame')
    p.add_argument('--headless', action='store_true',
                   help='run to convergence without opening a window')
    p.add_argument('--save', default=None, help='save the final frame to this path')
    p.add_argument('--log-level', default='INFO')
    return p


def config_from_args(args):
    return SimulationConfig(
        canvas_extent=args.canvas_extent,
        point_count=args.point_count,
        point_radius=args.point_radius,
        centroid_radius=args.centroid_radius,
        batch_size=args.batch_size,
        k=args.k,
        smoothing=args.smoothing,
        snap_threshold=args.snap_threshold,
        max_placement_retries=args.max_placement_retries,
    )


def make_figure(config):
    fig, ax = plt.subplots(figsize=(7.2, 7.2))
    fig.patch.set_facecolor('black')
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
    return fig, MatplotlibRenderer(ax, config.canvas_extent)


def run_headless(sim, save_path=None):
    """Tick to convergence without a renderer, then report like the scripts do."""
    n_ticks = sim.run_until_final()
    ctx = sim.context
    print(f"Converged in {ctx.passes} passes ({n_ticks} ticks)")
    print("Inertia per pass: " + ", ".join(f"{v:.0f}" for v in ctx.history))
    for idx, cluster in enumerate(ctx.clusters):
        c = sim.centroids[idx]
        print(f"  cluster {idx}: {len(cluster):>5} points  centroid=({c.x:.1f}, {c.y:.1f})")
    if save_path:
        fig, renderer = make_figure(sim.config)
        sim.render(renderer)
        fig.savefig(save_path, dpi=100, facecolor=fig.get_facecolor())
        plt.close(fig)
        print(f"Saved: {save_path}")


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        raise SystemExit(f"invalid configuration: {e}")

    print("=" * 60)
    print(f"ANIMATED K-MEANS  (k={config.k}, n={config.point_count}, "
          f"{config.batch_size} points/frame)")
    print("=" * 60)

    if args.headless:
        run_headless(Simulation(config, random_state=args.seed), args.save)
        return 0

    fig, renderer = make_figure(config)
    sim = Simulation(config, renderer=renderer, random_state=args.seed)

    def on_click(event):
        sim.request_reset()

    def update(_frame):
        sim.tick()
        return renderer.artists

    fig.canvas.mpl_connect('button_press_event', on_click)
    # Holding the reference keeps the animation alive while the window is open
    anim = FuncAnimation(fig, update, interval=args.interval,
                         cache_frame_data=False, blit=False)
    plt.show()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
