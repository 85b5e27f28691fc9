import itertools

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Polygon

from geometry import Point


def _axes(ax: Axes | None) -> Axes:
    if ax is None:
        import matplotlib.pyplot as plt
        return plt.gca()
    return ax


def plot_points(points: list[Point], ax: Axes | None = None, **kwargs):
    ax = _axes(ax)
    x = [float(p.x) for p in points]
    y = [float(p.y) for p in points]
    kwargs.setdefault("s", 10)
    kwargs.setdefault("c", "b")
    ax.scatter(x, y, **kwargs)


def plot_hull(hull: list[Point], ax: Axes | None = None, color: str = "r"):
    """
    Draw the hull as a closed polygon. One and two point hulls
    are drawn as a marker and a segment.
    """
    ax = _axes(ax)
    if not hull:
        return

    xs = [float(p.x) for p in hull]
    ys = [float(p.y) for p in hull]
    if len(hull) >= 3:
        ax.add_patch(Polygon(list(zip(xs, ys)), closed=True, fill=True, alpha=0.15, color=color))
        xs.append(xs[0])
        ys.append(ys[0])
    ax.plot(xs, ys, c=color, marker="o")

    anchor = hull[0]
    ax.annotate("anchor", (float(anchor.x), float(anchor.y)))


def plot_scan_steps(steps: list[tuple[Point, ...]], ax: Axes | None = None):
    """
    Overlay the intermediate stacks of the scan, later ones on top.
    """
    ax = _axes(ax)
    clrs = ['g', 'b', 'm', 'c', 'y', 'k']
    color_cycle = itertools.cycle(clrs)

    for i, stack in enumerate(steps):
        clr = next(color_cycle)
        xs = [float(p.x) for p in stack]
        ys = [float(p.y) for p in stack]
        ax.plot(xs, ys, c=clr, alpha=0.2 + 0.8 * (i + 1) / len(steps), linewidth=0.8)


def hull_figure(points: list[Point], hull: list[Point], steps=None) -> Figure:
    fig = Figure(figsize=(8, 8))
    ax = fig.add_subplot(111)

    plot_points(points, ax)
    if steps:
        plot_scan_steps(steps, ax)
    plot_hull(hull, ax)

    ax.set_title(f"Convex hull: {len(hull)} of {len(points)} points")
    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(True, alpha=0.3)
    return fig


def save_hull_figure(points: list[Point], hull: list[Point], filename: str, steps=None):
    fig = hull_figure(points, hull, steps)
    fig.savefig(filename)
    return fig
