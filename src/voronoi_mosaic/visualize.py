import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MplPolygon


def plot_cells(records, ax=None):
    if ax is None:
        fig, ax = plt.subplots()

    for rec in records:
        rgb = tuple(c / 255.0 for c in rec.color)
        edge = (0, 0, 0, 0.3) if rec.stroke_width > 0 else "none"
        ax.add_patch(MplPolygon(rec.polygon, closed=True, facecolor=rgb, edgecolor=edge))

    ax.autoscale_view()
    ax.set_aspect("equal")
    # image coordinates: y grows downwards
    if not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.set_title("Voronoi mosaic")
    return ax


def plot_triangulation(triangulation, ax=None):
    if ax is None:
        fig, ax = plt.subplots()

    for tri in triangulation.triangles:
        xs = [p.x for p in tri.points] + [tri.points[0].x]
        ys = [p.y for p in tri.points] + [tri.points[0].y]
        ax.plot(xs, ys, "-k", linewidth=0.5)

    ax.set_aspect("equal")
    ax.set_title("Delaunay triangulation")
    return ax
