import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.collections import LineCollection
import pytest

from stepmeans import ClusteringEngine
from stepmeans.visualization import plot_state, animate, default_colors
from data_gen import SMALL_2D


def _line_collections(ax):
    return [c for c in ax.collections if isinstance(c, LineCollection)]


def test_plot_before_first_pass_has_no_assignment_lines():
    engine = ClusteringEngine(data=SMALL_2D, k=3, random_state=0)

    ax = plot_state(engine.snapshot())

    assert _line_collections(ax) == []
    assert len(ax.collections) == 2
    assert ax.get_title() == "Iteration 0"


def test_plot_after_fit_draws_one_line_per_point():
    engine = ClusteringEngine(data=SMALL_2D, k=3, random_state=0, max_iter=5000)
    engine.fit()
    fig, ax = plt.subplots()

    returned = plot_state(engine.snapshot(), colors=["red", "green", "blue"], ax=ax,
                          title="done")

    assert returned is ax
    lines = _line_collections(ax)
    assert len(lines) == 1
    assert len(lines[0].get_segments()) == 10
    assert ax.get_title() == "done"
    assert ax.get_xlim() == (3.0, 11.0)


def test_plot_needs_two_dimensions():
    engine = ClusteringEngine(data=[[1], [2], [3]], k=1)
    with pytest.raises(ValueError):
        plot_state(engine.snapshot())


def test_default_colors_length():
    assert len(default_colors(3)) == 3
    assert len(default_colors(15)) == 15


def test_animate_draws_one_frame_per_pass(tmp_path):
    engine = ClusteringEngine(data=SMALL_2D, k=3, random_state=0, max_iter=5000)
    fig, ax = plt.subplots()

    anim = animate(engine, colors=["red", "green", "blue"], interval=5, ax=ax)
    assert isinstance(anim, FuncAnimation)
    assert engine.iterations == 0

    anim.save(tmp_path / "kmeans.gif", writer=PillowWriter(fps=10))

    assert engine.iterations > 0
    assert ax.get_title() == f"Iteration {engine.iterations}"
    assert len(_line_collections(ax)) == 1
