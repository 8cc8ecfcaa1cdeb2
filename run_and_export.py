# run_and_export.py
import os
from typing import List, Optional, Tuple

import numpy as np
import plotly.graph_objects as go
from plotly.io import write_html

from maze_generator import CellState
from maze_runner import build_maze_and_run


def grid_to_text(grid: np.ndarray,
                 path: Optional[List[Tuple[int, int]]] = None,
                 wall: str = "#",
                 floor: str = " ",
                 mark: str = ".") -> str:
    """Plain-text maze, one line per row. Cells on `path` ((x, y) tuples) are drawn with `mark`."""
    g = np.asarray(grid)
    on_path = set(path or [])
    lines = []
    for y in range(g.shape[0]):
        row = []
        for x in range(g.shape[1]):
            if (x, y) in on_path:
                row.append(mark)
            elif g[y, x] == CellState.WALL:
                row.append(wall)
            else:
                row.append(floor)
        lines.append("".join(row))
    return "\n".join(lines)


def make_figure(grid, start, end, results) -> go.Figure:
    open_cells = (np.asarray(grid) != CellState.WALL).astype(np.int8)
    fig = go.Figure()

    # Walls black, open cells white
    fig.add_trace(go.Heatmap(
        z=open_cells,
        colorscale=[[0, "black"], [1, "white"]],
        zmin=0, zmax=1,
        showscale=False,
        hoverinfo="skip",
        name="maze"
    ))

    # Paths (one per algorithm)
    for algo, res in results.items():
        coords = res.get("path", [])
        if coords:
            px, py = zip(*coords)
        else:
            px, py = [], []
        fig.add_trace(go.Scatter(
            x=px, y=py, mode="lines",
            line=dict(width=4),
            name=f"path • {algo}"
        ))

    # Start/End
    fig.add_trace(go.Scatter(
        x=[start[0]], y=[start[1]],
        mode="markers+text", text=["start"], textposition="top center",
        marker=dict(size=10, symbol="circle"), name="start"
    ))
    fig.add_trace(go.Scatter(
        x=[end[0]], y=[end[1]],
        mode="markers+text", text=["end"], textposition="bottom center",
        marker=dict(size=10, symbol="x"), name="end"
    ))

    fig.update_layout(
        title="Wilson's Maze • Solution Paths",
        xaxis=dict(visible=False, constrain="domain"),
        yaxis=dict(visible=False, autorange="reversed", scaleanchor="x"),
        plot_bgcolor="white",
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    return fig


def _make_html(grid, start, end, results, outfile: str, auto_open: bool = False) -> str:
    fig = make_figure(grid, start, end, results)
    write_html(fig, file=outfile, auto_open=auto_open, include_plotlyjs="cdn")
    return outfile


def run_and_export(height: int,
                   width: int,
                   seed: Optional[int] = None,
                   tag: Optional[str] = None,
                   auto_open_html: bool = False,
                   out_dir: str = ".") -> Tuple[dict, str]:
    """
    Builds and solves one maze, exports one HTML view of it.
    Returns (run_output, html_path).
    """
    out = build_maze_and_run(height=height, width=width, seed=seed)

    tag = tag or f"{out['height']}x{out['width']}_s{seed if seed is not None else 'rand'}"
    html_name = os.path.join(out_dir, f"maze_visual_{tag}.html")
    html_path = _make_html(out["grid"], out["start"], out["end"], out["results"], html_name, auto_open=auto_open_html)
    print(f"Saved HTML: {html_path}")

    # brief stdout summary
    print(f"Maze: {out['height']}x{out['width']}  generated in {out['generation_time']:.4f}s  "
          f"Start: {out['start']}  End: {out['end']}")
    for algo, res in out["results"].items():
        ops = res["operations"] if res["operations"] is not None else "-"
        print(f"{algo:13s} | success={res['success']}  time={res['execution_time']:.4f}s  "
              f"ops={ops}  len={res['path_length']}  eff={res['path_efficiency']:.3f}")

    return out, html_path
