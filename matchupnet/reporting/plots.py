"""Headless-safe rendering of an activation trace."""

from __future__ import annotations

from pathlib import Path

from ..predict import Prediction
from .visuals import edge_contributions, edge_style, layer_colors, layer_labels


def _rgb(color: str) -> tuple[float, float, float]:
    r, g, b = (int(part) for part in color[4:-1].split(","))
    return r / 255.0, g / 255.0, b / 255.0


class TracePlotter:
    """Draw the network with neurons coloured by activation."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def render(self, prediction: Prediction, *, active_layer: int = -1) -> Path | None:
        if not self.enable_plots:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        topology = prediction.topology
        colors = layer_colors(prediction.trace)
        xs = [float(idx) for idx in range(len(topology))]
        ys = [[(i + 1) / (width + 1) for i in range(width)] for width in topology]

        fig, ax = plt.subplots(figsize=(9, 4.2))
        for layer in range(len(topology) - 1):
            strengths = edge_contributions(prediction.parameters, prediction.trace, layer)
            for nxt in range(topology[layer + 1]):
                for prev in range(topology[layer]):
                    style = edge_style(strengths[nxt, prev], active=layer == active_layer)
                    ax.plot(
                        [xs[layer], xs[layer + 1]],
                        [ys[layer][prev], ys[layer + 1][nxt]],
                        color=style.color,
                        linewidth=style.width,
                        alpha=style.opacity,
                        zorder=1,
                    )
        for layer, width in enumerate(topology):
            ax.scatter(
                [xs[layer]] * width,
                ys[layer],
                s=240,
                c=[_rgb(color) for color in colors[layer]],
                edgecolors="#111827",
                zorder=2,
            )
        for x, label in zip(xs, layer_labels(topology)):
            ax.text(x, 1.02, label, ha="center", fontsize=9, color="#374151")
        ax.set_title(f"Predicted winner: {prediction.winner}")
        ax.set_axis_off()
        plot_path = self.run_dir / "trace.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path


__all__ = ["TracePlotter"]
