"""Side-by-side figure of every stage of a share run."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .pipeline import ShareResult  # noqa: E402

PANEL_TITLES = {
    "shrunk": "Input",
    "binary": "Binary",
    "share_a": "Share A",
    "share_b": "Share B",
    "overlay": "A + B stacked",
}


def render_figure(result: ShareResult, out_path: str | Path, dpi: int = 150) -> Path:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    rasters = result.rasters()
    fig, axes = plt.subplots(1, len(PANEL_TITLES), figsize=(3.2 * len(PANEL_TITLES), 3.6))
    for ax, (key, title) in zip(axes, PANEL_TITLES.items()):
        # nearest keeps each sub-pixel crisp
        ax.imshow(rasters[key].data, interpolation="nearest")
        ax.set_title(title)
        ax.axis("off")
    fig.tight_layout()
    fig.savefig(out, dpi=dpi)
    plt.close(fig)
    return out


__all__ = ["PANEL_TITLES", "render_figure"]
