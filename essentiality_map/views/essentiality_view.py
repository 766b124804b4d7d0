from __future__ import annotations

import pandas as pd
import plotly.graph_objs as go

from essentiality_map.core.base_view import BaseView
from essentiality_map.core.derived import ESSENTIALITY_THRESHOLD, DerivedView, derive_view
from essentiality_map.core.view_state import ViewState

COLUMNS = [
    "x",
    "y",
    "tissue",
    "cell_line",
    "depmap_id",
    "disease",
    "expression",
    "expression_text",
    "color",
    "border_color",
    "size",
    "border_width",
    "highlighted",
    "matched",
    "pinned",
]

THRESHOLD_COLOR = "rgba(185, 28, 28, 0.5)"
THRESHOLD_LABEL_COLOR = "rgba(185, 28, 28, 1)"

HOVER_TEMPLATE = (
    "Tissue: %{customdata[0]}<br>"
    "Cell Line: %{customdata[1]}<br>"
    "Gene Effect: %{x:.2f}<br>"
    "Disease: %{customdata[2]}<br>"
    "Expression: %{customdata[3]}<br>"
    "DepMap ID: %{customdata[4]}"
    "<extra></extra>"
)


class EssentialityView(BaseView):
    """
    Gene effect / tissue scatter

    - X: gene effect, Y: tissue index (labelled with tissue names)
    - colour, size and border per point from the derived-data filter
    - dashed guide line at the essentiality threshold
    """

    id = "essentiality"
    label = "Gene Effect/Tissues Dependency Chart"

    def compute_data(self, state: ViewState) -> pd.DataFrame:
        return self.frame_from_derived(derive_view(self.dataset.points, state))

    @staticmethod
    def frame_from_derived(derived: DerivedView) -> pd.DataFrame:
        """One row per drawn point, for callers that already hold the DerivedView."""
        rows = []
        for sp in derived.points:
            p = sp.point
            rows.append(
                {
                    "x": p.x,
                    "y": p.y,
                    "tissue": p.tissue,
                    "cell_line": p.cell_line,
                    "depmap_id": p.depmap_id,
                    "disease": p.disease,
                    "expression": p.expression,
                    "expression_text": "N/A" if p.expression is None else f"{p.expression:.2f}",
                    "color": sp.color,
                    "border_color": sp.border_color,
                    # plotly marker size is a diameter
                    "size": sp.radius * 2,
                    "border_width": sp.border_width,
                    "highlighted": sp.highlighted,
                    "matched": sp.matched,
                    "pinned": sp.pinned,
                }
            )

        return pd.DataFrame(rows, columns=COLUMNS)

    def render_figure(self, data: pd.DataFrame, state: ViewState) -> go.Figure:
        tissues = list(self.dataset.tissues)

        if data.empty:
            fig = self.empty_figure(f"{self.label} (no cell lines after filtering)")
            fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
            return fig

        fig = go.Figure(
            go.Scatter(
                x=data["x"],
                y=data["y"],
                mode="markers",
                name="Gene Essentiality",
                marker=dict(
                    color=list(data["color"]),
                    size=list(data["size"]),
                    line=dict(
                        color=list(data["border_color"]),
                        width=list(data["border_width"]),
                    ),
                ),
                customdata=data[
                    ["tissue", "cell_line", "disease", "expression_text", "depmap_id"]
                ].to_numpy(),
                hovertemplate=HOVER_TEMPLATE,
            )
        )

        fig.add_shape(
            type="line",
            x0=ESSENTIALITY_THRESHOLD,
            x1=ESSENTIALITY_THRESHOLD,
            y0=-0.5,
            y1=len(tissues) - 0.5,
            line=dict(color=THRESHOLD_COLOR, width=2, dash="dash"),
        )
        fig.add_annotation(
            x=ESSENTIALITY_THRESHOLD,
            y=-0.5,
            text="Essentiality Threshold",
            showarrow=False,
            yanchor="top",
            font=dict(size=14, color=THRESHOLD_LABEL_COLOR),
        )

        fig.update_xaxes(title_text="Gene Effect", zeroline=False)
        fig.update_yaxes(
            title_text="Tissues",
            tickmode="array",
            tickvals=list(range(len(tissues))),
            ticktext=tissues,
            range=[-0.75, len(tissues) - 0.25],
        )
        fig.update_layout(
            title=self.label,
            showlegend=False,
            clickmode="event",
            hovermode="closest",
            margin=dict(l=40, r=40, t=60, b=40),
        )
        return fig
