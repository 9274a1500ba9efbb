from __future__ import annotations

from .models import ClassificationReport


def to_markdown(report: ClassificationReport) -> str:
    lines: list[str] = []
    lines.append("# growthfit report")
    lines.append("")
    lines.append(f"- Generated: `{report.generated_at}`")
    if report.source:
        lines.append(f"- Source: `{report.source}`")
    lines.append(f"- Data points: `{report.data_points}`")
    lines.append(f"- Best fit: `{report.best_label}` ({report.best_score:.6f})")
    lines.append(f"- Schema: `v{report.schema_version}`")
    lines.append("")

    if report.ratings:
        lines.append("## Ratings")
        lines.append("")
        lines.append("| Class | Key | Score | Best |")
        lines.append("|---|---|---:|:---:|")
        for r in report.ratings:
            marker = "*" if r.best else ""
            lines.append(f"| `{r.label}` | {r.key} | {r.score:.6f} | {marker} |")
        lines.append("")
    else:
        lines.append("No ratings.")
        lines.append("")

    if report.errors:
        lines.append("## Failed classes")
        lines.append("")
        for e in report.errors:
            lines.append(f"- `{e.label}`: {e.error}")
        lines.append("")

    return "\n".join(lines)
