"""
ASCII plotting for max-weight progress.

Creates a terminal-friendly line chart of the heaviest set per day for one
exercise. The x-axis is proportional to calendar days, so gaps between
sessions show as gaps in the chart.
"""

from datetime import datetime

from .models import SeriesPoint


def _fmt_weight(value: float) -> str:
    return f"{value:g}" if value < 10000 else f"{value:.0f}"


def create_max_weight_plot(
    series: list[SeriesPoint],
    width: int = 60,
    height: int = 16,
    exercise_name: str = "",
) -> str:
    """
    Create an ASCII plot of max weight over time.

    The y-axis starts at zero.

    Args:
        series: Date-ordered points from ProgressLog.series_for
        width: Plot width in characters including the y-axis labels
        height: Plot height in lines including title and x-axis
        exercise_name: Display name shown in the chart title

    Returns:
        ASCII art string
    """
    if not series:
        return "No sets logged for this exercise yet."

    points = [(datetime.strptime(p.date, "%Y-%m-%d"), p.max_weight) for p in series]
    points.sort(key=lambda x: x[0])

    min_date = points[0][0]
    max_date = points[-1][0]
    date_range = (max_date - min_date).days or 1

    y_min = 0.0
    y_max = max(v for _, v in points)
    y_max = y_max * 1.1 if y_max > 0 else 1.0
    y_range = y_max - y_min

    label_width = 7  # "  120 ┤"
    plot_width = max(10, width - label_width)
    plot_height = max(3, height - 3)

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    plot_points: list[tuple[int, int, float]] = []  # (x, y, weight)
    for date, weight in points:
        days_from_start = (date - min_date).days
        x = int((days_from_start / date_range) * (plot_width - 1))
        y = int(((weight - y_min) / y_range) * (plot_height - 1))
        y = plot_height - 1 - y  # Flip y-axis
        plot_points.append((x, y, weight))

    def _put(x: int, r: int, ch: str) -> None:
        if 0 <= x < plot_width and 0 <= r < plot_height and grid[r][x] == " ":
            grid[r][x] = ch

    # Draw connecting lines (staircase style: ╭─╯)
    for i in range(len(plot_points) - 1):
        col1, row1, _ = plot_points[i]
        col2, row2, _ = plot_points[i + 1]

        n_rows = abs(row2 - row1)
        if n_rows == 0:
            for x in range(col1 + 1, col2):
                _put(x, row1, "─")
            continue

        if col1 == col2:
            for r in range(min(row1, row2) + 1, max(row1, row2)):
                _put(col1, r, "│")
            continue

        row_dir = -1 if row2 < row1 else 1  # -1 = going up (heavier)
        up = row_dir == -1
        corner_exit = "╯" if up else "╮"
        corner_entry = "╭" if up else "╰"

        n_segs = n_rows + 1
        for step in range(n_segs):
            row = row1 + row_dir * step
            pivot_in = col1 + (col2 - col1) * step // n_segs
            pivot_out = col1 + (col2 - col1) * (step + 1) // n_segs

            if step == 0:
                for x in range(col1 + 1, pivot_out):
                    _put(x, row, "─")
                _put(pivot_out, row, corner_exit)
            elif step == n_segs - 1:
                _put(pivot_in, row, corner_entry)
                for x in range(pivot_in + 1, col2):
                    _put(x, row, "─")
            else:
                _put(pivot_in, row, corner_entry)
                for x in range(pivot_in + 1, pivot_out):
                    _put(x, row, "─")
                _put(pivot_out, row, corner_exit)

    for x, y, _ in plot_points:
        grid[y][x] = "●"

    lines = []
    title = "Max Weight Lifted"
    lines.append(f"{title} for {exercise_name}" if exercise_name else title)
    lines.append("─" * (plot_width + label_width))

    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range
        label = f"{y_val:5.0f} ┤"
        row_list = list(row)

        # Value labels beside data points, right side when they fit, else left
        for x, py, weight in plot_points:
            if py != i:
                continue
            text = f"({_fmt_weight(weight)})"
            pos = x + 2 if x + 2 + len(text) < plot_width else x - len(text) - 1
            if pos < 0:
                continue
            for j, c in enumerate(text):
                if row_list[pos + j] == " ":
                    row_list[pos + j] = c

        lines.append(label + "".join(row_list))

    lines.append("─" * (plot_width + label_width))

    label_line = [" "] * plot_width
    mid_date = min_date + (max_date - min_date) / 2
    dates_to_show = [(0, min_date)]
    if max_date != min_date:
        dates_to_show += [(plot_width // 2 - 3, mid_date), (plot_width - 6, max_date)]
    for x_pos, date in dates_to_show:
        for j, c in enumerate(date.strftime("%b %d")):
            if 0 <= x_pos + j < plot_width:
                label_line[x_pos + j] = c
    lines.append(" " * label_width + "".join(label_line))

    return "\n".join(lines)
