"""CSV export helpers for exposure tables."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from rosterlink.models import ExposureRow


EXPOSURE_HEADERS = ("pid", "name", "pos", "nfl", "count", "exposure")


def export_exposure_to_csv(rows: Sequence[ExposureRow], *, precision: int = 4) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPOSURE_HEADERS)
    for row in rows:
        writer.writerow(
            [row.pid, row.name, row.pos, row.nfl, row.count, f"{row.exposure:.{precision}f}"]
        )
    return buffer.getvalue()


__all__ = ["EXPOSURE_HEADERS", "export_exposure_to_csv"]
