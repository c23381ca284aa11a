import csv
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, List

from .models import OutcomeStatus, RenameOutcome


class ReportGenerator:
    def __init__(self, outcomes: List[RenameOutcome]):
        self.outcomes = outcomes

    def summary(self) -> Dict[str, int]:
        """Count of outcomes per status, every status present."""
        counts = Counter(o.status for o in self.outcomes)
        return {status.value: counts.get(status, 0) for status in OutcomeStatus}

    def log_summary(self):
        counts = self.summary()
        logging.info(
            "Done. {renamed} renamed, {exists} existing, {unchanged} unchanged, {error} errors.".format(**counts)
        )

    def write_csv(self, output_csv: Path):
        """
        Writes one row per processed file, so a run can be audited
        without re-running it.
        """
        headers = ["Source", "Status", "Destination", "Dry Run", "Reason"]

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for o in self.outcomes:
                writer.writerow([
                    o.source.name,
                    o.status.value,
                    o.destination.name if o.destination else "",
                    "yes" if o.dry_run else "no",
                    o.reason or "",
                ])

        logging.info(f"Report written to {output_csv} ({len(self.outcomes)} files).")
