"""
JSON export for BulkPTR
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from ..models import BatchSummary, Nameserver, ResolutionOutcome
from .. import __version__


class JsonExporter:
    """
    Export resolution outcomes to JSON.

    Results are written in address order so two runs over the same
    input diff cleanly.
    """

    def __init__(self, nameservers: Iterable[Nameserver] = (), transport: str = "tcp"):
        self.nameservers = [str(ns) for ns in nameservers]
        self.transport = transport

    def export(self, outcomes: Iterable[ResolutionOutcome], summary: BatchSummary,
               output_path: Optional[Path] = None) -> dict:
        """
        Export outcomes to JSON.

        Args:
            outcomes: Resolution outcomes
            summary: Batch counters
            output_path: Optional file path to write

        Returns:
            JSON-serializable dict
        """
        ordered = sort_outcomes(outcomes)
        data = {
            "meta": {
                "version": __version__,
                "generator": "BulkPTR",
                "nameservers": self.nameservers,
                "transport": self.transport,
                "generated_at": datetime.now().isoformat(),
            },
            "results": [self._serialize_outcome(o) for o in ordered],
            "summary": {
                "total": summary.total,
                "resolved": summary.resolved,
                "no_answer": summary.no_answer,
                "errors": summary.errors,
                "errors_by_kind": summary.errors_by_kind,
                "elapsed_s": round(summary.elapsed, 3) if summary.elapsed is not None else None,
            },
        }

        if output_path:
            self._write_file(data, output_path)

        return data

    def _serialize_outcome(self, outcome: ResolutionOutcome) -> dict:
        """Serialize a single outcome"""
        return {
            "address": str(outcome.address) if outcome.address is not None else None,
            "query": outcome.query,
            "nameserver": str(outcome.nameserver) if outcome.nameserver else None,
            "status": outcome.status.value,
            "hostname": outcome.hostname,
            "cname_chain": list(outcome.cname_chain),
            "error": outcome.error,
            "error_kind": outcome.error_kind.value if outcome.error_kind else None,
        }

    def _write_file(self, data: dict, path: Path):
        """Write JSON to file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


def sort_outcomes(outcomes: Iterable[ResolutionOutcome]) -> list[ResolutionOutcome]:
    """Order outcomes by IP version, then numerically by address"""
    def key(outcome: ResolutionOutcome):
        if outcome.address is None:
            return (0, 0, outcome.query)
        return (outcome.address.version, int(outcome.address), outcome.query)

    return sorted(outcomes, key=key)
