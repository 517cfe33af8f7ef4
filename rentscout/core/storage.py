from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path

from rentscout.core.models import ResultPage


_CONFIG_NUMBER_RE = re.compile(r"config(\d+)", re.IGNORECASE)


def file_timestamp(now: datetime | None = None) -> str:
    current = now or datetime.now(timezone.utc)
    return current.strftime("%Y-%m-%dT%H-%M-%S-") + f"{current.microsecond // 1000:03d}Z"


def extract_config_number(file_name: str) -> int | None:
    """
    "1_config2_2025-10-26T02-01-10-664Z.json" -> 2
    """
    match = _CONFIG_NUMBER_RE.search(file_name)
    return int(match.group(1)) if match else None


class JsonRecordStore:
    """Raw result pages kept as one JSON file per search unit."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def save_page(self, page: ResultPage, name: str, now: datetime | None = None) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{name}_{file_timestamp(now)}.json"
        path.write_text(json.dumps(page.to_payload(), indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    def list_artifacts(self) -> list[Path]:
        if not self.output_dir.is_dir():
            return []
        return sorted(
            path for path in self.output_dir.iterdir()
            if path.is_file() and path.suffix == ".json" and not path.name.startswith(".")
        )

    def read_artifact(self, path: Path) -> tuple[int | None, ResultPage]:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return extract_config_number(Path(path).name), ResultPage.from_payload(payload)


class CsvReportSink:
    def __init__(self, analyzed_dir: Path) -> None:
        self.analyzed_dir = Path(analyzed_dir)

    def write(self, csv_text: str, now: datetime | None = None) -> Path:
        self.analyzed_dir.mkdir(parents=True, exist_ok=True)
        path = self.analyzed_dir / f"analyzed_{file_timestamp(now)}.csv"
        path.write_text(csv_text, encoding="utf-8")
        return path
