from __future__ import annotations

import re

from dashboard_engine.models.chart_config import ChartConfiguration
from dashboard_engine.models.dataset import Dataset
from dashboard_engine.services.orchestrator import DashboardSession
from dashboard_engine.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+rows=([0-9]+)/([0-9]+)\s+columns=([0-9]+)\s+numeric=([0-9]+)\s+"
    r"categorical=([0-9]+)\s+chart=(bar|line|area|pie)\s+points=([0-9]+)$"
)


def test_summary_line_matches_contract_for_every_chart_kind(sales_rows):
    for kind in ["bar", "line", "area", "pie"]:
        session = DashboardSession(Dataset.from_rows("s.csv", sales_rows), chart=ChartConfiguration(kind=kind))
        line = render_summary_line(session.view())
        m = SUMMARY_PATTERN.match(line)
        assert m, f"SUMMARY line should match regex: {line}"
        assert m.group(6) == kind
        assert int(m.group(1)) <= int(m.group(2))
