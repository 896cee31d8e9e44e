"""
core/resources/billing.py - 이번 달 서비스별 비용 (Cost Explorer)

첫 두 행은 합계와 구분선이며, 서비스 행은 그 다음부터 시작합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

from .base import NO_ID, Column, Resource, Row
from .helpers import api_call

if TYPE_CHECKING:
    from core.client import AWSClient

# 이 금액 이하의 서비스는 표시하지 않음
MIN_AMOUNT = 0.001

BAR_WIDTH = 30

# 합계 + 구분선
HEADER_ROWS = 2


@dataclass
class BillingEntry:
    service: str
    amount: float
    currency: str
    percentage: float = 0.0


@dataclass
class BillingSummary:
    period_start: str = ""
    period_end: str = ""
    total: float = 0.0
    currency: str = ""
    entries: list[BillingEntry] = field(default_factory=list)


def month_period(today: date) -> tuple[str, str]:
    """이번 달 1일 ~ 다음 달 1일 (Cost Explorer End는 exclusive)"""
    start = today.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start.isoformat(), end.isoformat()


def render_bar(percentage: float, width: int = BAR_WIDTH) -> str:
    """비율 막대 (0보다 크면 최소 한 칸)"""
    filled = int(percentage / 100 * width)
    if filled < 1 and percentage > 0:
        filled = 1
    filled = min(filled, width)
    return "█" * filled + "░" * (width - filled)


class Billing(Resource[BillingEntry]):
    key = "billing"
    name = "Billing (Current Month)"
    COLUMNS = (
        Column("Service", 40),
        Column("Cost", 15),
        Column("%", 8),
        Column("Distribution", 30),
    )

    def __init__(self, today: date | None = None) -> None:
        super().__init__()
        self._today = today
        self._summary = BillingSummary()

    def _collect(self, client: AWSClient) -> list[BillingEntry]:
        # fetch()의 lock 안에서 호출되며, 조회가 모두 성공한 뒤에만 요약을 교체
        summary = self._summarize(client)
        self._summary = summary
        return summary.entries

    def _summarize(self, client: AWSClient) -> BillingSummary:
        start, end = month_period(self._today or datetime.now(timezone.utc).date())
        summary = BillingSummary(period_start=start, period_end=end)
        for result in self._results_by_time(client, start, end):
            for group in result.get("Groups", []):
                cost = group.get("Metrics", {}).get("UnblendedCost")
                if not cost:
                    continue
                try:
                    amount = float(cost.get("Amount", "0"))
                except ValueError:
                    amount = 0.0
                if amount <= MIN_AMOUNT:
                    continue
                keys = group.get("Keys") or [""]
                currency = cost.get("Unit", "")
                summary.entries.append(BillingEntry(service=keys[0], amount=amount, currency=currency))
                summary.total += amount
                summary.currency = currency

        summary.entries.sort(key=lambda e: e.amount, reverse=True)
        if summary.total > 0:
            for entry in summary.entries:
                entry.percentage = entry.amount / summary.total * 100
        return summary

    def _results_by_time(self, client: AWSClient, start: str, end: str) -> list[dict]:
        """NextPageToken이 없을 때까지 모든 페이지의 ResultsByTime"""
        ce = client.service("ce")
        request: dict = {
            "TimePeriod": {"Start": start, "End": end},
            "Granularity": "MONTHLY",
            "Metrics": ["UnblendedCost"],
            "GroupBy": [{"Type": "DIMENSION", "Key": "SERVICE"}],
        }
        results: list[dict] = []
        with api_call("ce", "get_cost_and_usage"):
            while True:
                resp = ce.get_cost_and_usage(**request)
                results.extend(resp.get("ResultsByTime", []))
                token = resp.get("NextPageToken")
                if not token:
                    return results
                request["NextPageToken"] = token

    def rows(self) -> list[Row]:
        s = self._summary
        rows: list[Row] = [
            (
                f"📊 TOTAL ({s.period_start} to {s.period_end})",
                f"{s.total:.2f} {s.currency}",
                "100%",
                "█" * BAR_WIDTH,
            ),
            tuple("─" * col.width for col in self.COLUMNS),
        ]
        rows.extend(self._row(entry) for entry in s.entries)
        return rows

    def get_id(self, index: int) -> str:
        entries = self._summary.entries
        actual = index - HEADER_ROWS
        if 0 <= actual < len(entries):
            return entries[actual].service
        return NO_ID

    def _row(self, item: BillingEntry) -> tuple:
        return (
            item.service,
            f"{item.amount:.2f} {item.currency}",
            f"{item.percentage:.1f}%",
            render_bar(item.percentage),
        )

    def _item_id(self, item: BillingEntry) -> str:
        return item.service
