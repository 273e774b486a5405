# dashboard/alerts.py
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from dashboard.exceptions import AlertNotFound
from dashboard.filters import ALL, filter_alerts

logger = logging.getLogger(__name__)


Severity = Literal["high", "medium", "low"]
AlertStatus = Literal["unread", "read", "acknowledged"]

ALERT_STATUSES = ("unread", "read", "acknowledged")


class Alert(BaseModel):
    id: int
    patient_name: str
    patient_id: str
    reason: str
    timestamp: datetime
    severity: Severity
    status: AlertStatus = "unread"
    type: Literal["adverse_effect"] = "adverse_effect"


class AlertBoard:
    """
    Adverse-effect alerts for one dashboard session.

    Status only ever moves forward:
      unread -> read
      unread | read -> acknowledged
    Changes are local; nothing is written back to the API.
    """

    def __init__(self, alerts: Optional[List[Alert]] = None):
        self._alerts: List[Alert] = [a.model_copy() for a in (alerts or [])]

    @property
    def alerts(self) -> List[Alert]:
        return list(self._alerts)

    def get(self, alert_id: int) -> Alert:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        raise AlertNotFound(f"Alert {alert_id} not found", detail={"alert_id": alert_id})

    def _replace(self, alert_id: int, status: AlertStatus) -> Alert:
        for i, alert in enumerate(self._alerts):
            if alert.id == alert_id:
                updated = alert.model_copy(update={"status": status})
                self._alerts[i] = updated
                logger.info("Alert %s marked %s", alert_id, status)
                return updated
        raise AlertNotFound(f"Alert {alert_id} not found", detail={"alert_id": alert_id})

    def mark_as_read(self, alert_id: int) -> Alert:
        alert = self.get(alert_id)
        if alert.status != "unread":
            return alert
        return self._replace(alert_id, "read")

    def mark_as_acknowledged(self, alert_id: int) -> Alert:
        alert = self.get(alert_id)
        if alert.status == "acknowledged":
            return alert
        return self._replace(alert_id, "acknowledged")

    def visible(self, search_term: str = "", status: str = ALL) -> List[Alert]:
        return filter_alerts(self._alerts, search_term, status)

    def counts(self) -> Dict[str, int]:
        counts = {"total": len(self._alerts)}
        for status in ALERT_STATUSES:
            counts[status] = sum(1 for a in self._alerts if a.status == status)
        return counts


def format_alert_timestamp(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """Relative age under a day ("12m ago", "3h ago"), otherwise M/D/YYYY."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = (now - timestamp).total_seconds()
    minutes = math.floor(seconds / 60)
    hours = math.floor(seconds / 3600)

    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{timestamp.month}/{timestamp.day}/{timestamp.year}"


# Seed data until the backend exposes an alerts feed
SAMPLE_ALERTS: List[Alert] = [
    Alert(
        id=1,
        patient_name="John Smith",
        patient_id="P001",
        reason="Severe headache and dizziness after taking prescribed medication",
        timestamp=datetime(2024, 6, 4, 10, 30, tzinfo=timezone.utc),
        severity="high",
        status="unread",
    ),
    Alert(
        id=2,
        patient_name="Maria Garcia",
        patient_id="P002",
        reason="Nausea and vomiting 2 hours after medication intake",
        timestamp=datetime(2024, 6, 4, 9, 15, tzinfo=timezone.utc),
        severity="medium",
        status="read",
    ),
    Alert(
        id=3,
        patient_name="David Johnson",
        patient_id="P003",
        reason="Skin rash and itching on arms and chest",
        timestamp=datetime(2024, 6, 4, 8, 45, tzinfo=timezone.utc),
        severity="medium",
        status="unread",
    ),
    Alert(
        id=4,
        patient_name="Sarah Williams",
        patient_id="P004",
        reason="Rapid heartbeat and chest tightness",
        timestamp=datetime(2024, 6, 4, 7, 22, tzinfo=timezone.utc),
        severity="high",
        status="acknowledged",
    ),
    Alert(
        id=5,
        patient_name="Michael Brown",
        patient_id="P005",
        reason="Stomach pain and loss of appetite",
        timestamp=datetime(2024, 6, 3, 16, 30, tzinfo=timezone.utc),
        severity="low",
        status="read",
    ),
]
