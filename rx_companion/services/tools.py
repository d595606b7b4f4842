from typing import Any, Dict, List

from rx_companion.schemas.models import Appointment, Guardian, NotificationKind, ToolResult
from rx_companion.services.guardian_store import GuardianStore

def mock_send_alert(guardian: Guardian, kind: NotificationKind, payload: Dict[str, Any]) -> ToolResult:
    return ToolResult(ok=True, mock=True, details={
        "sent": True,
        "guardian_id": guardian.id,
        "channel": "sms" if guardian.phone else "email",
        "kind": kind,
        **payload,
    })

def notify_guardians(store: GuardianStore, kind: NotificationKind, payload: Dict[str, Any]) -> List[ToolResult]:
    """Fan a notification out to every guardian subscribed to `kind` (mock delivery)."""
    return [mock_send_alert(g, kind, payload) for g in store.recipients_for(kind)]

def appointment_alerts(store: GuardianStore, appointments: List[Appointment]) -> List[ToolResult]:
    """Alert each guardian about appointments inside their notify_days_before window."""
    results: List[ToolResult] = []
    for g in store.recipients_for("appointment"):
        for a in appointments:
            if a.days_left is None or not 0 <= a.days_left <= g.notify_days_before:
                continue
            results.append(mock_send_alert(g, "appointment", {
                "appointment_id": a.id,
                "hospital": a.hospital,
                "date": a.date,
                "days_left": a.days_left,
            }))
    return results
