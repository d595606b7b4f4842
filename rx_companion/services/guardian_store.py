import uuid
from typing import Dict, List

from rx_companion.schemas.models import Guardian, GuardianCreate, NotificationKind

SEED_GUARDIANS = [
    GuardianCreate(
        name="김민수",
        relationship="아들",
        phone="010-1234-5678",
        email="minsu@example.com",
        notify_medicine=True,
        notify_appointment=True,
        notify_days_before=3,
    ),
    GuardianCreate(
        name="김지현",
        relationship="딸",
        phone="010-9876-5432",
        email="jihyun@example.com",
        notify_medicine=False,
        notify_appointment=True,
        notify_days_before=5,
    ),
]

def _guardian_id() -> str:
    return "grd_" + uuid.uuid4().hex[:10]

class GuardianStore:
    def __init__(self, seed: bool = True):
        self._items: Dict[str, Guardian] = {}
        if seed:
            for g in SEED_GUARDIANS:
                self.add(g)

    def list(self) -> List[Guardian]:
        return list(self._items.values())

    def get(self, guardian_id: str) -> Guardian:
        return self._items[guardian_id]

    def add(self, data: GuardianCreate) -> Guardian:
        g = Guardian(id=_guardian_id(), **data.model_dump())
        self._items[g.id] = g
        return g

    def delete(self, guardian_id: str) -> None:
        del self._items[guardian_id]

    def toggle(self, guardian_id: str, kind: NotificationKind) -> Guardian:
        g = self._items[guardian_id]
        field = "notify_medicine" if kind == "medicine" else "notify_appointment"
        updated = g.model_copy(update={field: not getattr(g, field)})
        self._items[guardian_id] = updated
        return updated

    def recipients_for(self, kind: NotificationKind) -> List[Guardian]:
        field = "notify_medicine" if kind == "medicine" else "notify_appointment"
        return [g for g in self._items.values() if getattr(g, field)]
