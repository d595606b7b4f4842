# rx_companion/api/deps.py
from rx_companion.services.dose_tracker import DoseTracker
from rx_companion.services.guardian_store import GuardianStore
from rx_companion.services.medicine_store import MedicineStore

# process-wide in-memory state; nothing is persisted
_medicines = MedicineStore()
_guardians = GuardianStore()
_doses = DoseTracker()

def get_medicine_store() -> MedicineStore:
    return _medicines

def get_guardian_store() -> GuardianStore:
    return _guardians

def get_dose_tracker() -> DoseTracker:
    return _doses
