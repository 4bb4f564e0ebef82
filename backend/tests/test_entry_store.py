import pytest

from fitgoals.db import SessionLocal
from fitgoals.services.entry_store import SqlEntryStore
from fitgoals.services.records import MetricKind


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 0, -3.1, 10000, 9999.999])
@pytest.mark.parametrize("kind", [MetricKind.weight, MetricKind.run])
def test_append_entry_rejects_unstorable_measurements(kind, value):
    store = SqlEntryStore(SessionLocal, tz_name="UTC")
    with pytest.raises(ValueError):
        store.append_entry(1, kind, value, "2025-01-01")
