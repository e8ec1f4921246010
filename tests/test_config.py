from missionpicker.config import get_diagnostics
from missionpicker.services.catalogue import DAILY_POOL, WEEKLY_POOL


def test_diagnostics_report_pool_sizes():
    diag = get_diagnostics()
    assert diag["Daily missions"] == len(DAILY_POOL)
    assert diag["Weekly missions"] == len(WEEKLY_POOL)
    assert diag["Log level"]
