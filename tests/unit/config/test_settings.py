"""Settings tests: defaults and list limit bounds."""

import pytest
from pydantic import ValidationError

from sar_api.config.settings import AppSettings


def test_defaults_boot_without_environment():
    s = AppSettings()
    assert s.store_backend == "memory"
    assert s.list_default_limit == 50
    assert s.list_max_limit == 100
    assert s.cors_allow_origins == ["*"]


def test_list_max_limit_cannot_exceed_hundred():
    with pytest.raises(ValidationError):
        AppSettings(list_max_limit=500)


def test_list_max_limit_from_environment(monkeypatch):
    monkeypatch.setenv("SAR_LIST_MAX_LIMIT", "25")
    assert AppSettings().list_max_limit == 25
