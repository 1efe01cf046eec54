"""Tests for source registry."""

import pytest

from platecheck.sources.base import BaseSource
from platecheck.sources.dvla import DVLASource
from platecheck.sources.iom import IsleOfManSource
from platecheck.sources.registry import get_source, list_sources


class TestGetSource:
    def test_dvla(self):
        assert get_source("dvla") is DVLASource

    def test_case_insensitive(self):
        assert get_source("GOV.IM") is IsleOfManSource

    def test_unknown_source(self):
        with pytest.raises(ValueError) as exc_info:
            get_source("nope")
        assert "nope" in str(exc_info.value)
        assert "dvla" in str(exc_info.value)  # Should list available


class TestListSources:
    def test_sorted(self):
        names = list_sources()
        assert names == sorted(names)

    def test_contains_every_source(self):
        assert set(list_sources()) == {
            "dvla",
            "dvsa-mot",
            "mock-dvla",
            "mock-mot",
            "totalcarcheck.co.uk",
            "gov.im",
            "mib",
        }

    def test_all_subclass_base(self):
        for name in list_sources():
            source_cls = get_source(name)
            assert issubclass(source_cls, BaseSource)
            assert source_cls.name == name
            assert source_cls.label
