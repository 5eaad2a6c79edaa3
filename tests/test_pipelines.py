"""
Tests for reconocedor.pipelines and reconocedor.assemble.
"""
import logging
from types import SimpleNamespace

import orjson
import pytest
from scrapy import Spider
from scrapy.exceptions import DropItem
from scrapy.utils.test import get_crawler

from reconocedor.assemble import FILTERED_OUT_NOTE, ResultAssembler
from reconocedor.config import ReconConfig
from reconocedor.items import TripOffering
from reconocedor.pipelines import (
    OUTPUT_WRITTEN_STAT,
    AvailabilityPipeline,
    DedupePipeline,
    ResultWriterPipeline,
    as_offering,
)


def trip_dict(name="Galápagos Sky", date="5 Mar 2027", price="$ 2,000", available=True, spots=10):
    return TripOffering(
        name=name, date=date, price=price, your_price="$2,300.00" if price else "",
        is_available=available, spots_left=spots, availability="available",
        reconocido_at="2026-10-17T12:30:00.000Z",
    ).to_dict()


@pytest.fixture
def output_file(tmp_path):
    return tmp_path / "data" / "reconocido-data.json"


@pytest.fixture
def crawler(output_file):
    crawler = get_crawler(Spider)
    crawler.spider = SimpleNamespace(config=ReconConfig(output_file=str(output_file)), pages_with_data=2)
    return crawler


def run_pipelines(items, crawler):
    pipes = [AvailabilityPipeline(), DedupePipeline(), ResultWriterPipeline.from_crawler(crawler)]
    for p in pipes:
        if hasattr(p, "open_spider"):
            p.open_spider()
    passed = []
    for item in items:
        try:
            for p in pipes:
                item = p.process_item(item)
            passed.append(item)
        except DropItem:
            continue
    for p in pipes:
        if hasattr(p, "close_spider"):
            p.close_spider()
    return passed


class TestAvailabilityPipeline:
    def test_keeps_available(self):
        item = trip_dict()
        assert AvailabilityPipeline().process_item(item) is item

    @pytest.mark.parametrize("available,spots", [(False, 10), (True, 0), (False, 0)])
    def test_drops_unavailable(self, available, spots):
        with pytest.raises(DropItem):
            AvailabilityPipeline().process_item(trip_dict(available=available, spots=spots))

    def test_accepts_spider_argument(self):
        item = trip_dict()
        assert AvailabilityPipeline().process_item(item, object()) is item


class TestDedupePipeline:
    def test_drops_later_duplicates(self):
        p = DedupePipeline()
        p.process_item(trip_dict(price="$ 2,000"))
        with pytest.raises(DropItem, match="Duplicate"):
            p.process_item(trip_dict(price="$ 2,500"))
        p.process_item(trip_dict(date="12 Mar 2027"))


class TestResultWriter:
    def test_writes_document(self, crawler, output_file, caplog):
        items = [
            trip_dict(),
            trip_dict(date="12 Mar 2027", available=False),
            trip_dict(price="$ 2,999"),
            trip_dict(name="Humboldt Explorer", spots=0),
            trip_dict(name="Humboldt Explorer", date="19 Mar 2027"),
        ]
        with caplog.at_level(logging.INFO, logger="reconocedor.pipelines"):
            passed = run_pipelines(items, crawler)

        assert len(passed) == 2
        doc = orjson.loads(output_file.read_bytes())
        assert doc["totalTrips"] == 2
        assert doc["filteredOut"] == FILTERED_OUT_NOTE
        assert doc["source"] == "l-a.com"
        assert doc["lastUpdated"].endswith("Z")
        assert [(t["name"], t["date"], t["price"]) for t in doc["trips"]] == [
            ("Galápagos Sky", "5 Mar 2027", "$ 2,000"),
            ("Humboldt Explorer", "19 Mar 2027", "$ 2,000"),
        ]
        assert all(t["isAvailable"] for t in doc["trips"])
        assert "Reconocido complete: 2 trips from 2 months" in caplog.text

    def test_empty_run_still_writes(self, crawler, output_file):
        run_pipelines([], crawler)
        doc = orjson.loads(output_file.read_bytes())
        assert doc["totalTrips"] == 0
        assert doc["trips"] == []

    def test_records_written_output(self, crawler):
        run_pipelines([trip_dict()], crawler)
        assert crawler.stats.get_value(OUTPUT_WRITTEN_STAT) is True

    def test_failed_write_is_not_recorded(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        crawler = get_crawler(Spider)
        crawler.spider = SimpleNamespace(config=ReconConfig(output_file=str(blocker / "out.json")))

        with pytest.raises(OSError):
            run_pipelines([trip_dict()], crawler)
        assert crawler.stats.get_value(OUTPUT_WRITTEN_STAT) is None

    def test_uses_settings_when_spider_has_no_config(self, tmp_path):
        out = tmp_path / "nested" / "out.json"
        crawler = get_crawler(Spider, {"RECO_OUTPUT_FILE": str(out)})
        run_pipelines([trip_dict()], crawler)
        assert orjson.loads(out.read_bytes())["totalTrips"] == 1


class TestAssembler:
    def test_assemble_shape(self, fixed_now):
        doc = ResultAssembler("unused.json", "l-a.com").assemble([as_offering(trip_dict())], now=fixed_now)
        assert list(doc) == ["lastUpdated", "totalTrips", "filteredOut", "source", "trips"]
        assert doc["lastUpdated"] == "2026-10-17T12:30:00.000Z"
        assert doc["trips"][0]["yourPrice"] == "$2,300.00"
        assert doc["trips"][0]["photo"] == {"url": "", "alt": ""}

    def test_creates_missing_directory(self, tmp_path):
        path = tmp_path / "a" / "b" / "out.json"
        ResultAssembler(str(path), "l-a.com").write([])
        assert path.exists()

    def test_as_offering_accepts_models_and_dicts(self):
        o = as_offering(trip_dict())
        assert isinstance(o, TripOffering)
        assert as_offering(o) is o
