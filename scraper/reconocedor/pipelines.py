"""
Item pipelines, in settings order:

100 AvailabilityPipeline  drop offerings that are not bookable
200 DedupePipeline        first (name, date) wins across all pages
900 ResultWriterPipeline  collect survivors, write one JSON document on close
"""
import logging

from scrapy.exceptions import DropItem

from reconocedor.assemble import ResultAssembler
from reconocedor.config import ReconConfig
from reconocedor.dedupe import Deduplicator
from reconocedor.items import TripOffering

logger = logging.getLogger(__name__)

OUTPUT_WRITTEN_STAT = "reconocedor/output_written"


def as_offering(item) -> TripOffering:
    if isinstance(item, TripOffering):
        return item
    return TripOffering.model_validate(dict(item))


def crawler_config(crawler) -> ReconConfig:
    config = getattr(crawler.spider, "config", None)
    if config is None:
        config = ReconConfig.from_settings(crawler.settings)
    return config


# The spider argument is optional: Scrapy 2.13+ calls these methods without it.

class AvailabilityPipeline:
    def process_item(self, item, spider=None):
        o = as_offering(item)
        if not o.is_available or o.spots_left == 0:
            raise DropItem(f"Unavailable trip {o.name!r} on {o.date!r}")
        return item


class DedupePipeline:
    def __init__(self):
        self.dedupe = Deduplicator()

    def process_item(self, item, spider=None):
        o = as_offering(item)
        if not self.dedupe.add(o):
            raise DropItem(f"Duplicate trip {o.name!r} on {o.date!r}")
        return item


class ResultWriterPipeline:
    def __init__(self, crawler):
        self.crawler = crawler
        self.trips = []

    @classmethod
    def from_crawler(cls, crawler):
        return cls(crawler)

    def open_spider(self, spider=None):
        config = crawler_config(self.crawler)
        self.assembler = ResultAssembler(config.output_file, config.source)

    def process_item(self, item, spider=None):
        self.trips.append(as_offering(item))
        return item

    def close_spider(self, spider=None):
        # written even when nothing was found
        doc = self.assembler.write(self.trips)
        if self.crawler.stats is not None:
            self.crawler.stats.set_value(OUTPUT_WRITTEN_STAT, True)
        pages = getattr(self.crawler.spider, "pages_with_data", None)
        if pages is None:
            logger.info("Reconocido complete: %d trips", doc["totalTrips"])
        else:
            logger.info("Reconocido complete: %d trips from %d months", doc["totalTrips"], pages)
