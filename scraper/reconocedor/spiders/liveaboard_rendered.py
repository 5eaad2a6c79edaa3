"""
Liveaboard search, rendered once in Chromium via scrapy-playwright.

No month enumeration here: the configured search URL is loaded, the page is
left to settle after network idle, and every result card is read off the DOM.
"""
from scrapy import Request
from scrapy_playwright.page import PageMethod

from reconocedor.extractors import DomExtractor
from reconocedor.spiders.base import ReconSpider


class LiveaboardRenderedSpider(ReconSpider):
    name = "liveaboard_rendered"

    custom_settings = {
        "DOWNLOAD_HANDLERS": {
            "http": "scrapy_playwright.handler.ScrapyPlaywrightDownloadHandler",
            "https": "scrapy_playwright.handler.ScrapyPlaywrightDownloadHandler",
        },
        "PLAYWRIGHT_MAX_PAGES_PER_CONTEXT": 1,
    }

    extractor = DomExtractor()

    def start_requests(self):
        yield Request(
            self.config.base_url,
            callback=self.parse_results,
            errback=self.on_render_error,
            headers=self.request_headers(),
            meta={
                "playwright": True,
                "playwright_page_goto_kwargs": {"wait_until": "networkidle", "timeout": 60000},
                "playwright_page_methods": [
                    PageMethod("wait_for_timeout", self.config.render_settle_ms),
                ],
            },
            dont_filter=True,
        )

    def parse_results(self, response):
        records = self.extractor.extract(response)
        if not records:
            self.logger.warning("No bookable trip rows found on %s", response.url)
        self.logger.info("Found %d available date rows", len(records))
        for record in records:
            yield self.normalizer.normalize_record(record).to_dict()

    def on_render_error(self, failure):
        self.logger.error("Error rendering %s: %s", failure.request.url, failure.value)
