"""
Liveaboard search, one plain HTTP page per month.

Each month page carries the search results as a JSON array embedded in the
markup (``"searchResultItemList": [...]``). The array is cut out with a regex
and normalized; pages without it count as empty months. A failed month is
logged and the crawl moves on to the next one.
"""
from scrapy import Request

from reconocedor.extractors import PayloadExtractor
from reconocedor.months import generate_month_queries
from reconocedor.spiders.base import ReconSpider


class LiveaboardMonthsSpider(ReconSpider):
    name = "liveaboard_months"

    custom_settings = {
        # one page at a time so months are handled in calendar order
        "CONCURRENT_REQUESTS": 1,
        "CONCURRENT_REQUESTS_PER_DOMAIN": 1,
        "DOWNLOAD_TIMEOUT": 30,
        # a retried month stays ahead of the next one
        "RETRY_PRIORITY_ADJUST": 0,
    }

    extractor = PayloadExtractor()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pages_with_data = 0

    def start_requests(self):
        queries = generate_month_queries(self.config.base_url, self.config.start_date, self.config.end_date)
        self.logger.info("Generated %d URLs to reconocer", len(queries))
        for q in queries:
            yield Request(
                q.url,
                callback=self.parse_month,
                errback=self.on_month_error,
                headers=self.request_headers(),
                priority=-q.index,
                meta={"playwright": False, "month_query": q},
                dont_filter=True,
            )

    def parse_month(self, response):
        q = response.meta["month_query"]
        groups = self.extractor.extract(response.text)
        if groups is None:
            self.logger.info("No trip payload for %s %s", q.month, q.year)
            return
        self.pages_with_data += 1
        count = 0
        for group in groups:
            for offering in self.normalizer.normalize_group(group):
                count += 1
                yield offering.to_dict()
        self.logger.debug("%s %s: %d vessels, %d departures", q.month, q.year, len(groups), count)

    def on_month_error(self, failure):
        q = failure.request.meta.get("month_query")
        label = f"{q.month} {q.year}" if q else failure.request.url
        self.logger.error("Error reconociendo %s: %s", label, failure.value)
