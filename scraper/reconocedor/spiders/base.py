from urllib.parse import urlparse

import scrapy

from reconocedor.config import ReconConfig
from reconocedor.normalize import Normalizer


class ReconSpider(scrapy.Spider):
    """
    Shared setup for the liveaboard spiders.

    Spider arguments override settings for one run:
      scrapy crawl liveaboard_months -a start_date=2027-01-01 -a end_date=2027-06-30 -a markup=0.2 -a output=out.json
    """

    @classmethod
    def from_crawler(cls, crawler, *args, **kwargs):
        spider = super().from_crawler(crawler, *args, **kwargs)
        spider.config = ReconConfig.from_settings(
            crawler.settings,
            start_date=getattr(spider, "start_date", None),
            end_date=getattr(spider, "end_date", None),
            markup_rate=getattr(spider, "markup", None),
            output_file=getattr(spider, "output", None),
            base_url=getattr(spider, "base_url", None),
        )
        # follow the configured host, otherwise the offsite filter drops everything
        spider.allowed_domains = [urlparse(spider.config.base_url).hostname]
        spider.download_delay = spider.config.request_delay
        spider.normalizer = Normalizer(spider.config.markup_rate)
        return spider

    async def start(self):
        # Scrapy 2.13+ entry point; older releases call start_requests() directly
        for request in self.start_requests():
            yield request

    def request_headers(self) -> dict:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Connection": "keep-alive",
        }
