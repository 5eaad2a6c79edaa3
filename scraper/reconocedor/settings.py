# Reconocedor Scrapy settings

BOT_NAME = "reconocedor"
SPIDER_MODULES = ["reconocedor.spiders"]
NEWSPIDER_MODULE = "reconocedor.spiders"

# Crawl politeness
ROBOTSTXT_OBEY = True
DOWNLOAD_DELAY = 3.0            # inter-request delay between month pages
RANDOMIZE_DOWNLOAD_DELAY = False
DOWNLOAD_TIMEOUT = 30
CONCURRENT_REQUESTS = 1         # month pages are processed in enumeration order
CONCURRENT_REQUESTS_PER_DOMAIN = 1
RETRY_TIMES = 1

# Headers
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
DEFAULT_REQUEST_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}

# Caching & logging
HTTPCACHE_ENABLED = False
HTTPCACHE_DIR = "httpcache"
HTTPCACHE_EXPIRATION_SECS = 3600
LOG_LEVEL = "INFO"

# Pipelines: availability filter -> dedupe -> single JSON document
ITEM_PIPELINES = {
    "reconocedor.pipelines.AvailabilityPipeline": 100,
    "reconocedor.pipelines.DedupePipeline": 200,
    "reconocedor.pipelines.ResultWriterPipeline": 900,
}

# Run options (override with -s NAME=value)
RECO_BASE_URL = "https://www.liveaboard.com/diving/search/galapagos"
RECO_OUTPUT_FILE = "./data/reconocido-data.json"
RECO_MARKUP_RATE = 0.15
RECO_START_DATE = "2026-02-01"
RECO_END_DATE = "2028-12-31"
RECO_RENDER_SETTLE_MS = 3000
RECO_SOURCE = "l-a.com"

# Playwright; the download handlers are installed by the rendered spider only
TWISTED_REACTOR = "twisted.internet.asyncioreactor.AsyncioSelectorReactor"
PLAYWRIGHT_BROWSER_TYPE = "chromium"
PLAYWRIGHT_DEFAULT_NAVIGATION_TIMEOUT = 60000
PLAYWRIGHT_LAUNCH_OPTIONS = {"headless": True}
