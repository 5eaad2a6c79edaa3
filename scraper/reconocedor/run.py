#!/usr/bin/env python3
"""
Run one reconocedor crawl and write the result document.

  reconocedor payload  --start 2027-01-01 --end 2027-12-31 -o data/2027.json
  reconocedor rendered --markup 0.2

Exit status is 0 once the output file has been written, 1 otherwise.
"""
import argparse
import logging
import sys

from scrapy.crawler import CrawlerProcess
from scrapy.settings import Settings

from reconocedor.pipelines import OUTPUT_WRITTEN_STAT
from reconocedor.spiders.liveaboard_months import LiveaboardMonthsSpider
from reconocedor.spiders.liveaboard_rendered import LiveaboardRenderedSpider

logger = logging.getLogger("reconocedor")

VARIANTS = {
    "payload": LiveaboardMonthsSpider,
    "rendered": LiveaboardRenderedSpider,
}


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="reconocedor", description=__doc__.splitlines()[1])
    ap.add_argument("variant", nargs="?", choices=sorted(VARIANTS), default="payload")
    ap.add_argument("-o", "--output", help="output JSON path (RECO_OUTPUT_FILE)")
    ap.add_argument("--base-url", help="search URL (RECO_BASE_URL)")
    ap.add_argument("--markup", type=float, help="markup rate, e.g. 0.15 (RECO_MARKUP_RATE)")
    ap.add_argument("--delay", type=float, help="seconds between requests (DOWNLOAD_DELAY)")
    ap.add_argument("--start", help="first month to query, YYYY-MM-DD (RECO_START_DATE)")
    ap.add_argument("--end", help="last day to query, YYYY-MM-DD (RECO_END_DATE)")
    ap.add_argument("--log-level", help="LOG_LEVEL, default INFO")
    return ap.parse_args(argv)


def build_settings(args) -> Settings:
    settings = Settings()
    settings.setmodule("reconocedor.settings", priority="project")
    overrides = {
        "RECO_OUTPUT_FILE": args.output,
        "RECO_BASE_URL": args.base_url,
        "RECO_MARKUP_RATE": args.markup,
        "DOWNLOAD_DELAY": args.delay,
        "RECO_START_DATE": args.start,
        "RECO_END_DATE": args.end,
        "LOG_LEVEL": args.log_level.upper() if args.log_level else None,
    }
    for name, value in overrides.items():
        if value is not None:
            settings.set(name, value, priority="cmdline")
    return settings


def main(argv=None) -> int:
    args = parse_args(argv)
    process = CrawlerProcess(build_settings(args))
    crawler = process.create_crawler(VARIANTS[args.variant])
    try:
        process.crawl(crawler)
        process.start()
    except Exception:
        logger.exception("Reconoce failed")
        return 1

    stats = crawler.stats.get_stats() if crawler.stats else {}
    reason = stats.get("finish_reason")
    if reason != "finished":
        logger.error("Reconoce failed: crawl ended with %s", reason)
        return 1
    if not stats.get(OUTPUT_WRITTEN_STAT):
        logger.error("Reconoce failed: no output file was written")
        return 1
    logger.info("Reconoce completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
