"""site_crawler.crawler: frontier, fetcher, robots cache and the worker pool."""
