"""site_crawler.parser: HTML and robots.txt parsing."""
