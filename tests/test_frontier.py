# File: tests/test_frontier.py
from concurrent.futures import ThreadPoolExecutor

import pytest

from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.models import FrontierEntry


def drain(frontier: Frontier) -> list[FrontierEntry]:
    entries = []
    while (entry := frontier.dequeue()) is not None:
        entries.append(entry)
    return entries


def test_fifo_order_and_depth():
    frontier = Frontier()
    assert frontier.try_enqueue("https://x.test/", 0)
    assert frontier.try_enqueue("https://x.test/a", 1)
    assert frontier.try_enqueue("https://x.test/b", 1)

    assert drain(frontier) == [
        FrontierEntry("https://x.test/", 0),
        FrontierEntry("https://x.test/a", 1),
        FrontierEntry("https://x.test/b", 1),
    ]
    assert frontier.dequeue() is None
    assert frontier.is_empty()


def test_duplicate_after_normalization_is_rejected():
    frontier = Frontier()
    assert frontier.try_enqueue("https://x.test/a", 0)
    assert not frontier.try_enqueue("https://x.test/a#frag", 1)
    assert not frontier.try_enqueue("https://x.test/a", 2)
    assert len(frontier) == 1
    assert frontier.seen_count == 1


def test_dequeued_url_is_never_requeued():
    frontier = Frontier()
    frontier.try_enqueue("https://x.test/a", 0)
    assert frontier.dequeue() == FrontierEntry("https://x.test/a", 0)
    assert not frontier.try_enqueue("https://x.test/a", 1)
    assert frontier.dequeue() is None
    assert "https://x.test/a#top" in frontier


@pytest.mark.parametrize(
    "url",
    ["mailto:a@x.test", "javascript:void(0)", "/relative/path", "ftp://x.test/file", "", "http://"],
)
def test_invalid_urls_are_ignored(url):
    frontier = Frontier()
    assert not frontier.try_enqueue(url, 0)
    assert frontier.seen_count == 0
    assert frontier.is_empty()


def test_concurrent_enqueue_emits_each_url_once():
    frontier = Frontier()
    urls = [f"https://x.test/p{i % 50}#f{i}" for i in range(2000)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        accepted = list(pool.map(lambda u: frontier.try_enqueue(u, 1), urls))

    entries = drain(frontier)
    assert sum(accepted) == 50
    assert len(entries) == 50
    assert len({e.url for e in entries}) == 50
    assert frontier.seen_count == 50


def test_concurrent_dequeue_hands_out_each_entry_once():
    frontier = Frontier()
    for i in range(500):
        frontier.try_enqueue(f"https://x.test/{i}", 0)

    def take_all() -> list[str]:
        taken = []
        while (entry := frontier.dequeue()) is not None:
            taken.append(entry.url)
        return taken

    with ThreadPoolExecutor(max_workers=8) as pool:
        batches = [f.result() for f in [pool.submit(take_all) for _ in range(8)]]

    taken = [url for batch in batches for url in batch]
    assert len(taken) == 500
    assert len(set(taken)) == 500
