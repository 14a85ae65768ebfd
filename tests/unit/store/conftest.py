import threading

import pytest

from tinylink.models import LinkModel
from tinylink.dao.base import LinkBaseDAO, InsertOutcome


class InMemoryLinkDAO(LinkBaseDAO):
    """Thread-safe dict-backed DAO with the same conditional insert semantics as the real backends."""

    def __init__(self, now: int | None = None):
        self.links: dict[str, LinkModel] = {}
        self.inserts = 0
        self.now = now
        self._lock = threading.Lock()

    def _live(self, link: LinkModel | None) -> bool:
        return link is not None and (self.now is None or not link.expired(self.now))

    def insert(self, link: LinkModel, **kwargs) -> InsertOutcome:
        with self._lock:
            self.inserts += 1
            if self._live(self.links.get(link.shortcode)):
                return InsertOutcome.CONFLICT
            self.links[link.shortcode] = link
            return InsertOutcome.CREATED

    def find(self, shortcode: str, **kwargs) -> list[LinkModel]:
        with self._lock:
            link = self.links.get(shortcode)
            return [link] if self._live(link) else []

    def find_by_submitter(self, submitter: str, **kwargs) -> list[LinkModel]:
        with self._lock:
            return [link for link in self.links.values() if link.submitter == submitter and self._live(link)]


@pytest.fixture
def dao() -> InMemoryLinkDAO:
    return InMemoryLinkDAO()


@pytest.fixture
def shortcodes(monkeypatch):
    """Replace random generation with a fixed sequence of short codes."""

    def install(*codes: str) -> list[int]:
        remaining = iter(codes)
        lengths = []

        def fake_generate_shortcode(length, *args, **kwargs):
            lengths.append(length)
            return next(remaining)

        monkeypatch.setattr('tinylink.store.generate_shortcode', fake_generate_shortcode)
        return lengths

    return install
