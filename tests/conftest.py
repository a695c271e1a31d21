import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))


class FakeLocator:

    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    @property
    def first(self):
        return self

    async def count(self):
        if self.selector in self.page.broken:
            raise Exception(f"Unexpected token in selector {self.selector}")
        return self.page.counts.get(self.selector, 0)

    async def wait_for(self, state="visible", timeout=None):
        self.page.waits.append((self.selector, state, timeout))
        if self.selector in self.page.attach_later:
            self.page.counts[self.selector] = 1
            return
        raise Exception(f"Timeout {timeout}ms exceeded")


class FakePage:

    def __init__(self, counts=None, broken=(), attach_later=()):
        self.counts = dict(counts or {})
        self.broken = set(broken)
        self.attach_later = set(attach_later)
        self.requested = []
        self.waits = []

    def locator(self, selector):
        self.requested.append(selector)
        return FakeLocator(self, selector)


@pytest.fixture(name="make_page")
def make_page_fixture():
    return FakePage
