"""Shared test fixtures for the webselect test suite."""

from __future__ import annotations

import pytest

SAMPLE_HTML = """\
<html>
  <head><title>Example Domain</title></head>
  <body>
    <h1>Example</h1>
    <ul id="items">
      <li>One</li>
      <li>  Two  </li>
      <li><a href="/three">Three</a></li>
    </ul>
    <div class="greeting">  Hello <b>World</b>  </div>
  </body>
</html>
"""


class FakeClock:
    """Manually advanced wall clock, in seconds since the epoch."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sample_html() -> str:
    return SAMPLE_HTML
