"""Shared fixtures for cnxcheck tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from helpers import FakeChecker

SAMPLE_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<document xmlns="http://cnx.rice.edu/cnxml" xmlns:m="http://www.w3.org/1998/Math/MathML">
  <title>Forces and Motion</title>
  <content>
    <section id="s1">
      <title>Newton</title>
      <para id="p1">The Cat sat on
        the mat.</para>
      <para id="p2">See <link target-id="fig1">figure one</link> and <m:math><m:mi>x</m:mi></m:math>.</para>
      <list id="l1">
        <item>first item</item>
        <item>second item</item>
      </list>
    </section>
  </content>
</document>
"""


@pytest.fixture
def fake_checker() -> FakeChecker:
    return FakeChecker()


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Directory tree with two documents and an unrelated file."""
    root = tmp_path / "modules"
    (root / "m1").mkdir(parents=True)
    (root / "m2" / "nested").mkdir(parents=True)
    (root / "m1" / "index.cnxml").write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    (root / "m2" / "nested" / "index.cnxml").write_text(
        "<document><title>Second</title><content><para>Short one.</para></content></document>",
        encoding="utf-8",
    )
    (root / "m2" / "notes.txt").write_text("not a document", encoding="utf-8")
    return root
