#!/usr/bin/env python3
"""
Quick Start Guide for tinymarkup.

Walks through tokenizing, parsing, inspecting, serializing and profiling a
small markup document.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tinymarkup import (
    InvalidAstError,
    MarkupParser,
    ParserConfig,
    ReaderError,
    parse,
    serialize,
    tokenize,
)
from tinymarkup.tools import PerformanceProfiler

DOCUMENT = """
<nav class="menu">
  <!-- primary links -->
  <ul>
    <li><a href="/">Home</a></li>
    <li><a href="/docs" target="_blank">Docs</a></li>
  </ul>
  <button class="toggle" disabled>Menu</button>
</nav>
"""


def quick_start_example():
    """Quick start example showing basic usage."""

    print("QUICK START - tinymarkup")
    print("=" * 45)

    # Step 1: Tokenize
    print("\nStep 1: Tokens")
    print("-" * 30)
    for token in tokenize(DOCUMENT)[:6]:
        print(f"  {token!r}")

    # Step 2: Parse and inspect
    print("\nStep 2: Element tree")
    print("-" * 30)
    nav = parse(DOCUMENT)[0]
    print(f"Root: <{nav.tag}> class={nav.get_attribute('class')!r}")
    for link in nav.find_all("a"):
        print(f"  link {link.get_attribute('href')} -> {link.text}")
    print(f"Button disabled: {nav.find('button').has_attribute('disabled')}")

    # Step 3: Serialize
    print("\nStep 3: Canonical output")
    print("-" * 30)
    print(serialize([nav]))

    # Step 4: Errors
    print("\nStep 4: Strict failures")
    print("-" * 30)
    for bad in ("<div", "<div><p>x</p>"):
        try:
            parse(bad)
        except (ReaderError, InvalidAstError) as e:
            print(f"  {bad!r}: {type(e).__name__}: {e}")

    strict = MarkupParser(ParserConfig.strict())
    try:
        strict.parse("<ul></li>")
    except InvalidAstError as e:
        print(f"  strict preset: {e}")

    # Step 5: Profiling
    print("\nStep 5: Stage timings")
    print("-" * 30)
    session = PerformanceProfiler().profile(DOCUMENT)
    for stage in session.stages:
        print(f"  {stage.stage_name:<14} {stage.duration_ms:.3f} ms")


if __name__ == "__main__":
    quick_start_example()
