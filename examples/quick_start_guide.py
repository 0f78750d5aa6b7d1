#!/usr/bin/env python3
"""
Quick Start Guide for SGML Composer.

This example builds a small recipe document, renders it indented and
minimized, and streams an HTML page over several flushes.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sgml_composer import ComposerConfig, MarkupNode, compose


def recipe_example():
    """Build a recipe tree with the fluent API."""

    print("QUICK START - SGML Composer")
    print("=" * 30)

    recipe = MarkupNode("recipe", {"language": "English"})
    recipe.comment("Family favourite")
    recipe.tag("title", "Pancakes")
    ingredients = recipe.tag("ingredients")
    for ingredient in ["flour", "milk", "eggs", "salt"]:
        ingredients.tag("ingredient", ingredient)

    print("\nIndented:")
    print(recipe.render(minimize=False), end="")

    print("\nMinimized:")
    print(recipe.render(minimize=True))


def streaming_example():
    """Stream a page by keeping the root element open between flushes."""

    print("\nStreaming:")
    html = MarkupNode("html", {"lang": "en"}).block()
    head = html.tag("head")
    head.tag("meta", {"charset": "utf-8"}).void()
    head.tag("title", "Streaming")
    html.flush(minimize=False, sink=sys.stdout)

    for line in ["first", "second"]:
        html.tag("p", line)
        html.flush(minimize=False, sink=sys.stdout)

    html.unblock().flush(minimize=False, sink=sys.stdout)


def description_example():
    """Render a JSON-compatible description."""

    print("\nFrom a description:")
    page = {
        "tag": "p",
        "content": "Line one",
        "children": [{"tag": "br", "void": True}, "Line two"],
    }
    print(compose(page))
    print(compose(page, config=ComposerConfig.xhtml()))


if __name__ == "__main__":
    recipe_example()
    streaming_example()
    description_example()
