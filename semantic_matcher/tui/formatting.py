"""
Console formatting for search results, statistics and help text.
"""

import math
from typing import Any, Dict

from ..core.quality import DISTANCE_GUIDE
from ..vector.types import SearchResponse, SearchResultItem

QUALITY_INDICATORS = {
    "excellent": "●",
    "good": "◐",
    "weak": "◯",
    "poor": "○",
}

RULE = "─" * 80

GUIDE_DESCRIPTIONS = {
    "excellent": "Very strong semantic match",
    "good": "Good semantic similarity",
    "weak": "Some semantic relation",
    "poor": "Limited semantic similarity",
}


def get_quality_indicator(quality: str) -> str:
    return QUALITY_INDICATORS.get(quality, "○")


def format_result(result: SearchResultItem, index: int) -> str:
    """Format a single search result; index is 0-based."""
    indicator = get_quality_indicator(result.quality)
    category = (result.metadata or {}).get("category")
    suffix = f" [{category}]" if category else ""

    return (f"{indicator} #{index + 1} [{result.id}] {result.text}{suffix}\n"
            f"         Distance: {result.distance} ({result.quality_label})")


def format_search_results(response: SearchResponse) -> str:
    if not response.results:
        return "\nNo matches found for your query.\n"

    lines = ["", f'Query: "{response.query}"', f"Found {response.result_count} result(s):", RULE]

    for index, result in enumerate(response.results):
        lines.append(format_result(result, index))
        if index < len(response.results) - 1:
            lines.append("")

    lines.append(RULE)
    lines.append("")
    return "\n".join(lines)


def format_stats(stats: Dict[str, Any]) -> str:
    lines = [
        "",
        "Collection Statistics:",
        "─" * 30,
        f"Collection Name: {stats['collectionName']}",
        f"Documents: {stats['documentCount']}",
        f"Initialized: {stats['initialized']}",
        f"ChromaDB URL: {stats['chromaUrl']}",
        f"Default Top-K: {stats['config']['defaultTopK']}",
        f"Max Top-K: {stats['config']['maxTopK']}",
        "",
    ]
    return "\n".join(lines)


def _guide_line(band) -> str:
    indicator = get_quality_indicator(band.quality)
    name = band.quality.capitalize().ljust(9)
    if math.isinf(band.max):
        span = f"({band.min}+)".ljust(12)
    else:
        span = f"({band.min} - {band.max})".ljust(12)
    return f"  {indicator} {name} {span} - {GUIDE_DESCRIPTIONS[band.quality]}"


def help_text() -> str:
    guide = "\n".join(_guide_line(band) for band in DISTANCE_GUIDE)
    return f"""
Semantic Matcher CLI
===================

Commands:
  search <query>             Search for semantic matches
  s <query>                  Shorthand for search
  help, h                    Show this help message
  stats                      Show collection statistics
  reset                      Reset and reload the collection
  quit, exit, q              Exit the application

Examples:
  search JavaScript developer
  s machine learning expert
  search UX designer with mobile experience

Distance Guide:
{guide}

Tips:
  - Use natural language queries
  - Try different phrasings for better results
  - Semantic search finds meaning, not just keywords
"""
