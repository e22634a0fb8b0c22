"""
Example usage of the rank lookup core.

This script demonstrates how a front end resolves level names,
handles ambiguous results and serves numeric follow-up replies.
"""

import logging

from rank_lookup import build_service
from rank_lookup.matching import Ambiguous, NoMatch, UniqueMatch
from rank_lookup.session import SessionNotFound

LEVELS = [
    {"name": "Hopeless Pursuit", "top": 1},
    {"name": "Generator v1.6.5", "top": 3},
    {"name": "Realistic Variation", "top": 5},
    {"name": "Reckless Velocity", "top": 7},
    {"name": "Generator v2.0", "top": 9},
    {"name": "Fall of the Sky", "top": 12},
]


def describe(outcome) -> str:
    """Plain-text rendering of an outcome."""
    if isinstance(outcome, UniqueMatch):
        prefix = "" if outcome.exact else "(assumed) "
        return f"{prefix}{outcome.name} is ranked #{outcome.top} [{outcome.tier.value}]"
    if isinstance(outcome, Ambiguous):
        lines = [f"{len(outcome.candidates)} candidates [{outcome.tier.value}]:"]
        lines += [f"  {i}. {c.name} (#{c.top})" for i, c in enumerate(outcome.candidates, 1)]
        return "\n".join(lines)
    if isinstance(outcome, NoMatch):
        return "nothing close enough"
    return repr(outcome)


def example_queries():
    """Example: One query per tier."""
    print("=" * 80)
    print("EXAMPLE 1: Tiered Resolution")
    print("=" * 80)

    service = build_service()
    queries = [
        "hopeless pursuit",  # exact
        "hp",                # acronym
        "generator 1.6",     # mixed token
        "generator v2",      # strict multiword
        "hopless pursut",    # fuzzy
        "nothing like it",   # no match
    ]

    for query in queries:
        outcome = service.handle_query("demo-user", query, LEVELS)
        print(f"\nQuery: '{query}'\n{describe(outcome)}")


def example_disambiguation():
    """Example: Ambiguous result followed by a numeric reply."""
    print("\n" + "=" * 80)
    print("EXAMPLE 2: Disambiguation")
    print("=" * 80)

    service = build_service()

    outcome = service.handle_query("demo-user", "rv", LEVELS)
    print(f"\nQuery: 'rv'\n{describe(outcome)}")

    outcome = service.handle_query("demo-user", "2")
    print(f"\nReply: '2'\n{describe(outcome)}")

    try:
        service.handle_query("demo-user", "2")
    except SessionNotFound as e:
        print(f"\nReply: '2' again\n{e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_queries()
    example_disambiguation()
