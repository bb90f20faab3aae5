from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

SynonymTable = Mapping[str, Tuple[str, ...]]


def build_synonym_table(entries: Mapping[str, Iterable[str]]) -> SynonymTable:
    """
    Freeze a synonym mapping, lowercasing and trimming keys and alternatives.

    Alternatives keep their curated order (the hint shows the first two);
    duplicates are dropped.
    """
    table = {}
    for canonical, alternatives in entries.items():
        seen = []
        for alternative in alternatives:
            normalized = alternative.strip().lower()
            if normalized and normalized not in seen:
                seen.append(normalized)
        table[canonical.strip().lower()] = tuple(seen)
    return MappingProxyType(table)


DEFAULT_SYNONYMS: SynonymTable = build_synonym_table(
    {
        # Art & Culture Walk
        "museum": ["museums", "gallery", "galleries", "art museum", "art gallery"],
        "times square": ["timesquare", "time square", "broadway", "theater district"],
        "fountain": ["fountains", "water fountain", "bethesda fountain"],
        # Foodie Adventure
        "katz": ["katzs", "katz deli", "katz delicatessen", "pastrami"],
        "brooklyn bridge": ["brooklyn", "bridge", "brooklynbridge"],
        "grimaldi": ["grimaldis", "grimaldi pizza", "coal pizza"],
        # Historic Downtown
        "federal hall": ["federal", "washington", "first capital"],
        "one world trade center": [
            "world trade center",
            "freedom tower",
            "wtc",
            "trade center",
        ],
        "wall street": ["wallstreet", "financial district", "charging bull"],
        # Taste Quest
        "frozen hot chocolate": ["frozen chocolate", "serendipity", "hot chocolate"],
        "magnolia bakery": ["magnolia", "cupcakes", "sex and the city"],
        "macaron": ["macarons", "french pastry", "laduree"],
        "levain cookie": ["levain", "thick cookie", "chocolate chip"],
        "croissant": ["croissants", "french pastry", "dominique ansel"],
        "big gay ice cream": ["big gay", "rainbow ice cream", "lgbt ice cream"],
        # Landmarks
        "empire state building": ["empire state", "empire", "esb"],
        "central park": ["central", "park", "manhattan park"],
        # General
        "keyboard": ["keyboards", "computer keyboard", "typing"],
        "park": ["parks", "green space"],
        "building": ["buildings", "structure", "architecture"],
        "art": ["arts", "artwork", "painting", "sculpture"],
        "theater": ["theaters", "theatre", "theatres", "broadway theater"],
        "statue": ["statues", "sculpture", "monument"],
        "bridge": ["bridges", "manhattan bridge"],
        "tower": ["towers", "skyscraper"],
        "library": ["libraries", "public library", "reading room"],
    }
)
