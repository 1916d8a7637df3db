"""
Wine Flavour Taxonomy Module
Defines the fixed flavour/style vocabulary and the keywords that detect it
"""
import re
from typing import Dict, List, Tuple


def compile_keyword_pattern(keywords: List[str]) -> re.Pattern:
    """
    Build one case-insensitive pattern matching any keyword as a whole word or phrase

    Args:
        keywords: Keyword phrases (may contain spaces or punctuation)

    Returns:
        Pattern: Compiled regex; phrases must appear contiguously
    """
    # Longest first so "dark chocolate" is tried before "chocolate"
    escaped = [re.escape(k.lower().strip()) for k in sorted(keywords, key=len, reverse=True) if k and k.strip()]
    # ASCII word characters, so an accented letter counts as a boundary
    return re.compile(r"(?<!\w)(?:" + "|".join(escaped) + r")(?!\w)", re.IGNORECASE | re.ASCII)


class WineTaxonomy:
    """Flavour and style vocabulary shared by tagging, display badges and filters"""

    # Primary flavour categories (the vocabulary offered for manual tagging)
    FLAVOR_KEYWORDS = {
        "berry": [
            "berry", "berries", "strawberry", "strawberries", "raspberry", "raspberries",
            "blackberry", "blackberries", "blueberry", "blueberries", "cranberry", "cranberries",
            "cherry", "cherries", "currant", "boysenberry"
        ],
        "earthy": [
            "earthy", "earth", "soil", "mineral", "minerality", "stone", "rocky", "terroir",
            "dirt", "dusty", "forest floor", "mushroom", "mushrooms", "truffle"
        ],
        "citrus": [
            "citrus", "lemon", "lime", "orange", "grapefruit", "tangerine", "mandarin",
            "bergamot", "yuzu", "citrusy", "zesty", "tart"
        ],
        "floral": [
            "floral", "flower", "flowers", "rose", "violet", "lavender", "jasmine",
            "honeysuckle", "elderflower", "lilac", "peony", "perfumed", "aromatic"
        ],
        "chocolate": [
            "chocolate", "cocoa", "cacao", "mocha", "dark chocolate", "milk chocolate",
            "bittersweet", "chocolatey"
        ],
        "vanilla": [
            "vanilla", "vanillin", "sweet", "creamy", "custard", "caramel", "butterscotch",
            "toffee", "honey"
        ],
        "spicy": [
            "spicy", "spice", "pepper", "peppery", "black pepper", "white pepper", "cinnamon",
            "clove", "nutmeg", "allspice", "cardamom", "ginger", "paprika", "cayenne", "hot"
        ],
        "buttery": [
            "buttery", "butter", "creamy", "rich", "lush", "velvety", "smooth", "silky",
            "luxurious", "opulent"
        ],
        "nutty": [
            "nutty", "nut", "nuts", "almond", "hazelnut", "walnut", "pecan", "cashew",
            "pistachio", "marzipan", "nuttiness"
        ],
        "herbal": [
            "herbal", "herb", "herbs", "basil", "thyme", "rosemary", "sage", "oregano", "mint",
            "eucalyptus", "pine", "cedar", "tobacco", "tea", "green tea", "medicinal"
        ]
    }

    # Contextual style categories (less specific, added after the primary pass)
    CONTEXTUAL_KEYWORDS = {
        "fruit": ["fruit", "fruity", "fresh fruit", "ripe fruit", "stone fruit", "tropical fruit", "dried fruit"],
        "oak": ["oak", "oaky", "wood", "woody", "barrel", "aged", "toasty", "toast", "smoky", "smoke"],
        "sweet": ["sweet", "sweetness", "sugar", "syrupy", "jam", "preserve", "compote"],
        "dry": ["dry", "crisp", "clean", "refreshing", "bright", "acidic", "tart"],
        "bold": ["bold", "robust", "powerful", "intense", "concentrated", "full-bodied", "heavy"],
        "light": ["light", "delicate", "subtle", "gentle", "soft", "light-bodied", "elegant"]
    }

    # Wine type defaults
    # ORDER MATTERS: first matching substring wins ("Red Sparkling" -> red defaults)
    WINE_TYPE_DEFAULTS: List[Tuple[Tuple[str, ...], List[str]]] = [
        (("red",), ["berry", "earthy"]),
        (("white",), ["citrus", "floral"]),
        (("rosé", "rose"), ["berry", "floral"]),
        (("sparkling",), ["citrus", "light"]),
        (("dessert",), ["sweet", "vanilla"]),
    ]

    # Compiled once at import time
    FLAVOR_PATTERNS: Dict[str, re.Pattern] = {
        tag: compile_keyword_pattern(keywords) for tag, keywords in FLAVOR_KEYWORDS.items()
    }
    CONTEXTUAL_PATTERNS: Dict[str, re.Pattern] = {
        tag: compile_keyword_pattern(keywords) for tag, keywords in CONTEXTUAL_KEYWORDS.items()
    }

    @classmethod
    def get_all_flavor_types(cls) -> List[str]:
        """Get all primary flavour categories, sorted"""
        return sorted(cls.FLAVOR_KEYWORDS.keys())

    @classmethod
    def get_all_contextual_types(cls) -> List[str]:
        """Get all contextual style categories, sorted"""
        return sorted(cls.CONTEXTUAL_KEYWORDS.keys())

    @classmethod
    def get_vocabulary(cls) -> List[str]:
        """Every tag the engine can produce"""
        return sorted(set(cls.FLAVOR_KEYWORDS) | set(cls.CONTEXTUAL_KEYWORDS))

    @classmethod
    def detect_flavor_types(cls, text: str) -> List[str]:
        """
        Detect primary flavour categories in a text

        Args:
            text: Text to analyze (e.g., "dark chocolate and forest floor")

        Returns:
            List of detected primary categories in vocabulary order
        """
        if not text:
            return []
        return [tag for tag, pattern in cls.FLAVOR_PATTERNS.items() if pattern.search(text)]

    @classmethod
    def detect_contextual_types(cls, text: str) -> List[str]:
        """Detect contextual style categories in a text"""
        if not text:
            return []
        return [tag for tag, pattern in cls.CONTEXTUAL_PATTERNS.items() if pattern.search(text)]

    @classmethod
    def get_wine_type_tags(cls, wine_type: str) -> List[str]:
        """
        Get default tags for a wine type

        Args:
            wine_type: Wine category (e.g., "Red Wine", "Rosé")

        Returns:
            List[str]: Defaults of the first matching type, or empty list
        """
        type_lower = (wine_type or "").lower()
        for triggers, defaults in cls.WINE_TYPE_DEFAULTS:
            if any(trigger in type_lower for trigger in triggers):
                return list(defaults)
        return []
