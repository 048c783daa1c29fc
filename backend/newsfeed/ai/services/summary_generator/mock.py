"""
Offline summary generator built from canned templates
"""

from .base import BaseSummaryGenerator

SUMMARY_TEMPLATES = {
    "technology": "This article discusses recent technological advancements and their impact on the industry.",
    "business": "The article examines business trends and economic developments affecting markets.",
    "sports": "This piece covers recent sporting events and athlete performances.",
    "health": "The article explores health research findings and wellness recommendations.",
    "science": "This piece delves into scientific discoveries and research breakthroughs.",
    "entertainment": "The article reviews entertainment news and cultural developments.",
}

DEFAULT_SUMMARY = "This article provides insights and analysis on current events and developments in the field."

KEY_TOPIC_WORDS = 5


class MockSummaryGenerator(BaseSummaryGenerator):
    """Deterministic summaries keyed on the title"""

    async def generate_summary(self, title: str, content: str) -> str:
        title_lower = title.lower()
        summary = next(
            (template for topic, template in SUMMARY_TEMPLATES.items() if topic in title_lower),
            DEFAULT_SUMMARY,
        )

        key_words = title.split(" ")[:KEY_TOPIC_WORDS]
        return f"{summary} Key topics include: {', '.join(key_words)}."
