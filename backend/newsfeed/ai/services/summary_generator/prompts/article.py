"""
Prompts for single article summary generation
"""

# Only the head of the article is sent
CONTENT_CHAR_LIMIT = 1000

SUMMARY_PROMPT = """Summarize the following news article in 2-3 concise sentences:

Title: {title}

Content: {content}

Summary:"""


def build_summary_prompt(title: str, content: str) -> str:
    return SUMMARY_PROMPT.format(title=title, content=content[:CONTENT_CHAR_LIMIT])
