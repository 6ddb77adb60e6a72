CRAWLED_CONTENT_TEMPLATE = """{context}

--- Crawled content ---
Crawled source URL: {url}
Relevant extracted content (summarize and prioritize as needed):
{content}
--- End of crawled content ---"""
