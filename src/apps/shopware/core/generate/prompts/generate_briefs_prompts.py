USER_PROMPT = """Create {count} clearly distinct product concepts (not real brands) for the industry {category}. Each concept must have: nameIdea, targetAudience, 3-6 differentiators, and an optional priceTier among budget/mid/premium.{context_clause}"""

CONTEXT_CLAUSE_TEMPLATE = """ Consider this additional context: "{context}"."""
