BASE_PROMPT = """Create realistic sample data for a product of an online store in JSON format.
The product should resemble a realistic item of the industry {category}, but not from real-world brands.
The product description should contain at least {min_description_words} words. You can use simple html to format the description."""

REVIEWS_CLAUSE = """ The product should have at least {min_reviews} realistic reviews with points between 1 and 5."""

OPTIONS_CLAUSE = """ The product should have at least {min_options} fitting options from the possible options."""

CONTEXT_CLAUSE_TEMPLATE = """ Consider the following additional context for the product and its description: "{context}"."""

PRIOR_NAMES_CLAUSE_TEMPLATE = """ IMPORTANT: Avoid creating a product that is too similar to any of these already generated items: {prior_names}. Pick a distinct concept, features, materials/ingredients, target audience, and price point. Ensure the name is clearly different."""

BRIEF_CLAUSE_TEMPLATE = """
Base the product strongly on this concept while keeping it realistic and not a real brand:
Name idea: {name_idea}
Target audience: {target_audience}
Price tier: {price_tier}
Key differentiators:
{differentiators}"""
