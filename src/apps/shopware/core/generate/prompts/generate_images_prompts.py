IMAGE_PROMPT = """CRITICAL INSTRUCTION: Create a professional, commercial studio photograph of a photo-realistic product image. The image must be on a pristine white background with a clean, hard-edged shadow underneath the product.
No text, logos, or other distracting elements are allowed. The product should be captured with a high-end DSLR camera using a macro lens, set with a shallow depth of field (f/1.8).
The lighting is soft and even, highlighting the product's details and texture without harsh reflections.
The product picture should match the name {name} with the product description: {description} from the category {category}."""

CONTEXT_CLAUSE_TEMPLATE = """ Additional context to consider for the image styling or details: "{context}"."""
