"""Builders for OpenAI responses and generated catalog data."""

import base64
from types import SimpleNamespace


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PNG_B64 = base64.b64encode(PNG_BYTES).decode("utf-8")


def completion(parsed, refusal=None):
    """Shape of an OpenAI structured-output completion."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(parsed=parsed, refusal=refusal))])


def image_response(b64_json=PNG_B64):
    return SimpleNamespace(data=[SimpleNamespace(b64_json=b64_json)])


def review_data(count=5):
    return [
        {
            "external_user": f"Reviewer {i}",
            "external_email": f"reviewer{i}@example.com",
            "title": f"Review {i}",
            "content": "Tastes great, would buy again.",
            "points": (i % 5) + 1,
            "status": True,
        }
        for i in range(count)
    ]


def product_data(name, with_reviews=True, option_ids=()):
    data = {
        "name": name,
        "description": f"<p>{name} is a refreshing product.</p>",
        "price": 2.49,
        "stock": 120,
    }
    if with_reviews:
        data["product_reviews"] = review_data()
    if option_ids:
        data["options"] = [{"id": option_id} for option_id in option_ids]
    return data
