from __future__ import annotations

import base64


ANALYZER_SYSTEM = """You are a product analyzer for the "Binnenmarkt Preisdetektiv" app.
Your job is to:
1. Identify the product in the image.
2. Estimate the current market price in the EU.
3. Estimate what the price would be without the EU internal market (with tariffs, higher production costs, less competition).
4. Provide a brief explanation (2-3 sentences) of why the EU internal market causes this price difference.
5. If the product is likely not produced in the EU, indicate that.

Format your response as JSON with the following fields:
{
  "productName": "Product name",
  "currentPrice": "Estimated current price with currency",
  "withoutEUPrice": "Estimated price without EU internal market",
  "priceIncrease": "Percentage increase",
  "explanation": "Brief explanation",
  "madeInEU": true/false
}

Du musst die Antwort auf Deutsch geben. Alle Felder müssen auf Deutsch sein. Preise sollten in Euro angegeben werden.
"""

ANALYZER_USER = (
    "Identifiziere dieses Produkt und analysiere seinen Preis im EU-Binnenmarkt "
    "im Vergleich zu ohne EU-Binnenmarkt."
)

DEFAULT_IMAGE_MIME = "image/jpeg"


def build_image_data_url(image_bytes: bytes, mime: str | None = None) -> str:
    if not mime or not mime.startswith("image/"):
        mime = DEFAULT_IMAGE_MIME
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def build_analysis_messages(image_bytes: bytes, mime: str | None = None) -> list[dict]:
    return [
        {"role": "system", "content": ANALYZER_SYSTEM},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": ANALYZER_USER},
                {
                    "type": "image_url",
                    "image_url": {"url": build_image_data_url(image_bytes, mime)},
                },
            ],
        },
    ]
