from __future__ import annotations

from ..contracts_models import AnalysisResult

APP_TITLE = "Binnenmarkt Preisdetektiv"
APP_SUBTITLE = (
    "Laden Sie ein Bild eines Produkts hoch und erfahren Sie, "
    "wie viel Sie dank des EU-Binnenmarkts sparen."
)
UPLOAD_LABEL = "Produkt-Bild hochladen"
UPLOAD_HINT = "PNG, JPG, GIF bis zu 10MB"
UPLOAD_TYPES = ["png", "jpg", "jpeg", "gif", "webp", "heic", "heif"]
SUBMIT_LABEL = "Analysieren"
SUBMITTING_LABEL = "Analysiere..."
RESET_LABEL = "Zurücksetzen"
EXPLANATION_LABEL = "Erklärung:"


def made_in_eu_label(made_in_eu: bool) -> str:
    return "Wahrscheinlich ja" if made_in_eu else "Wahrscheinlich nein"


def submit_label(is_submitting: bool) -> str:
    return SUBMITTING_LABEL if is_submitting else SUBMIT_LABEL


def result_rows(result: AnalysisResult) -> list[tuple[str, str]]:
    return [
        ("Aktueller Preis:", result.current_price),
        ("Preis ohne EU-Binnenmarkt:", result.without_eu_price),
        ("Preisunterschied:", f"+{result.price_increase}"),
        ("In der EU produziert:", made_in_eu_label(result.made_in_eu)),
    ]
