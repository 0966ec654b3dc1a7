"""Localized user facing texts of the Solarprognose provider."""

from .constants import DEFAULT_LOCALE

BUNDLES = {
    "en": {
        "solarprognose.title.text": (
            "Solar power forecast from solarprognose.de. "
            "An access token and the id of your plant are required."
        ),
        "solarprognose.token.text": "Access token",
        "solarprognose.token.tooltip": "Access token of your solarprognose.de account",
        "solarprognose.token.error": "Please enter the access token",
        "solarprognose.elementid.text": "Element id",
        "solarprognose.elementid.tooltip": (
            "Numeric id of the plant, inverter or module field"
        ),
        "solarprognose.elementid.error": "Please enter a numeric element id",
        "solarprognose.algorithm.text": "Algorithm",
        "solarprognose.algorithm.tooltip": (
            "Forecast algorithm, leave empty for the account default"
        ),
        "solarprognose.item.text": "Item",
        "solarprognose.item.tooltip": "Type of the element: plant, inverter or module_field",
        "solarprognose.item.error": "Please enter the item type",
        "solarprognose.connection.successful": "Connection to Solarprognose successful",
    },
    "de": {
        "solarprognose.title.text": (
            "Solarprognose von solarprognose.de. "
            "Benötigt werden ein Zugangstoken und die Id der Anlage."
        ),
        "solarprognose.token.text": "Zugangstoken",
        "solarprognose.token.tooltip": "Zugangstoken Ihres solarprognose.de Kontos",
        "solarprognose.token.error": "Bitte geben Sie das Zugangstoken ein",
        "solarprognose.elementid.text": "Element-Id",
        "solarprognose.elementid.tooltip": (
            "Numerische Id der Anlage, des Wechselrichters oder des Modulfelds"
        ),
        "solarprognose.elementid.error": "Bitte geben Sie eine numerische Element-Id ein",
        "solarprognose.algorithm.text": "Algorithmus",
        "solarprognose.algorithm.tooltip": (
            "Prognose-Algorithmus, leer lassen für die Voreinstellung des Kontos"
        ),
        "solarprognose.item.text": "Element-Typ",
        "solarprognose.item.tooltip": "Typ des Elements: plant, inverter oder module_field",
        "solarprognose.item.error": "Bitte geben Sie den Element-Typ ein",
        "solarprognose.connection.successful": "Verbindung zu Solarprognose erfolgreich",
    },
}


def get_resource_bundle(locale=None):
    """
    Returns the message bundle for a locale such as 'de' or 'de_DE'.
    Unknown locales fall back to English.
    """
    language = (locale or DEFAULT_LOCALE).replace("-", "_").split("_")[0].lower()
    return BUNDLES.get(language, BUNDLES[DEFAULT_LOCALE])
