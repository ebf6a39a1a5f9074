"""Language codes understood by the client and the translator."""

from typing import Dict

AUTO_DETECT = "auto"

# Interface languages offered on the language selection screen
INTERFACE_LANGUAGES: Dict[str, str] = {
    "en": "English",
    "hi": "हिन्दी",
    "mr": "मराठी",
    "gu": "ગુજરાતી",
    "kn": "ಕನ್ನಡ",
    "bn": "বাংলা",
    "te": "తెలుగు",
    "ml": "മലയാളം",
    "ur": "اردو",
}

# Names used in translation prompts
TRANSLATION_LANGUAGES: Dict[str, str] = {
    AUTO_DETECT: "Auto Detect",
    "en": "English",
    "hi": "Hindi",
    "mr": "Marathi",
    "gu": "Gujarati",
    "kn": "Kannada",
    "bn": "Bengali",
    "te": "Telugu",
    "ml": "Malayalam",
    "ta": "Tamil",
    "pa": "Punjabi",
    "or": "Odia",
    "ur": "Urdu",
}


def language_name(code: str) -> str:
    """Human readable name for ``code``, or the code itself when unknown."""
    return TRANSLATION_LANGUAGES.get(code, code)
