from __future__ import annotations

# languages offered by the drafting wizard, value -> display label
LANGUAGES = {
    "English": "English",
    "Hindi": "हिन्दी (Hindi)",
    "Bengali": "বাংলা (Bengali)",
    "Telugu": "తెలుగు (Telugu)",
    "Marathi": "मराठी (Marathi)",
    "Tamil": "தமிழ் (Tamil)",
    "Gujarati": "ગુજરાતી (Gujarati)",
    "Kannada": "ಕನ್ನಡ (Kannada)",
    "Malayalam": "മലയാളം (Malayalam)",
    "Punjabi": "ਪੰਜਾਬੀ (Punjabi)",
    "Odia": "ଓଡ଼ିଆ (Odia)",
    "Assamese": "অসমীয়া (Assamese)",
    "Urdu": "اردو (Urdu)",
}

LANGUAGE_CODES = {
    "English": "en",
    "Hindi": "hi",
    "Bengali": "bn",
    "Telugu": "te",
    "Marathi": "mr",
    "Tamil": "ta",
    "Gujarati": "gu",
    "Kannada": "kn",
    "Malayalam": "ml",
    "Punjabi": "pa",
    "Odia": "or",
    "Assamese": "as",
    "Urdu": "ur",
}

DEFAULT_LANGUAGE = "English"


def normalize_language(value: str | None) -> str | None:
    """Match a user-typed language name case-insensitively; None if unsupported."""
    if not value:
        return None
    low = value.strip().lower()
    for name in LANGUAGES:
        if name.lower() == low:
            return name
    return None


def language_code(language: str) -> str:
    return LANGUAGE_CODES.get(language, language.strip().lower()[:2])
