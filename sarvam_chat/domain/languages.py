from typing import Dict, List

from pydantic import BaseModel, ConfigDict


class Language(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    native_name: str


SUPPORTED_LANGUAGES: List[Language] = [
    Language(code='en', name='English', native_name='English'),
    Language(code='hi', name='Hindi', native_name='हिन्दी'),
    Language(code='bn', name='Bengali', native_name='বাংলা'),
    Language(code='ta', name='Tamil', native_name='தமிழ்'),
    Language(code='te', name='Telugu', native_name='తెలుగు'),
    Language(code='mr', name='Marathi', native_name='मराठी'),
    Language(code='gu', name='Gujarati', native_name='ગુજરાતી'),
    Language(code='kn', name='Kannada', native_name='ಕನ್ನಡ'),
    Language(code='ml', name='Malayalam', native_name='മലയാളം'),
    Language(code='pa', name='Punjabi', native_name='ਪੰਜਾਬੀ'),
    Language(code='or', name='Odia', native_name='ଓଡ଼ିଆ'),
]

_BY_CODE: Dict[str, Language] = {lang.code: lang for lang in SUPPORTED_LANGUAGES}


def is_supported(code: str) -> bool:
    return code in _BY_CODE


def get_language_name(code: str) -> str:
    lang = _BY_CODE.get(code)
    return lang.name if lang else code
