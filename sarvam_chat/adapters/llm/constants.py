from enum import Enum


class Provider(str, Enum):
    SARVAM = 'sarvam'
    DUMMY = 'dummy'


class SarvamModels(str, Enum):
    CHAT_SAARTHI = 'chat-saarthi'


DEFAULT_API_URL = 'https://api.sarvam.ai/v1'
DEFAULT_CHAT_ENDPOINT = '/chat/completions'

DEFAULT_SYSTEM_PROMPT = (
    'You are Sarvam AI, a multilingual assistant for India. '
    'Respond with empathy, clarity, and cultural respect. '
    'Always answer in the language the user prefers.'
)

DEFAULT_FALLBACK_RESPONSE = (
    'I am unable to respond right now. Please try again in a moment.'
)

MISSING_API_KEY_MESSAGE = (
    'Sarvam API key is missing. Please configure SARVAM_API_KEY in your environment.'
)
EMPTY_RESPONSE_MESSAGE = 'Sarvam API returned an empty response.'
UPSTREAM_UNAVAILABLE_MESSAGE = 'Unable to fetch response from Sarvam API.'
UPSTREAM_UNEXPECTED_MESSAGE = 'Unexpected error while communicating with Sarvam API.'
