"""
Centralized regex patterns and keyword lists for extraction and intent detection
"""

# Month names as they appear in date literals
MONTH_NAMES = (
    r'jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec|'
    r'january|february|march|april|june|july|august|september|october|november|december'
)

# Date literal patterns, all scanned over the whole transcript
DATE_PATTERNS = {
    "iso": r'(\d{4}[-/]\d{1,2}[-/]\d{1,2})',
    "numeric": r'(\d{1,2}[-/]\d{1,2}[-/]\d{4})',
    "day_of_month": rf'(\d{{1,2}}(?:st|nd|rd|th)?\s+of\s+(?:{MONTH_NAMES})\s+\d{{4}})',
    "day_month": rf'(\d{{1,2}}(?:st|nd|rd|th)?\s+(?:{MONTH_NAMES})\s+\d{{4}})',
    "month_day": rf'((?:{MONTH_NAMES})\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}})',
}

# Email pattern
EMAIL_PATTERN = r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}'

# Name patterns, in priority order
NAME_PATTERNS = [
    r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)\b',
    r'(?i:my name is)\s+([A-Za-z][a-z]+(?:\s+[A-Za-z][a-z]+){0,3})',
    r'(?i:\bi am)\s+([A-Za-z][a-z]+(?:\s+[A-Za-z][a-z]+){0,3})',
    r"(?i:\bi'm)\s+([A-Za-z][a-z]+(?:\s+[A-Za-z][a-z]+){0,3})",
]

# Party size
PEOPLE_WORDS = r'person|people|pax|traveller|traveler|adult|guest|passenger'

PEOPLE_PATTERNS = [
    rf'(\d+)\s*(?:{PEOPLE_WORDS})',
    r'(?:we are|there are|party of|group of)\s+(\d+)',
    rf'(?:for|booking for)\s+(\d+)\s*(?:{PEOPLE_WORDS})?',
    rf'(?:how many|number of)\s+(?:{PEOPLE_WORDS})s?\s*(?:are|will|do|would)?\s*(?:you|we|there)?\s*(?:be)?\s*(\d+)',
    rf'\b(\d{{1,2}})\b(?=\s*(?:{PEOPLE_WORDS}|tourist))',
]

# Context checks around a party-size candidate
DATE_CONTEXT_PATTERN = r'\d/\d'
CURRENCY_CONTEXT_PATTERN = r'(?:\b(?:rs|rupees|usd|dollars)\b|[$₹€£])'
TIME_CONTEXT_PATTERN = r':\d'
PARTY_CONTEXT_CHARS = 10

# Standalone 1-2 digit number that is not part of a date or time
STANDALONE_NUMBER_PATTERN = r'(?<![/.:\-\d])\b(\d{1,2})\b(?![/.:\-]\d)'
FIRST_NUMBER_PATTERN = r'\b(\d{1,2})\b'

# Correction: "no for 3 people", "no, 4"
CORRECTION_NUMBER_PATTERN = r'(\d+)\s*(?:people?|person|guest|pax|traveler|traveller)'

# Budget / price mentions
CURRENCY_WORDS = r'rs|rupees|usd|dollars|\$|₹'
AMOUNT = r'(\d+(?:,\d{3})*(?:\.\d{2})?)'
PRICE_PATTERNS = [
    rf'{AMOUNT}\s*(?:{CURRENCY_WORDS})',
    rf'(?:budget|price|cost|rate).{{0,20}}?{AMOUNT}',
    rf'{AMOUNT}\s*(?:per person|total|for all)',
    rf'(?:{CURRENCY_WORDS})\s*{AMOUNT}',
]

# Preference tags
PREFERENCE_KEYWORDS = [
    'beach', 'culture', 'adventure', 'relaxation', 'food',
    'shopping', 'spa', 'temple', 'volcano', 'rice terrace'
]

# Cues in the previous bot message
NAME_PROMPT_CUES = ['full name', 'name?']
PACKAGE_PROMPT_CUES = ['package']
EMAIL_PROMPT_CUES = ['email', 'e-mail']
GUESTS_PROMPT_CUES = ['people will be traveling', 'people will be travelling']

# Intent keywords
GREETINGS = ['hello', 'hi', 'hey', 'good morning', 'good afternoon', 'good evening']

INTENT_KEYWORDS = {
    "price_inquiry": ['price', 'cost', 'rate', 'quote', 'inquiry', 'budget'],
    "travel_document": [
        'passport', 'visa', 'document', 'documents', 'id proof', 'identity proof',
        'travel insurance', 'vaccination', 'immigration', 'e-visa', 'evisa',
        'visa on arrival',
    ],
    "booking_info": [
        'book', 'booking', 'reserve', 'travel', 'trip', 'package',
        'p001', 'bali', 'person', 'people', 'pax',
        'date', 'when', 'from', 'to', 'start', 'end'
    ],
}

FINALIZE_COMMANDS = ['finalize', 'finalise']
BOOK_TRIP_COMMANDS = ['book my trip', 'book trip', 'book']
BOOK_TRIP_NOW_COMMANDS = ['book my trip now']

# Phrases that start the in-chat booking collection
BOOKING_START_PHRASES = ['ready for this package', 'ready to book']
