"""
Extractors package
"""

from .base_extractor import BaseExtractor, ConversationView
from .name_extractor import NameExtractor
from .date_extractor import DateExtractor
from .party_size_extractor import PartySizeExtractor
from .email_extractor import EmailExtractor
from .package_extractor import PackageExtractor
from .preference_extractor import PreferenceExtractor
from .budget_extractor import BudgetExtractor

__all__ = [
    "BaseExtractor",
    "ConversationView",
    "NameExtractor",
    "DateExtractor",
    "PartySizeExtractor",
    "EmailExtractor",
    "PackageExtractor",
    "PreferenceExtractor",
    "BudgetExtractor"
]
