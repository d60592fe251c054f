"""
Package Extractor - keyword selection of the live package
"""

from typing import Optional, Dict, Any, List

from .base_extractor import BaseExtractor, ConversationView
from ..config.packages import LIVE_PACKAGE
from ..utils.patterns import PACKAGE_PROMPT_CUES


class PackageExtractor(BaseExtractor):
    """Select the live package when one of its keywords is mentioned"""

    field_name = "package"

    def __init__(self, package: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.package = package or LIVE_PACKAGE

    @property
    def keywords(self) -> List[str]:
        return self.package["keywords"]

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        if context.is_replying_to(PACKAGE_PROMPT_CUES) and self.mentions_package(message):
            return self._selected('prompt_reply')

        if self.mentions_package(context.full_text):
            return self._selected('transcript')
        return None

    def mentions_package(self, text: str) -> bool:
        lowered = (text or "").lower()
        return any(keyword in lowered for keyword in self.keywords)

    def _selected(self, method: str) -> Dict[str, Any]:
        return self.build_result(
            method,
            package=self.package["name"],
            destination=self.package["destination"],
        )
