"""
Base Parser

Abstract base class for workout export parsers.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Union
from .models import ParseResult, FileInfo

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for file parsers"""

    # utf-8-sig also reads plain utf-8
    ENCODINGS = ['utf-8-sig', 'cp1252']

    @abstractmethod
    def parse(self, content: Union[bytes, str], file_info: Optional[FileInfo] = None) -> ParseResult:
        """
        Parse file content and return grouped workout data.

        Args:
            content: Raw file bytes or already-decoded text
            file_info: Information about the file, if known

        Returns:
            ParseResult with workouts, errors and warnings
        """
        pass

    @abstractmethod
    def can_parse(self, file_info: FileInfo) -> bool:
        """
        Check if this parser can handle the given file.

        Args:
            file_info: Information about the file

        Returns:
            True if this parser can handle the file
        """
        pass

    def decode_content(self, content: Union[bytes, str]) -> str:
        """Decode bytes to string, trying multiple encodings"""
        if isinstance(content, str):
            return content.lstrip('\ufeff')

        for encoding in self.ENCODINGS:
            try:
                return content.decode(encoding)
            except UnicodeDecodeError:
                continue

        # latin-1 maps every byte
        return content.decode('latin-1')

    def add_error(self, errors: List[str], error: str):
        """Add an error message"""
        errors.append(error)
        logger.error(f"Parser error: {error}")

    def add_warning(self, warnings: List[str], warning: str):
        """Add a warning message"""
        warnings.append(warning)
        logger.warning(f"Parser warning: {warning}")
