"""
Promotion definition loading from JSON files
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pydantic
from loguru import logger

from .models import Promotion
from .exceptions import LoaderError, ValidationError


class PromotionLoader:
    """
    Builds Promotion records from JSON definitions.

    A file holds either a list of promotion objects or an object with a
    ``promotions`` list. Definitions are only read, never written back.
    """

    def __init__(self, strict: bool = True):
        """
        Initialize promotion loader

        Args:
            strict: Raise on an invalid definition instead of logging and skipping it
        """
        self.strict = strict

    def parse_promotion(self, data: Dict[str, Any]) -> Promotion:
        """
        Parse one promotion definition

        Args:
            data: Raw definition, e.g. {"code": "SAVE10", "discount": {"kind": "percentage", "value": 10}, ...}

        Returns:
            Promotion object

        Raises:
            ValidationError: if the definition is malformed
        """
        try:
            return Promotion.model_validate(data)
        except pydantic.ValidationError as e:
            code = data.get('code', '<unknown>') if isinstance(data, dict) else '<unknown>'
            raise ValidationError(f"Invalid promotion definition {code}: {e}") from e

    def parse_promotions(self, records: Iterable[Dict[str, Any]]) -> List[Promotion]:
        """Parse many definitions, honouring strict mode"""
        promotions = []
        for index, record in enumerate(records):
            try:
                promotions.append(self.parse_promotion(record))
            except ValidationError as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping promotion definition #{index}: {e}")
        return promotions

    def load_file(self, file_path: Union[str, Path]) -> List[Promotion]:
        """
        Load all promotions from a JSON file

        Args:
            file_path: Path to JSON file

        Returns:
            List of Promotion objects
        """
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise LoaderError(f"Failed to read promotions from {file_path}: {e}") from e

        if isinstance(data, dict):
            data = data.get('promotions')
        if not isinstance(data, list):
            raise LoaderError(f"{file_path} must contain a list of promotions or a 'promotions' list")

        promotions = self.parse_promotions(data)
        logger.info(f"Loaded {len(promotions)} promotion(s) from {file_path.name}")
        return promotions

    def load_directory(self, directory: Union[str, Path]) -> List[Promotion]:
        """Load promotions from every ``*.json`` file in a directory, in name order"""
        directory = Path(directory)
        if not directory.is_dir():
            raise LoaderError(f"Promotions directory {directory} does not exist")

        promotions = []
        for json_file in sorted(directory.glob("*.json")):
            try:
                promotions.extend(self.load_file(json_file))
            except LoaderError as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping {json_file.name}: {e}")
        return promotions

    @staticmethod
    def find_by_code(promotions: Iterable[Promotion], code: str) -> Optional[Promotion]:
        """Return the first promotion with the given code, or None"""
        for promotion in promotions:
            if promotion.code == code:
                return promotion
        logger.debug(f"Promotion with code {code} not found")
        return None
