"""
Article export loader for News Digest.

Ingestion (RSS fetch, database reads) happens elsewhere; this reads the
records it exports as JSON or YAML.
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Union

import yaml

from newsdigest.core.article import Article

# Configure logging
logger = logging.getLogger(__name__)


class ArticleFileLoader:
    """
    Loads article records from a JSON or YAML export.
    """
    def __init__(self, path: Union[str, Path]):
        """
        Initialize the ArticleFileLoader.

        Args:
            path: Path to a .json, .yaml or .yml file
        """
        self.path = Path(path)

    def read_records(self) -> List[Any]:
        """
        Read raw records from the file.

        The file holds either a list of records or an object with an
        'items' (or 'articles') list.

        Returns:
            List of raw records

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the format is unsupported or the content malformed
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Article file not found: {self.path}")

        suffix = self.path.suffix.lower()
        with open(self.path, 'r', encoding='utf-8') as f:
            try:
                if suffix in ['.yaml', '.yml']:
                    data = yaml.safe_load(f)
                elif suffix == '.json':
                    data = json.load(f)
                else:
                    raise ValueError(f"Unsupported article file format: {suffix}")
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise ValueError(f"Malformed article file {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get('items', data.get('articles'))
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of articles in {self.path}")
        return data

    def load(self) -> List[Article]:
        """
        Load articles, skipping records that are not usable.

        Returns:
            List of Article objects
        """
        articles = []
        skipped = 0
        for index, record in enumerate(self.read_records()):
            if not isinstance(record, dict) or not record.get('title'):
                logger.warning(f"Skipping record {index} in {self.path}: no title")
                skipped += 1
                continue
            articles.append(Article.from_dict(record))

        logger.info(f"Loaded {len(articles)} articles from {self.path}"
                    + (f" ({skipped} skipped)" if skipped else ""))
        return articles


def load_articles(path: Union[str, Path]) -> List[Article]:
    return ArticleFileLoader(path).load()
