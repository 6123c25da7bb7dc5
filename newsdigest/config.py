"""
Configuration management for News Digest.
"""
import os
import copy
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = 'NEWSDIGEST_'

# Default configuration
DEFAULT_CONFIG = {
    "relevance": {
        "keywords": [
            "KI", "AI", "künstliche intelligenz", "machine learning", "deep learning",
            "chatgpt", "openai", "google", "microsoft", "meta", "tesla", "nvidia",
            "startup", "tech", "innovation", "digitalisierung", "automation",
            "robotik", "algorithmus", "daten", "software", "hardware"
        ],
        "title_points": 3,
        "description_points": 1,
        "recency_buckets": [
            {"max_days": 1, "points": 5},
            {"max_days": 3, "points": 3},
            {"max_days": 7, "points": 1}
        ],
        "custom_source": "Eigener",
        "custom_source_bonus": 2,
        "trusted_sources": ["techcrunch", "wired", "ars technica", "the verge"],
        "trusted_source_bonus": 2,
        "minimum_score": 1
    },
    "profiles": {
        "default": {
            "trusted_sources": True
        },
        "database": {
            "trusted_sources": False
        },
        "student": {
            "trusted_sources": True,
            "bonus_keywords": ["student", "studium", "programmierung", "karriere", "job", "bildung"],
            "bonus_keyword_points": 1
        }
    },
    "clusters": {
        "Model Development": {
            "keywords": [
                "GPT-4", "Multimodalität", "Quantisierung", "RAG", "LLM", "Transformer",
                "Neural Networks", "Fine-tuning", "BERT", "Claude", "Llama"
            ],
            "description": "Progress in AI model development and architecture"
        },
        "Governance & Ethics": {
            "keywords": [
                "Bias", "Deepfakes", "Regulation", "EU AI Act", "Wahlbeeinflussung",
                "Fairness", "Transparenz", "Privacy", "Ethics", "GDPR"
            ],
            "description": "Ethical challenges and regulatory developments"
        },
        "Education & Learning": {
            "keywords": [
                "MOOCs", "Prompt Engineering", "Hochschule", "Feedback Tools", "E-Learning",
                "Tutoring", "Skills", "Training", "Coursera", "Khan Academy"
            ],
            "description": "AI in education and learning"
        },
        "Use Cases": {
            "keywords": [
                "Healthcare", "Legal Tech", "Industrie 4.0", "Art Generator", "Automotive",
                "Finance", "Retail", "Gaming", "Medicine", "Robotics"
            ],
            "description": "Practical applications of AI across industries"
        },
        "Geopolitical Dynamics": {
            "keywords": [
                "China", "USA", "BRICS", "EU", "Russland", "Sanctions", "Trade War",
                "Sovereignty", "Taiwan", "Export Controls"
            ],
            "description": "International AI policy and geopolitical tension"
        },
        "Economy & Market": {
            "keywords": [
                "Big Tech", "Startup Funding", "IPOs", "AI-as-a-Service", "Valuation", "M&A",
                "Investment", "Market Cap", "OpenAI", "Google", "Microsoft"
            ],
            "description": "Market developments and the business side of AI"
        }
    },
    "cluster_weights": {
        "high": ["GPT-4", "EU AI Act", "Deepfakes", "RAG", "Quantisierung", "Claude", "Llama"],
        "medium": ["Healthcare", "Legal Tech", "Startup Funding", "China", "USA", "OpenAI", "Google"],
        "high_points": 3,
        "medium_points": 2,
        "default_points": 1,
        "fallback": "Other"
    },
    "student": {
        "keywords": [
            "künstliche intelligenz", "ki", "ai", "machine learning", "deep learning",
            "technologie", "innovation", "startup", "tech", "digital",
            "student", "studium", "universität", "hochschule", "bildung", "karriere",
            "praktikum", "job", "ausbildung", "lernen", "weiterbildung",
            "programmierung", "coding", "software", "entwicklung", "web", "app",
            "python", "javascript", "react", "github", "open source",
            "zukunft", "trend", "forschung", "wissenschaft", "digitalisierung",
            "nachhaltigkeit", "fintech", "blockchain", "kryptowährung",
            "wirtschaft", "business", "unternehmen", "management", "marketing",
            "e-commerce", "online", "social media", "platform"
        ],
        "tech_sources": [
            "TechCrunch", "Wired", "Ars Technica", "The Verge", "MIT Technology Review",
            "Golem", "Heise", "t3n", "Gründerszene"
        ]
    },
    "labels": [
        {"min_score": 8, "label": "very relevant"},
        {"min_score": 5, "label": "relevant"},
        {"min_score": 3, "label": "moderately relevant"},
        {"min_score": 0, "label": "less relevant"}
    ],
    "output": {
        "top_n": 10,
        "top_tags": 5,
        "format": "json",
        "title": "Weekly AI Digest"
    }
}


class Config:
    """
    Configuration manager for News Digest.
    """
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the Config.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                path = Path(self.config_path)
                if path.exists():
                    if path.suffix.lower() in ['.yaml', '.yml']:
                        with open(path, 'r', encoding='utf-8') as f:
                            user_config = yaml.safe_load(f) or {}
                    elif path.suffix.lower() == '.json':
                        with open(path, 'r', encoding='utf-8') as f:
                            user_config = json.load(f)
                    else:
                        raise ValueError(f"Unsupported config file format: {path.suffix}")

                    if user_config is None:
                        user_config = {}
                    if not isinstance(user_config, dict):
                        raise ValueError(
                            f"Config file must contain a mapping, got {type(user_config).__name__}")

                    # Update config with user settings
                    self._update_dict(config, user_config)
                else:
                    logger.warning(f"Config file {self.config_path} not found, using defaults")
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.info("Using default configuration")

        # Override with environment variables
        self._override_from_env(config)

        return config

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = ENV_PREFIX) -> None:
        """
        Override configuration with environment variables.

        NEWSDIGEST_OUTPUT_TOP_N=5 sets config['output']['top_n']. Segments are
        matched greedily against existing keys so that keys containing
        underscores stay addressable.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in os.environ.items():
            if not key.startswith(prefix) or key == prefix + 'CONFIG_PATH':
                continue

            parts = key[len(prefix):].lower().split('_')

            # Navigate to the right place in the config
            current = config
            while len(parts) > 1:
                for size in range(len(parts) - 1, 0, -1):
                    candidate = '_'.join(parts[:size])
                    if isinstance(current.get(candidate), dict):
                        current = current[candidate]
                        parts = parts[size:]
                        break
                else:
                    break

            # Set the value
            try:
                # Try to parse as JSON
                current['_'.join(parts)] = json.loads(value)
            except json.JSONDecodeError:
                # If not valid JSON, use as string
                current['_'.join(parts)] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'output.top_n')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        parts = key.split('.')
        current = self.config

        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def save(self, path: Optional[str] = None) -> bool:
        """
        Save the current configuration to a file.

        Args:
            path: Path to save the configuration to

        Returns:
            True if successful, False otherwise
        """
        save_path = path or self.config_path
        if not save_path:
            logger.error("No path specified for saving configuration")
            return False

        try:
            path = Path(save_path)
            if path.suffix.lower() in ['.yaml', '.yml']:
                with open(path, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self.config, f, default_flow_style=False, allow_unicode=True)
            elif path.suffix.lower() == '.json':
                with open(path, 'w', encoding='utf-8') as f:
                    json.dump(self.config, f, indent=2, ensure_ascii=False)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error saving config to {save_path}: {e}")
            return False


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Build a Config from an explicit path or NEWSDIGEST_CONFIG_PATH.
    """
    return Config(config_path or os.getenv(ENV_PREFIX + 'CONFIG_PATH'))
