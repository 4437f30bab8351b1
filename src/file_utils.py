"""
File utility functions for the blog article client.
JSON state file reading for the local session backend.
"""
import json
import os
from typing import Any, Dict, Optional


def load_json_file(filepath: str, default: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Load a JSON file with a default fallback.

    Args:
        filepath: Path to the JSON file
        default: Default value if file doesn't exist

    Returns:
        Loaded JSON data or default value
    """
    if os.path.exists(filepath):
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    return default
