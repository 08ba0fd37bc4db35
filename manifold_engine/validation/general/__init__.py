"""
Validation rules that apply to every platform.

Each module in this folder is a rule file exporting ``rules`` and is
discovered by :func:`manifold_engine.validation.loader.load_validation_rules`.
"""

from pathlib import Path

GENERAL_RULES_DIR = Path(__file__).resolve().parent

__all__ = ["GENERAL_RULES_DIR"]
