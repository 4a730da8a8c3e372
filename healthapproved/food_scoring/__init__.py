"""Packaged-food health scoring package.

This module contains:
- Token normalization of printed ingredient lists
- Pydantic schemas for scores and lookup responses
- A small, explicit rule engine computing score, status and reasons
- The lookup service resolving a barcode from the local catalog or
  Open Food Facts
"""

from .engine import compute_health_score
from .schemas import Highlight, LookupResponse, ScoreResult, ScoreStatus
from .tokens import extract_tokens, normalize_token
