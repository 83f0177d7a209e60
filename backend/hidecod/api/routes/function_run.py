"""Function Run — HTTP form of the checkout host boundary.

Invariants:
    - Body is any JSON value; malformed shapes degrade to "no change", never 4xx
    - Response shape is exactly {"operations": [...]}
    - The route only logs; the decision comes from core.run_input.run

Design Decisions:
    - Body typed as Any, not a Pydantic model: the host contract tolerates
      absent and mistyped fields, which a strict model would reject
"""

import logging
from typing import Any

from fastapi import APIRouter, Body

from hidecod.core.run_input import run

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/function", tags=["function"])


@router.post("/run")
async def run_function(payload: Any = Body(None)):
    """Evaluate one checkout and return hide operations."""
    result = run(payload)
    logger.info(
        "Function run evaluated",
        extra={"operations": len(result["operations"])},
    )
    return result
